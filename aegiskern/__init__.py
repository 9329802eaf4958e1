"""Host-side model of a small AArch64 microkernel: platform memory map, MMU layout, UART output, syscall ABI and demo user tasks."""

__version__ = "0.1.0"
__all__ = ["mmu", "platform", "syscalls", "tasks", "uart"]