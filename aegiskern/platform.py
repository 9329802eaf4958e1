"""Memory map, MMIO addresses and timer settings of the QEMU ``virt`` machine."""

# GIC (Generic Interrupt Controller)
GICD_BASE = 0x0800_0000
"""GIC Distributor base address."""
GICC_BASE = 0x0801_0000
"""GIC CPU interface base address."""

# UART
UART0_BASE = 0x0900_0000
"""PL011 UART0 data register address."""

# RAM
RAM_BASE = 0x4000_0000
"""Physical RAM base address."""
KERNEL_BASE = 0x4008_0000
"""Kernel load address."""

# Timer
TIMER_INTID = 30
"""GIC INTID of the EL1 physical timer (PPI 14)."""
TICK_MS = 10
"""Default tick interval in milliseconds."""
TIMER_FREQ_HZ = 62_500_000
"""Timer frequency in Hz."""

# ELF load region
ELF_LOAD_BASE = 0x4010_0000
"""Base address of the ELF load region."""
ELF_LOAD_SIZE_PER_TASK = 16 * 1024
"""Size of one task's ELF slot (16 KiB)."""
MAX_ELF_TASKS = 6
"""Number of ELF task slots."""
ELF_FIRST_TASK_ID = 2
"""First task id that can hold an ELF binary; tasks 0 and 1 are kernel tasks."""


def elf_load_addr(slot: int) -> int:
    """Return the load address of ELF slot ``slot`` (0-indexed)."""
    if slot < 0:
        raise ValueError(f"ELF slot must be non-negative, got {slot}")
    return ELF_LOAD_BASE + slot * ELF_LOAD_SIZE_PER_TASK