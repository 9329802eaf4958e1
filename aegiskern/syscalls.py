"""User-space system call interface.

A system call is described by a :class:`SyscallRequest`. User programs are
generators that yield requests to the kernel and receive the call's result
(the value of ``x0``, or a pair for :func:`syscall_recv2`) from ``send``.

Register ABI: ``x7`` holds the call number, ``x6`` the endpoint or target
task, and ``x0``-``x3`` the payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

_U64_MAX = (1 << 64) - 1


class Syscall(IntEnum):
    """System call numbers."""

    YIELD = 0
    SEND = 1
    RECV = 2
    CALL = 3
    WRITE = 4
    NOTIFY = 5
    WAIT_NOTIFY = 6
    GRANT_CREATE = 7
    GRANT_REVOKE = 8
    IRQ_BIND = 9
    IRQ_ACK = 10
    DEVICE_MAP = 11
    HEARTBEAT = 12
    EXIT = 13


def _u64(name: str, value: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if not 0 <= value <= _U64_MAX:
        raise ValueError(f"{name} must fit in 64 unsigned bits, got {value}")
    return value


@dataclass(frozen=True)
class SyscallRequest:
    """One system call as issued by a user task.

    ``args`` are the payload registers starting at ``x0``; ``endpoint`` goes
    in ``x6``. For a write the buffer is ``data`` and its length goes in
    ``x1``. ``results`` is how many result registers the call hands back,
    and ``returns`` is false for a call that never returns.
    """

    number: Syscall
    args: tuple[int, ...] = ()
    endpoint: int | None = None
    data: bytes | None = None
    results: int = 0
    returns: bool = True

    def registers(self) -> dict[str, int]:
        """Return the integer register values this call loads, by register name."""
        regs = {f"x{i}": value for i, value in enumerate(self.args)}
        if self.data is not None:
            regs["x1"] = len(self.data)
        if self.endpoint is not None:
            regs["x6"] = self.endpoint
        regs["x7"] = int(self.number)
        return regs


def syscall_yield() -> SyscallRequest:
    """Voluntarily give up the CPU."""
    return SyscallRequest(Syscall.YIELD)


def syscall_send(ep_id: int, m0: int, m1: int, m2: int, m3: int) -> SyscallRequest:
    """Send a four-word message on endpoint ``ep_id``."""
    return SyscallRequest(
        Syscall.SEND,
        args=(_u64("m0", m0), _u64("m1", m1), _u64("m2", m2), _u64("m3", m3)),
        endpoint=_u64("ep_id", ep_id),
    )


def syscall_recv(ep_id: int) -> SyscallRequest:
    """Receive a message on ``ep_id``; the result is the first message word."""
    return SyscallRequest(Syscall.RECV, endpoint=_u64("ep_id", ep_id), results=1)


def syscall_recv2(ep_id: int) -> SyscallRequest:
    """Receive a message on ``ep_id``; the result is the first two message words."""
    return SyscallRequest(Syscall.RECV, endpoint=_u64("ep_id", ep_id), results=2)


def syscall_call(ep_id: int, m0: int, m1: int, m2: int, m3: int) -> SyscallRequest:
    """Send a message on ``ep_id`` and wait for the reply's first word."""
    return SyscallRequest(
        Syscall.CALL,
        args=(_u64("m0", m0), _u64("m1", m1), _u64("m2", m2), _u64("m3", m3)),
        endpoint=_u64("ep_id", ep_id),
        results=1,
    )


def syscall_write(data: bytes) -> SyscallRequest:
    """Write raw bytes to the console through the kernel."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"data must be bytes-like, got {type(data).__name__}")
    return SyscallRequest(Syscall.WRITE, data=bytes(data))


def write_str(s: str) -> SyscallRequest:
    """Write a string, encoded as UTF-8, to the console."""
    return syscall_write(s.encode("utf-8"))


def syscall_notify(target_id: int, bits: int) -> SyscallRequest:
    """Send a notification bitmask to task ``target_id``."""
    return SyscallRequest(
        Syscall.NOTIFY, args=(_u64("bits", bits),), endpoint=_u64("target_id", target_id)
    )


def syscall_wait_notify() -> SyscallRequest:
    """Block until a notification arrives; the result is the pending bitmask."""
    return SyscallRequest(Syscall.WAIT_NOTIFY, results=1)


def syscall_grant_create(grant_id: int, peer_task_id: int) -> SyscallRequest:
    """Create shared-memory grant ``grant_id`` for ``peer_task_id``."""
    return SyscallRequest(
        Syscall.GRANT_CREATE,
        args=(_u64("grant_id", grant_id),),
        endpoint=_u64("peer_task_id", peer_task_id),
        results=1,
    )


def syscall_grant_revoke(grant_id: int) -> SyscallRequest:
    """Revoke shared-memory grant ``grant_id``."""
    return SyscallRequest(
        Syscall.GRANT_REVOKE, args=(_u64("grant_id", grant_id),), results=1
    )


def syscall_irq_bind(intid: int, notify_bit: int) -> SyscallRequest:
    """Bind interrupt ``intid`` (an SPI, 32 or above) to a notification bit."""
    return SyscallRequest(
        Syscall.IRQ_BIND,
        args=(_u64("intid", intid), _u64("notify_bit", notify_bit)),
        results=1,
    )


def syscall_irq_ack(intid: int) -> SyscallRequest:
    """Acknowledge that interrupt ``intid`` was handled."""
    return SyscallRequest(Syscall.IRQ_ACK, args=(_u64("intid", intid),), results=1)


def syscall_device_map(device_id: int) -> SyscallRequest:
    """Map the MMIO region of ``device_id`` (0 is UART0) into the task."""
    return SyscallRequest(
        Syscall.DEVICE_MAP, args=(_u64("device_id", device_id),), results=1
    )


def syscall_heartbeat(interval: int) -> SyscallRequest:
    """Register or refresh the watchdog heartbeat; an interval of 0 disables it."""
    return SyscallRequest(
        Syscall.HEARTBEAT, args=(_u64("interval", interval),), results=1
    )


def syscall_exit(code: int) -> SyscallRequest:
    """End the task with ``code``; this call never returns."""
    return SyscallRequest(Syscall.EXIT, args=(_u64("code", code),), returns=False)