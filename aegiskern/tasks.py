"""The demo user programs, written as generators of system call requests.

Each program yields :class:`~aegiskern.syscalls.SyscallRequest` objects; the
kernel sends back the call's result with ``generator.send``.
"""

from __future__ import annotations

from collections.abc import Generator

from .syscalls import (
    SyscallRequest,
    syscall_exit,
    syscall_recv,
    syscall_send,
    syscall_write,
    syscall_yield,
    write_str,
)

TaskProgram = Generator[SyscallRequest, object, None]

_U64_MASK = (1 << 64) - 1
_HEX_DIGITS = "0123456789abcdef"

SENSOR_ENDPOINT = 1
"""Endpoint on which the sensor sends and the logger receives."""
SENSOR_TAG = 0xCAFE
"""Tag word sent in ``x1`` with every sensor reading."""


def nibble_char(value: int) -> str:
    """Return the lower-case hexadecimal digit of the low four bits of ``value``."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"value must be an int, got {type(value).__name__}")
    if not 0 <= value <= _U64_MASK:
        raise ValueError(f"value must fit in 64 unsigned bits, got {value}")
    return _HEX_DIGITS[value & 0xF]


def hello_task() -> TaskProgram:
    """Print a greeting, yield twice, then exit with code 0."""
    yield write_str("L5:ELF ")
    yield syscall_yield()
    yield syscall_yield()
    yield syscall_exit(0)


def sensor_task() -> TaskProgram:
    """Send an increasing counter as simulated sensor readings, forever."""
    yield write_str("SENSOR:init ")
    counter = 0
    while True:
        yield syscall_send(SENSOR_ENDPOINT, counter, SENSOR_TAG, 0, 0)
        yield write_str("S ")
        counter = (counter + 1) & _U64_MASK
        yield syscall_yield()


def logger_task() -> TaskProgram:
    """Receive readings and log the low hex digit of each, forever."""
    yield write_str("LOGGER:init ")
    while True:
        reading = yield syscall_recv(SENSOR_ENDPOINT)
        yield write_str("LOG:")
        yield syscall_write(nibble_char(reading).encode("ascii"))
        yield write_str(" ")
        yield syscall_yield()