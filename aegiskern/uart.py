"""Byte-oriented serial output with hexadecimal and decimal printing."""

from __future__ import annotations

import io
from typing import BinaryIO

_U64_MAX = (1 << 64) - 1


def _check_u64(val: int) -> None:
    if not 0 <= val <= _U64_MAX:
        raise ValueError(f"value must fit in 64 unsigned bits, got {val}")


def format_hex(val: int) -> str:
    """Return ``val`` as 16 upper-case hexadecimal digits."""
    _check_u64(val)
    return f"{val:016X}"


def format_dec(val: int) -> str:
    """Return ``val`` in decimal."""
    _check_u64(val)
    return str(val)


class Uart:
    """A serial port writing bytes to a binary stream (an in-memory buffer by default)."""

    def __init__(self, stream: BinaryIO | None = None) -> None:
        self.stream: BinaryIO = stream if stream is not None else io.BytesIO()

    def write(self, byte: int) -> None:
        """Write a single byte."""
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"byte out of range: {byte}")
        self.stream.write(bytes((byte,)))

    def print(self, s: str) -> None:
        """Write a string as UTF-8."""
        self.stream.write(s.encode("utf-8"))

    def print_hex(self, val: int) -> None:
        """Write a 64-bit value as 16 hexadecimal digits."""
        self.print(format_hex(val))

    def print_dec(self, val: int) -> None:
        """Write a 64-bit value in decimal."""
        self.print(format_dec(val))