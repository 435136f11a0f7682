"""Bus capability and flat memory backing store for the 6502 emulator.

The CPU only ever talks to a :class:`Bus` through ``read`` and ``write``. The
address space is the full 64 KiB range, and every address must be readable
and writable; implementations never signal errors from these two calls.
"""

from __future__ import annotations

ADDRESS_SPACE = 0x10000


def _mask16(value: int) -> int:
    """Clamp ``value`` to the 16-bit address space expected by the 6502."""

    return value & 0xFFFF


class BusError(Exception):
    """Raised when memory is initialised with data that does not fit."""


class Bus:
    """Interface for objects that back the CPU address space."""

    def read(self, address: int) -> int:  # pragma: no cover - interface
        raise NotImplementedError

    def write(self, address: int, value: int) -> None:  # pragma: no cover - interface
        raise NotImplementedError


class SimpleBus(Bus):
    """Flat, zero-initialised 64 KiB RAM with no device mapping."""

    def __init__(self) -> None:
        self._data = bytearray(ADDRESS_SPACE)

    def read(self, address: int) -> int:
        return self._data[_mask16(address)]

    def write(self, address: int, value: int) -> None:
        self._data[_mask16(address)] = value & 0xFF

    def load_image(self, data: bytes, start: int) -> None:
        """Copy ``data`` into memory starting at ``start``."""

        start = _mask16(start)
        end = start + len(data)
        if end > ADDRESS_SPACE:
            raise BusError(
                f"image of {len(data)} bytes at {start:#06x} exceeds the 64 KiB address space")
        self._data[start:end] = data

    def snapshot(self, start: int = 0, length: int = ADDRESS_SPACE) -> bytes:
        """Return a copy of ``length`` bytes starting at ``start``."""

        start = _mask16(start)
        return bytes(self._data[start:start + length])
