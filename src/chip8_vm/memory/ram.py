"""RAM: bytearray-backed 4 KiB address space."""

from __future__ import annotations

from ..errors import MemoryAccessError

MEMORY_SIZE = 4096


class RAM:
    """Byte-addressable RAM covering the whole CHIP-8 address space."""

    def __init__(self, size: int = MEMORY_SIZE) -> None:
        self.size = size
        self._data = bytearray(size)

    def check(self, addr: int, width: int, pc: int | None = None) -> None:
        """Raise MemoryAccessError unless [addr, addr+width) lies in RAM.

        `pc` is attached to the error when the access comes from an
        executing instruction.
        """
        if addr < 0 or addr + width > self.size:
            raise MemoryAccessError(
                f"Access out of bounds: 0x{addr:04X} (+{width})", pc
            )

    def read8(self, addr: int) -> int:
        """Read an unsigned byte."""
        self.check(addr, 1)
        return self._data[addr]

    def read16(self, addr: int) -> int:
        """Read an unsigned 16-bit word (big-endian)."""
        self.check(addr, 2)
        return (self._data[addr] << 8) | self._data[addr + 1]

    def write8(self, addr: int, value: int) -> None:
        """Write a byte."""
        self.check(addr, 1)
        self._data[addr] = value & 0xFF

    def write16(self, addr: int, value: int) -> None:
        """Write a 16-bit word (big-endian)."""
        self.check(addr, 2)
        self._data[addr] = (value >> 8) & 0xFF
        self._data[addr + 1] = value & 0xFF

    def read_block(self, addr: int, length: int) -> bytes:
        """Read `length` bytes starting at `addr`."""
        self.check(addr, length)
        return bytes(self._data[addr:addr + length])

    def load_segment(self, addr: int, data: bytes) -> None:
        """Bulk-load bytes into RAM at an absolute address.

        Copies the entire `data` buffer into memory starting at `addr`.
        Nothing is written if the segment would extend beyond RAM.

        Args:
            addr: Start address for the load.
            data: Raw bytes to copy into memory.

        Raises:
            MemoryAccessError: If the segment does not fit.
        """
        self.check(addr, len(data))
        self._data[addr:addr + len(data)] = data

    def clear(self) -> None:
        """Zero the whole address space."""
        self._data[:] = bytes(self.size)

    def dump(self) -> bytes:
        """Return a copy of the full memory contents."""
        return bytes(self._data)
