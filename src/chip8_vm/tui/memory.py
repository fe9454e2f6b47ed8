"""TUI memory hex dump panel: formats memory regions as hex dumps."""

from __future__ import annotations

from ..errors import MemoryAccessError
from ..memory.ram import RAM


def format_hex_dump(memory: RAM, start_addr: int, num_rows: int = 16) -> str:
    """Format a memory region as a hex dump with addresses, hex bytes, and ASCII.

    Each row displays 16 bytes in the format:
        ADDR: HH HH HH HH HH HH HH HH  HH HH HH HH HH HH HH HH  |ASCII...........|

    Addresses past the end of memory show '??' and '.'.

    Args:
        memory: The RAM to read from.
        start_addr: The starting address of the hex dump (will be aligned
            down to a 16-byte boundary).
        num_rows: Number of 16-byte rows to display.

    Returns:
        A multi-line string suitable for display in a Rich Panel.
    """
    aligned_addr = start_addr & ~0xF
    lines: list[str] = []

    for row in range(num_rows):
        row_addr = aligned_addr + row * 16
        hex_parts: list[str] = []
        ascii_parts: list[str] = []

        for col in range(16):
            try:
                byte_val = memory.read8(row_addr + col)
                hex_parts.append(f"{byte_val:02X}")
                if 0x20 <= byte_val <= 0x7E:
                    ascii_parts.append(chr(byte_val))
                else:
                    ascii_parts.append(".")
            except MemoryAccessError:
                hex_parts.append("??")
                ascii_parts.append(".")

            if col == 7:
                hex_parts.append("")

        hex_str = " ".join(hex_parts)
        ascii_str = "".join(ascii_parts)
        lines.append(f"0x{row_addr:03X}: {hex_str}  |{ascii_str}|")

    return "\n".join(lines)
