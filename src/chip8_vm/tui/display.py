"""Text rendering of the framebuffer and keypad."""

from __future__ import annotations

from collections.abc import Sequence

from ..devices.keypad import Keypad

PIXEL_ON = "██"
PIXEL_OFF = "  "

# Physical layout of the COSMAC VIP hex keypad
KEYPAD_LAYOUT: list[list[int]] = [
    [0x1, 0x2, 0x3, 0xC],
    [0x4, 0x5, 0x6, 0xD],
    [0x7, 0x8, 0x9, 0xE],
    [0xA, 0x0, 0xB, 0xF],
]


def format_screen(
    frame: Sequence[Sequence[bool]],
    on: str = PIXEL_ON,
    off: str = PIXEL_OFF,
) -> str:
    """Render a framebuffer snapshot as text, one line per row.

    Each pixel becomes two characters wide so the 2:1 aspect of a
    terminal cell roughly squares it up.

    Args:
        frame: Rows of booleans, as returned by ``CPU.framebuffer``.
        on: Text for a lit pixel.
        off: Text for a dark pixel.
    """
    return "\n".join("".join(on if px else off for px in row) for row in frame)


def format_keypad(keypad: Keypad) -> str:
    """Render the 4x4 keypad with held keys highlighted (Rich markup)."""
    held = set(keypad.held())
    lines: list[str] = []
    for row in KEYPAD_LAYOUT:
        parts: list[str] = []
        for key in row:
            if key in held:
                parts.append(f"[reverse] {key:X} [/reverse]")
            else:
                parts.append(f" {key:X} ")
        lines.append(" ".join(parts))
    return "\n".join(lines)
