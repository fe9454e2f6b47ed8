"""Compatibility modes for behaviour that differs between CHIP-8 revisions."""

from __future__ import annotations

from dataclasses import dataclass

DISPLAY_HEIGHTS = (32, 64)


@dataclass(frozen=True)
class Quirks:
    """Selects between historical variants of ambiguous instructions.

    Attributes:
        shift_uses_vy: When False (default), 8xy6/8xyE shift Vx in place.
            When True, Vx receives Vy shifted and VF comes from Vy.
        display_height: Framebuffer rows, 32 (default) or 64.
    """

    shift_uses_vy: bool = False
    display_height: int = 32

    def __post_init__(self) -> None:
        if self.display_height not in DISPLAY_HEIGHTS:
            raise ValueError(
                f"display_height must be one of {DISPLAY_HEIGHTS}, "
                f"got {self.display_height}"
            )
