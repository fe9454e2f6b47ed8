"""Memory module: RAM and the built-in font."""

from .font import FONT, FONT_START, GLYPH_SIZE, glyph_address
from .ram import MEMORY_SIZE, RAM

__all__ = ["FONT", "FONT_START", "GLYPH_SIZE", "MEMORY_SIZE", "RAM", "glyph_address"]
