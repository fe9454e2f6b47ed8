"""Monochrome framebuffer with XOR sprite blitting."""

from __future__ import annotations

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
SPRITE_WIDTH = 8


class Framebuffer:
    """Row-major grid of boolean pixels.

    Only ``clear`` and ``draw_sprite`` mutate the grid. Sprite pixels
    wrap around both edges, so a sprite drawn past the right or bottom
    edge reappears on the opposite side.
    """

    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT) -> None:
        self.width = width
        self.height = height
        self._pixels: list[bool] = [False] * (width * height)

    def clear(self) -> None:
        """Turn every pixel off."""
        self._pixels = [False] * (self.width * self.height)

    def draw_sprite(self, x: int, y: int, sprite: bytes) -> bool:
        """XOR an 8-pixel-wide sprite onto the grid.

        Each byte of `sprite` is one row, most significant bit leftmost.

        Args:
            x: Column of the sprite's top-left corner (wrapped).
            y: Row of the sprite's top-left corner (wrapped).
            sprite: Row bytes, top to bottom.

        Returns:
            True if any set pixel was turned off (collision).
        """
        collision = False
        for row, bits in enumerate(sprite):
            py = (y + row) % self.height
            base = py * self.width
            for col in range(SPRITE_WIDTH):
                if not bits & (0x80 >> col):
                    continue
                idx = base + (x + col) % self.width
                if self._pixels[idx]:
                    collision = True
                self._pixels[idx] = not self._pixels[idx]
        return collision

    def pixel(self, x: int, y: int) -> bool:
        """Read one pixel. Raises IndexError outside the grid."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel out of range: ({x}, {y})")
        return self._pixels[y * self.width + x]

    def view(self) -> tuple[tuple[bool, ...], ...]:
        """Immutable snapshot of the grid as a tuple of rows."""
        w = self.width
        return tuple(
            tuple(self._pixels[r * w:(r + 1) * w]) for r in range(self.height)
        )

    def to_bytes(self) -> bytes:
        """One byte (0 or 1) per pixel, row-major."""
        return bytes(1 if p else 0 for p in self._pixels)

    def lit_count(self) -> int:
        """Number of pixels currently on."""
        return sum(self._pixels)
