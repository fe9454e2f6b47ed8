"""Hex keypad: 16 held-key states plus a single-slot press latch."""

from __future__ import annotations

from ..errors import InvalidKeyError

NUM_KEYS = 16


class Keypad:
    """Tracks which of the 16 keys are held and the most recent press.

    ``last_pressed`` records the index of the last key to go from
    released to held. It holds one value only: a newer press overwrites
    an unconsumed one, and the CPU clears it after every cycle.
    """

    def __init__(self) -> None:
        self._held: list[bool] = [False] * NUM_KEYS
        self.last_pressed: int | None = None

    @staticmethod
    def check(index: int, pc: int | None = None) -> None:
        if not 0 <= index < NUM_KEYS:
            raise InvalidKeyError(f"Invalid key index: {index}", pc)

    def set_key(self, index: int, pressed: bool) -> None:
        """Update a key's held state, latching released-to-held transitions.

        Raises:
            InvalidKeyError: If `index` is outside 0-15.
        """
        self.check(index)
        if pressed and not self._held[index]:
            self.last_pressed = index
        self._held[index] = pressed

    def is_pressed(self, index: int, pc: int | None = None) -> bool:
        self.check(index, pc)
        return self._held[index]

    def clear_latch(self) -> None:
        self.last_pressed = None

    def held(self) -> list[int]:
        """Indices of keys currently held, ascending."""
        return [i for i, down in enumerate(self._held) if down]

    def reset(self) -> None:
        self._held = [False] * NUM_KEYS
        self.last_pressed = None
