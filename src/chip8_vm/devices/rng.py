"""Random byte sources for the Cxkk instruction."""

from __future__ import annotations

import random
from typing import Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """Anything that can produce a uniformly distributed byte."""

    def next_byte(self) -> int:
        """Return an integer in [0, 255]."""
        ...


class SystemRandomSource:
    """RandomSource backed by ``random.Random``, optionally seeded."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def next_byte(self) -> int:
        return self._rng.getrandbits(8)
