"""Delay and sound timers, decremented at 60 Hz by the host."""

TIMER_HZ = 60


class Timers:
    """Two independent 8-bit down-counters that stop at zero."""

    def __init__(self) -> None:
        self.delay: int = 0
        self.sound: int = 0

    def tick(self) -> None:
        """Decrement both timers by one, floored at zero."""
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

    def reset(self) -> None:
        self.delay = 0
        self.sound = 0
