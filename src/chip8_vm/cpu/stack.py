"""Call stack: 16 return-address slots with an explicit stack pointer."""

from __future__ import annotations

from ..errors import StackOverflowError, StackUnderflowError

STACK_DEPTH = 16


class CallStack:
    """Fixed-depth stack of 16-bit return addresses.

    ``sp`` is the number of occupied slots, always in [0, 16]. Pushing
    onto a full stack and popping an empty one raise instead of wrapping.
    """

    def __init__(self) -> None:
        self.slots: list[int] = [0] * STACK_DEPTH
        self.sp: int = 0

    @property
    def full(self) -> bool:
        return self.sp >= STACK_DEPTH

    @property
    def empty(self) -> bool:
        return self.sp == 0

    def push(self, addr: int, pc: int | None = None) -> None:
        """Push a return address.

        Raises:
            StackOverflowError: If all slots are in use.
        """
        if self.full:
            raise StackOverflowError("Stack overflow", pc)
        self.slots[self.sp] = addr & 0xFFFF
        self.sp += 1

    def pop(self, pc: int | None = None) -> int:
        """Pop and return the most recent return address.

        Raises:
            StackUnderflowError: If the stack is empty.
        """
        if self.empty:
            raise StackUnderflowError("Stack underflow", pc)
        self.sp -= 1
        addr = self.slots[self.sp]
        self.slots[self.sp] = 0
        return addr

    def reset(self) -> None:
        self.slots = [0] * STACK_DEPTH
        self.sp = 0

    def frames(self) -> list[int]:
        """Occupied slots, oldest first."""
        return self.slots[:self.sp]
