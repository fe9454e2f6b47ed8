"""Register file: 16 x 8-bit general purpose registers V0-VF."""

from ..errors import InvalidRegisterError

NUM_REGISTERS = 16
VF = 0xF


class RegisterFile:
    """16 general-purpose registers. VF doubles as the flag register."""

    def __init__(self) -> None:
        self._regs: list[int] = [0] * NUM_REGISTERS

    def _check(self, index: int) -> None:
        if not 0 <= index < NUM_REGISTERS:
            raise InvalidRegisterError(f"Invalid register index: {index}")

    def read(self, index: int) -> int:
        """Read register value."""
        self._check(index)
        return self._regs[index]

    def write(self, index: int, value: int) -> None:
        """Write register value. Value masked to 8 bits."""
        self._check(index)
        self._regs[index] = value & 0xFF

    def reset(self) -> None:
        self._regs = [0] * NUM_REGISTERS

    def snapshot(self) -> list[int]:
        """Copy of all 16 register values."""
        return list(self._regs)
