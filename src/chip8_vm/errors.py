"""Error types raised by the CHIP-8 virtual machine."""

from __future__ import annotations


class Chip8Error(Exception):
    """Base error for chip8-vm."""
    pass


class LoadError(Chip8Error):
    """ROM image does not fit in program memory."""
    pass


class DecodeError(Chip8Error):
    """Opcode word matches no known instruction pattern."""

    def __init__(self, word: int, pc: int) -> None:
        super().__init__(f"Unknown opcode: 0x{word:04X} at 0x{pc:03X}")
        self.word = word
        self.pc = pc


class ExecutionError(Chip8Error):
    """An instruction could not be executed.

    ``pc`` is the address of the failing instruction, or None when the
    error was raised outside the fetch-execute path.
    """

    def __init__(self, message: str, pc: int | None = None) -> None:
        if pc is not None:
            message = f"{message} at 0x{pc:03X}"
        super().__init__(message)
        self.pc = pc


class StackOverflowError(ExecutionError):
    """CALL with all 16 stack slots in use."""
    pass


class StackUnderflowError(ExecutionError):
    """RET with an empty call stack."""
    pass


class PcOutOfBoundsError(ExecutionError):
    """Program counter points outside addressable memory."""
    pass


class MemoryAccessError(ExecutionError):
    """Instruction reads or writes memory outside the address space."""
    pass


class InvalidRegisterError(ExecutionError):
    """Register index outside V0-VF."""
    pass


class InvalidKeyError(ExecutionError):
    """Key index outside 0-F."""
    pass
