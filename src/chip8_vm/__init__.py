"""CHIP-8 virtual machine interpreter."""

from .cpu import CPU, Instruction, Op, Quirks, decode
from .errors import (
    Chip8Error,
    DecodeError,
    ExecutionError,
    InvalidKeyError,
    InvalidRegisterError,
    LoadError,
    MemoryAccessError,
    PcOutOfBoundsError,
    StackOverflowError,
    StackUnderflowError,
)

__all__ = [
    "CPU", "Chip8Error", "DecodeError", "ExecutionError", "Instruction",
    "InvalidKeyError", "InvalidRegisterError", "LoadError",
    "MemoryAccessError", "Op", "PcOutOfBoundsError", "Quirks",
    "StackOverflowError", "StackUnderflowError", "decode",
]
