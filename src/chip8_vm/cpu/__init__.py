"""CPU module: decoder, executor and the machine-state aggregate."""

from .cpu import CPU, MAX_ROM_SIZE, PROGRAM_START
from .decode import Instruction, Op, decode, instruction_mnemonic
from .quirks import Quirks

__all__ = [
    "CPU", "Instruction", "MAX_ROM_SIZE", "Op", "PROGRAM_START", "Quirks",
    "decode", "instruction_mnemonic",
]
