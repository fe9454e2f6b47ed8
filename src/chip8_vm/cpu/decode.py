"""Instruction decoder: splits a 16-bit opcode word into its nibble fields."""

from dataclasses import dataclass
from enum import Enum


class Op(Enum):
    """Closed set of instruction variants, plus UNKNOWN for everything else."""

    CLEAR_DISPLAY = "00E0"
    RETURN = "00EE"
    JUMP = "1nnn"
    CALL = "2nnn"
    SKIP_EQUAL_CONST = "3xkk"
    SKIP_NOT_EQUAL_CONST = "4xkk"
    SKIP_EQUAL = "5xy0"
    SET_V_CONST = "6xkk"
    ADD_V_CONST = "7xkk"
    SET_V = "8xy0"
    OR = "8xy1"
    AND = "8xy2"
    XOR = "8xy3"
    ADD = "8xy4"
    SUB = "8xy5"
    SHIFT_RIGHT = "8xy6"
    SUBN = "8xy7"
    SHIFT_LEFT = "8xyE"
    SKIP_NOT_EQUAL = "9xy0"
    SET_I = "Annn"
    RAND = "Cxkk"
    DRAW = "Dxyn"
    SKIP_PRESSED = "Ex9E"
    SKIP_NOT_PRESSED = "ExA1"
    LOAD_DELAY = "Fx07"
    HALT_UNTIL_PRESSED = "Fx0A"
    SET_DELAY = "Fx15"
    SET_SOUND = "Fx18"
    ADD_I = "Fx1E"
    LOAD_FONT = "Fx29"
    STORE_BCD = "Fx33"
    STORE_V = "Fx55"
    LOAD_V = "Fx65"
    UNKNOWN = "????"


@dataclass(frozen=True)
class Instruction:
    """Decoded CHIP-8 instruction.

    Only the fields an instruction uses are populated; the rest stay 0.
    ``word`` always holds the raw opcode.
    """

    op: Op
    word: int
    x: int = 0
    y: int = 0
    n: int = 0
    kk: int = 0
    nnn: int = 0

    def __str__(self) -> str:
        return f"{self.op.name}(0x{self.word:04X})"


# Family 8: ALU ops selected by the low nibble
_ALU_OPS: dict[int, Op] = {
    0x0: Op.SET_V,
    0x1: Op.OR,
    0x2: Op.AND,
    0x3: Op.XOR,
    0x4: Op.ADD,
    0x5: Op.SUB,
    0x6: Op.SHIFT_RIGHT,
    0x7: Op.SUBN,
    0xE: Op.SHIFT_LEFT,
}

# Family E: key skips selected by the low byte
_KEY_OPS: dict[int, Op] = {
    0x9E: Op.SKIP_PRESSED,
    0xA1: Op.SKIP_NOT_PRESSED,
}

# Family F: timer, index and memory ops selected by the low byte
_MISC_OPS: dict[int, Op] = {
    0x07: Op.LOAD_DELAY,
    0x0A: Op.HALT_UNTIL_PRESSED,
    0x15: Op.SET_DELAY,
    0x18: Op.SET_SOUND,
    0x1E: Op.ADD_I,
    0x29: Op.LOAD_FONT,
    0x33: Op.STORE_BCD,
    0x55: Op.STORE_V,
    0x65: Op.LOAD_V,
}

# kk-immediate ops by family
_IMM_OPS: dict[int, Op] = {
    0x3: Op.SKIP_EQUAL_CONST,
    0x4: Op.SKIP_NOT_EQUAL_CONST,
    0x6: Op.SET_V_CONST,
    0x7: Op.ADD_V_CONST,
    0xC: Op.RAND,
}

# nnn-address ops by family
_ADDR_OPS: dict[int, Op] = {
    0x1: Op.JUMP,
    0x2: Op.CALL,
    0xA: Op.SET_I,
}


def decode(word: int) -> Instruction:
    """Decode a 16-bit instruction word into an Instruction.

    Total over [0, 0x10000): words that match no pattern decode to
    ``Op.UNKNOWN`` rather than raising.
    """
    word &= 0xFFFF
    family = word >> 12
    x = (word >> 8) & 0xF
    y = (word >> 4) & 0xF
    n = word & 0xF
    kk = word & 0xFF
    nnn = word & 0xFFF

    if family == 0x0:
        if word == 0x00E0:
            return Instruction(Op.CLEAR_DISPLAY, word)
        if word == 0x00EE:
            return Instruction(Op.RETURN, word)

    elif family in _ADDR_OPS:
        return Instruction(_ADDR_OPS[family], word, nnn=nnn)

    elif family in _IMM_OPS:
        return Instruction(_IMM_OPS[family], word, x=x, kk=kk)

    elif family == 0x5:
        if n == 0:
            return Instruction(Op.SKIP_EQUAL, word, x=x, y=y)

    elif family == 0x8:
        op = _ALU_OPS.get(n)
        if op is not None:
            return Instruction(op, word, x=x, y=y)

    elif family == 0x9:
        if n == 0:
            return Instruction(Op.SKIP_NOT_EQUAL, word, x=x, y=y)

    elif family == 0xD:
        return Instruction(Op.DRAW, word, x=x, y=y, n=n)

    elif family == 0xE:
        op = _KEY_OPS.get(kk)
        if op is not None:
            return Instruction(op, word, x=x)

    elif family == 0xF:
        op = _MISC_OPS.get(kk)
        if op is not None:
            return Instruction(op, word, x=x)

    # 0nnn machine calls, Bnnn and every malformed sub-opcode land here
    return Instruction(Op.UNKNOWN, word)


def instruction_mnemonic(inst: Instruction) -> str:
    """Return the variant name of a decoded instruction (for stats tracking)."""
    return inst.op.name
