"""TUI disassembly panel: converts decoded instructions to human-readable text."""

from __future__ import annotations

from dataclasses import dataclass

from ..cpu.decode import Instruction, Op, decode
from ..errors import MemoryAccessError
from ..memory.ram import RAM


@dataclass(frozen=True)
class DisassemblyLine:
    """A single line of disassembly output."""

    addr: int
    word: int
    text: str
    is_current: bool


def _v(index: int) -> str:
    return f"V{index:X}"


# Ops whose text only depends on Vx
_X_ONLY: dict[Op, str] = {
    Op.SKIP_PRESSED: "SKP {x}",
    Op.SKIP_NOT_PRESSED: "SKNP {x}",
    Op.LOAD_DELAY: "LD {x}, DT",
    Op.HALT_UNTIL_PRESSED: "LD {x}, K",
    Op.SET_DELAY: "LD DT, {x}",
    Op.SET_SOUND: "LD ST, {x}",
    Op.ADD_I: "ADD I, {x}",
    Op.LOAD_FONT: "LD F, {x}",
    Op.STORE_BCD: "LD B, {x}",
    Op.STORE_V: "LD [I], {x}",
    Op.LOAD_V: "LD {x}, [I]",
}

# Vx, Vy register-pair ops: op -> mnemonic
_XY_OPS: dict[Op, str] = {
    Op.SKIP_EQUAL: "SE",
    Op.SKIP_NOT_EQUAL: "SNE",
    Op.SET_V: "LD",
    Op.OR: "OR",
    Op.AND: "AND",
    Op.XOR: "XOR",
    Op.ADD: "ADD",
    Op.SUB: "SUB",
    Op.SUBN: "SUBN",
    Op.SHIFT_RIGHT: "SHR",
    Op.SHIFT_LEFT: "SHL",
}

# Vx, kk immediate ops: op -> mnemonic
_XKK_OPS: dict[Op, str] = {
    Op.SKIP_EQUAL_CONST: "SE",
    Op.SKIP_NOT_EQUAL_CONST: "SNE",
    Op.SET_V_CONST: "LD",
    Op.ADD_V_CONST: "ADD",
    Op.RAND: "RND",
}


def disassemble_instruction(inst: Instruction) -> str:
    """Convert a decoded Instruction to a human-readable assembly string.

    Uses the conventional CHIP-8 assembly syntax (``LD V0, 0x05``,
    ``DRW V1, V2, 5``). Unknown words render as a ``DW`` data directive.

    Args:
        inst: A decoded Instruction.

    Returns:
        The instruction label, e.g. ``"ADD V0, V1"``.
    """
    op = inst.op

    if op is Op.CLEAR_DISPLAY:
        return "CLS"
    if op is Op.RETURN:
        return "RET"
    if op is Op.JUMP:
        return f"JP 0x{inst.nnn:03X}"
    if op is Op.CALL:
        return f"CALL 0x{inst.nnn:03X}"
    if op is Op.SET_I:
        return f"LD I, 0x{inst.nnn:03X}"
    if op is Op.DRAW:
        return f"DRW {_v(inst.x)}, {_v(inst.y)}, {inst.n}"
    if op in _XKK_OPS:
        return f"{_XKK_OPS[op]} {_v(inst.x)}, 0x{inst.kk:02X}"
    if op in _XY_OPS:
        return f"{_XY_OPS[op]} {_v(inst.x)}, {_v(inst.y)}"
    if op in _X_ONLY:
        return _X_ONLY[op].format(x=_v(inst.x))
    return f"DW 0x{inst.word:04X}"


def disassemble_region(
    memory: RAM, center_pc: int, count: int
) -> list[DisassemblyLine]:
    """Disassemble a region of memory centered on center_pc.

    Reads `count` opcode words (2 bytes each) from memory, centered on
    `center_pc`. Addresses outside memory are shown as "???".

    Args:
        memory: The RAM to read from.
        center_pc: The PC address to center the disassembly on.
        count: Total number of instructions to disassemble.

    Returns:
        A list of DisassemblyLine objects, one per instruction.
    """
    half = count // 2
    start_addr = center_pc - half * 2
    lines: list[DisassemblyLine] = []

    for i in range(count):
        addr = start_addr + i * 2
        is_current = addr == center_pc
        try:
            word = memory.read16(addr)
            text = disassemble_instruction(decode(word))
        except MemoryAccessError:
            word = 0
            text = "???"
        lines.append(DisassemblyLine(addr=addr, word=word, text=text, is_current=is_current))

    return lines
