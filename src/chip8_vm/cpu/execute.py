"""Instruction execution: implements every base CHIP-8 operation."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from ..errors import DecodeError
from ..memory.font import glyph_address
from .decode import Instruction, Op
from .registers import VF

if TYPE_CHECKING:
    from .cpu import CPU


def execute(inst: Instruction, cpu: CPU) -> int:
    """Execute a decoded instruction. Returns the next PC value.

    Every precondition (stack depth, memory range, key index) is checked
    before the first write, so a raised error leaves the machine as it
    was.

    Raises:
        DecodeError: For ``Op.UNKNOWN``.
        ExecutionError: If the instruction cannot complete.
    """
    return _HANDLERS[inst.op](inst, cpu)


# ==================== Control flow ====================

def _exec_clear_display(inst: Instruction, cpu: CPU) -> int:
    cpu.display.clear()
    cpu.draw_flag = True
    return cpu.pc + 2


def _exec_return(inst: Instruction, cpu: CPU) -> int:
    return cpu.stack.pop(cpu.pc)


def _exec_jump(inst: Instruction, cpu: CPU) -> int:
    return inst.nnn


def _exec_call(inst: Instruction, cpu: CPU) -> int:
    cpu.stack.push(cpu.pc + 2, cpu.pc)
    return inst.nnn


def _skip_if(cpu: CPU, condition: bool) -> int:
    return cpu.pc + (4 if condition else 2)


def _exec_skip_equal_const(inst: Instruction, cpu: CPU) -> int:
    return _skip_if(cpu, cpu.registers.read(inst.x) == inst.kk)


def _exec_skip_not_equal_const(inst: Instruction, cpu: CPU) -> int:
    return _skip_if(cpu, cpu.registers.read(inst.x) != inst.kk)


def _exec_skip_equal(inst: Instruction, cpu: CPU) -> int:
    regs = cpu.registers
    return _skip_if(cpu, regs.read(inst.x) == regs.read(inst.y))


def _exec_skip_not_equal(inst: Instruction, cpu: CPU) -> int:
    regs = cpu.registers
    return _skip_if(cpu, regs.read(inst.x) != regs.read(inst.y))


# ==================== Register ALU ====================

def _exec_set_v_const(inst: Instruction, cpu: CPU) -> int:
    cpu.registers.write(inst.x, inst.kk)
    return cpu.pc + 2


def _exec_add_v_const(inst: Instruction, cpu: CPU) -> int:
    # No carry flag for 7xkk
    regs = cpu.registers
    regs.write(inst.x, regs.read(inst.x) + inst.kk)
    return cpu.pc + 2


def _exec_set_v(inst: Instruction, cpu: CPU) -> int:
    regs = cpu.registers
    regs.write(inst.x, regs.read(inst.y))
    return cpu.pc + 2


def _exec_or(inst: Instruction, cpu: CPU) -> int:
    regs = cpu.registers
    regs.write(inst.x, regs.read(inst.x) | regs.read(inst.y))
    return cpu.pc + 2


def _exec_and(inst: Instruction, cpu: CPU) -> int:
    regs = cpu.registers
    regs.write(inst.x, regs.read(inst.x) & regs.read(inst.y))
    return cpu.pc + 2


def _exec_xor(inst: Instruction, cpu: CPU) -> int:
    regs = cpu.registers
    regs.write(inst.x, regs.read(inst.x) ^ regs.read(inst.y))
    return cpu.pc + 2


# Flag-setting ops write the result first and VF last, so the flag wins
# when the destination is VF itself.

def _exec_add(inst: Instruction, cpu: CPU) -> int:
    regs = cpu.registers
    total = regs.read(inst.x) + regs.read(inst.y)
    regs.write(inst.x, total & 0xFF)
    regs.write(VF, 1 if total > 0xFF else 0)
    return cpu.pc + 2


def _exec_sub(inst: Instruction, cpu: CPU) -> int:
    regs = cpu.registers
    vx = regs.read(inst.x)
    vy = regs.read(inst.y)
    regs.write(inst.x, (vx - vy) & 0xFF)
    regs.write(VF, 1 if vx >= vy else 0)
    return cpu.pc + 2


def _exec_subn(inst: Instruction, cpu: CPU) -> int:
    regs = cpu.registers
    vx = regs.read(inst.x)
    vy = regs.read(inst.y)
    regs.write(inst.x, (vy - vx) & 0xFF)
    regs.write(VF, 1 if vy >= vx else 0)
    return cpu.pc + 2


def _shift_source(inst: Instruction, cpu: CPU) -> int:
    src = inst.y if cpu.quirks.shift_uses_vy else inst.x
    return cpu.registers.read(src)


def _exec_shift_right(inst: Instruction, cpu: CPU) -> int:
    value = _shift_source(inst, cpu)
    cpu.registers.write(inst.x, value >> 1)
    cpu.registers.write(VF, value & 0x1)
    return cpu.pc + 2


def _exec_shift_left(inst: Instruction, cpu: CPU) -> int:
    value = _shift_source(inst, cpu)
    cpu.registers.write(inst.x, (value << 1) & 0xFF)
    cpu.registers.write(VF, (value >> 7) & 0x1)
    return cpu.pc + 2


def _exec_rand(inst: Instruction, cpu: CPU) -> int:
    cpu.registers.write(inst.x, cpu.rng.next_byte() & inst.kk)
    return cpu.pc + 2


# ==================== Index register & memory ====================

def _exec_set_i(inst: Instruction, cpu: CPU) -> int:
    cpu.i = inst.nnn
    return cpu.pc + 2


def _exec_add_i(inst: Instruction, cpu: CPU) -> int:
    # VF untouched; I wraps at 16 bits
    cpu.i = (cpu.i + cpu.registers.read(inst.x)) & 0xFFFF
    return cpu.pc + 2


def _exec_load_font(inst: Instruction, cpu: CPU) -> int:
    cpu.i = glyph_address(cpu.registers.read(inst.x))
    return cpu.pc + 2


def _exec_store_bcd(inst: Instruction, cpu: CPU) -> int:
    value = cpu.registers.read(inst.x)
    mem = cpu.memory
    mem.check(cpu.i, 3, cpu.pc)
    mem.write8(cpu.i, value // 100)
    mem.write8(cpu.i + 1, (value // 10) % 10)
    mem.write8(cpu.i + 2, value % 10)
    return cpu.pc + 2


def _exec_store_v(inst: Instruction, cpu: CPU) -> int:
    count = inst.x + 1
    cpu.memory.check(cpu.i, count, cpu.pc)
    values = bytes(cpu.registers.read(r) for r in range(count))
    cpu.memory.load_segment(cpu.i, values)
    return cpu.pc + 2


def _exec_load_v(inst: Instruction, cpu: CPU) -> int:
    count = inst.x + 1
    cpu.memory.check(cpu.i, count, cpu.pc)
    for r, value in enumerate(cpu.memory.read_block(cpu.i, count)):
        cpu.registers.write(r, value)
    return cpu.pc + 2


# ==================== Display ====================

def _exec_draw(inst: Instruction, cpu: CPU) -> int:
    regs = cpu.registers
    cpu.memory.check(cpu.i, inst.n, cpu.pc)
    sprite = cpu.memory.read_block(cpu.i, inst.n)
    collision = cpu.display.draw_sprite(regs.read(inst.x), regs.read(inst.y), sprite)
    regs.write(VF, 1 if collision else 0)
    cpu.draw_flag = True
    return cpu.pc + 2


# ==================== Keys & timers ====================

def _exec_skip_pressed(inst: Instruction, cpu: CPU) -> int:
    key = cpu.registers.read(inst.x)
    return _skip_if(cpu, cpu.keypad.is_pressed(key, cpu.pc))


def _exec_skip_not_pressed(inst: Instruction, cpu: CPU) -> int:
    key = cpu.registers.read(inst.x)
    return _skip_if(cpu, not cpu.keypad.is_pressed(key, cpu.pc))


def _exec_halt_until_pressed(inst: Instruction, cpu: CPU) -> int:
    key = cpu.keypad.last_pressed
    if key is None:
        # Refetch this instruction next cycle
        return cpu.pc
    cpu.registers.write(inst.x, key)
    return cpu.pc + 2


def _exec_load_delay(inst: Instruction, cpu: CPU) -> int:
    cpu.registers.write(inst.x, cpu.timers.delay)
    return cpu.pc + 2


def _exec_set_delay(inst: Instruction, cpu: CPU) -> int:
    cpu.timers.delay = cpu.registers.read(inst.x)
    return cpu.pc + 2


def _exec_set_sound(inst: Instruction, cpu: CPU) -> int:
    cpu.timers.sound = cpu.registers.read(inst.x)
    return cpu.pc + 2


def _exec_unknown(inst: Instruction, cpu: CPU) -> int:
    raise DecodeError(inst.word, cpu.pc)


_HANDLERS: dict[Op, Callable[[Instruction, CPU], int]] = {
    Op.CLEAR_DISPLAY: _exec_clear_display,
    Op.RETURN: _exec_return,
    Op.JUMP: _exec_jump,
    Op.CALL: _exec_call,
    Op.SKIP_EQUAL_CONST: _exec_skip_equal_const,
    Op.SKIP_NOT_EQUAL_CONST: _exec_skip_not_equal_const,
    Op.SKIP_EQUAL: _exec_skip_equal,
    Op.SET_V_CONST: _exec_set_v_const,
    Op.ADD_V_CONST: _exec_add_v_const,
    Op.SET_V: _exec_set_v,
    Op.OR: _exec_or,
    Op.AND: _exec_and,
    Op.XOR: _exec_xor,
    Op.ADD: _exec_add,
    Op.SUB: _exec_sub,
    Op.SHIFT_RIGHT: _exec_shift_right,
    Op.SUBN: _exec_subn,
    Op.SHIFT_LEFT: _exec_shift_left,
    Op.SKIP_NOT_EQUAL: _exec_skip_not_equal,
    Op.SET_I: _exec_set_i,
    Op.RAND: _exec_rand,
    Op.DRAW: _exec_draw,
    Op.SKIP_PRESSED: _exec_skip_pressed,
    Op.SKIP_NOT_PRESSED: _exec_skip_not_pressed,
    Op.LOAD_DELAY: _exec_load_delay,
    Op.HALT_UNTIL_PRESSED: _exec_halt_until_pressed,
    Op.SET_DELAY: _exec_set_delay,
    Op.SET_SOUND: _exec_set_sound,
    Op.ADD_I: _exec_add_i,
    Op.LOAD_FONT: _exec_load_font,
    Op.STORE_BCD: _exec_store_bcd,
    Op.STORE_V: _exec_store_v,
    Op.LOAD_V: _exec_load_v,
    Op.UNKNOWN: _exec_unknown,
}
