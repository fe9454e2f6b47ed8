"""Headless host loop: paces cycles against 60 Hz timer ticks."""

from __future__ import annotations

from collections.abc import Callable

from .cpu.cpu import CPU
from .cpu.decode import Instruction

DEFAULT_CYCLES_PER_FRAME = 8


def run_frame(
    cpu: CPU,
    cycles_per_frame: int = DEFAULT_CYCLES_PER_FRAME,
    on_instruction: Callable[[int, Instruction], None] | None = None,
) -> int:
    """Emulate one 1/60 s frame: one timer tick, then a batch of cycles.

    Args:
        cpu: The machine to drive.
        cycles_per_frame: Instructions per timer tick (emulated clock speed).
        on_instruction: Optional callback receiving (pc, instruction) for
            every executed instruction, for tracing.

    Returns:
        Number of cycles executed.

    Raises:
        Chip8Error: Whatever ``cpu.cycle`` raises; earlier cycles in the
            frame stay applied.
    """
    cpu.tick_timers()
    for _ in range(cycles_per_frame):
        pc = cpu.pc
        inst = cpu.cycle()
        if on_instruction is not None:
            on_instruction(pc, inst)
    return cycles_per_frame


def run_frames(
    cpu: CPU,
    frames: int,
    cycles_per_frame: int = DEFAULT_CYCLES_PER_FRAME,
    on_instruction: Callable[[int, Instruction], None] | None = None,
) -> int:
    """Run `frames` frames back to back without real-time pacing.

    A program stalled on a key wait keeps spinning until the frame budget
    runs out.

    Returns:
        Total cycles executed.
    """
    total = 0
    for _ in range(frames):
        total += run_frame(cpu, cycles_per_frame, on_instruction)
    return total
