"""TUI register display: V0-VF, I, PC, SP and timers with change highlighting."""

from __future__ import annotations

from ..cpu.cpu import CPU
from ..cpu.registers import NUM_REGISTERS, RegisterFile


def format_registers(cpu: CPU, prev_values: list[int] | None = None) -> str:
    """Format the register file and special registers for display.

    Produces a 4x4 grid of V0-VF followed by a line with I, PC, SP and
    the two timers. Registers whose values changed since the previous
    snapshot are highlighted with Rich markup ``[bold yellow]``.

    Args:
        cpu: The CPU whose state to show.
        prev_values: Optional list of 16 previous V register values. If
            None, no highlighting is applied.

    Returns:
        A string with Rich markup suitable for display in a Rich Panel.
    """
    lines: list[str] = []
    cols = 4
    rows = NUM_REGISTERS // cols

    for row in range(rows):
        parts: list[str] = []
        for col in range(cols):
            idx = row + col * rows
            val = cpu.registers.read(idx)
            entry = f"V{idx:X} 0x{val:02X} ({val:3d})"
            if prev_values is not None and val != prev_values[idx]:
                entry = f"[bold yellow]{entry}[/bold yellow]"
            parts.append(entry)
        lines.append("  ".join(parts))

    lines.append("")
    lines.append(
        f"I  0x{cpu.i:04X}   PC 0x{cpu.pc:04X}   SP {cpu.stack.sp:2d}   "
        f"DT {cpu.timers.delay:3d}   ST {cpu.timers.sound:3d}"
    )
    return "\n".join(lines)


def snapshot_registers(regs: RegisterFile) -> list[int]:
    """Capture a snapshot of all 16 V register values."""
    return regs.snapshot()


def format_state(cpu: CPU) -> str:
    """Plain-text dump of the machine state (no markup), for logs and exit reports."""
    v = " ".join(f"{val:02X}" for val in cpu.registers.snapshot())
    stack = " ".join(f"{addr:03X}" for addr in cpu.stack.frames()) or "-"
    return "\n".join([
        f"PC: 0x{cpu.pc:04X}",
        f"SP: {cpu.stack.sp}",
        f"Stack: {stack}",
        f"V: {v}",
        f"I: 0x{cpu.i:04X}",
        f"Delay timer: {cpu.timers.delay}",
        f"Sound timer: {cpu.timers.sound}",
    ])
