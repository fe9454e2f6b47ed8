"""TUI application: main debugger interface using Rich Live display."""

from __future__ import annotations

import readline  # noqa: F401  # pyright: ignore[reportUnusedImport]
import sys

from rich.console import Console
from rich.layout import Layout
from rich.panel import Panel
from rich.text import Text

from ..cpu.cpu import CPU
from ..cpu.quirks import Quirks
from ..devices.rng import SystemRandomSource
from ..errors import LoadError
from ..host import DEFAULT_CYCLES_PER_FRAME
from .debugger import DebuggerState, process_command
from .disasm import disassemble_region
from .display import format_keypad, format_screen
from .memory import format_hex_dump
from .registers import format_registers, snapshot_registers
from .stats import format_instruction_stats


def render_debugger(state: DebuggerState) -> Layout:
    """Build the Rich Layout with all debugger panels.

    Layout structure:
        +------------------+----------------------------+
        |   Registers      |                            |
        +------------------+   Display                  |
        |   Keypad         |                            |
        +------------------+-------------+--------------+
        |   Disassembly                  |   Memory     |
        +--------------------------------+--------------+
        |   Instruction Statistics                      |
        +-----------------------------------------------+
        |   Status bar (full width)                     |
        +-----------------------------------------------+

    Args:
        state: The current debugger state.

    Returns:
        A Rich Layout object ready for display.
    """
    cpu = state.cpu
    layout = Layout()

    msg_lines = state.message.count("\n") + 1
    status_height = 2 + 1 + msg_lines

    layout.split_column(
        Layout(name="top", size=cpu.display.height + 2),
        Layout(name="middle", ratio=2),
        Layout(name="stats", ratio=1),
        Layout(name="status", size=status_height),
    )

    layout["top"].split_row(
        Layout(name="left_col", ratio=1),
        Layout(name="display", size=cpu.display.width * 2 + 4),
    )

    layout["left_col"].split_column(
        Layout(name="registers", ratio=2),
        Layout(name="keypad", ratio=1),
    )

    layout["middle"].split_row(
        Layout(name="disassembly", ratio=1),
        Layout(name="memory", ratio=2),
    )

    reg_text = format_registers(cpu, state.prev_regs)
    layout["registers"].update(Panel(reg_text, title="Registers"))

    layout["keypad"].update(Panel(format_keypad(cpu.keypad), title="Keypad"))

    screen = Text(format_screen(cpu.framebuffer), no_wrap=True)
    title = "Display" + (" (sound)" if cpu.sound_active else "")
    layout["display"].update(Panel(screen, title=title))

    disasm_lines = disassemble_region(cpu.memory, cpu.pc, 15)
    disasm_text = Text()
    for line in disasm_lines:
        marker = ">>>" if line.is_current else "   "
        bp_marker = " *" if line.addr in state.breakpoints else "  "
        entry = f"{marker}{bp_marker} 0x{line.addr:03X}: {line.word:04X}  {line.text}"
        if line.is_current:
            disasm_text.append(entry + "\n", style="bold green")
        elif line.addr in state.breakpoints:
            disasm_text.append(entry + "\n", style="bold red")
        else:
            disasm_text.append(entry + "\n")
    layout["disassembly"].update(Panel(disasm_text, title="Disassembly"))

    mem_text = format_hex_dump(cpu.memory, state.mem_view_addr, num_rows=8)
    layout["memory"].update(Panel(Text(mem_text), title=f"Memory @ 0x{state.mem_view_addr:03X}"))

    stats_text = format_instruction_stats(cpu.instruction_stats)
    layout["stats"].update(Panel(stats_text, title="Instruction Statistics"))

    if state.error is not None:
        run_str = "HALTED"
    elif cpu.waiting_for_key:
        run_str = "WAITING FOR KEY"
    else:
        run_str = "RUNNING"
    bp_str = ", ".join(f"0x{a:03X}" for a in sorted(state.breakpoints))
    status_text = (
        f"PC: 0x{cpu.pc:03X}  |  "
        f"Cycles: {cpu.cycle_count}  |  "
        f"State: {run_str}  |  "
        f"Breakpoints: {bp_str if bp_str else 'none'}\n"
        f"{state.message}"
    )
    layout["status"].update(Panel(Text(status_text), title="Status"))

    return layout


def run_debugger(
    rom_path: str,
    quirks: Quirks | None = None,
    seed: int | None = None,
    cycles_per_frame: int = DEFAULT_CYCLES_PER_FRAME,
) -> None:
    """Launch the TUI debugger for a ROM file.

    Loads the ROM, creates the CPU and enters the command loop with Rich
    console output.

    Args:
        rom_path: Path to the raw CHIP-8 ROM.
        quirks: Compatibility modes for the CPU.
        seed: Optional seed for the random source.
        cycles_per_frame: Instructions executed per timer tick.
    """
    with open(rom_path, "rb") as f:
        rom = f.read()

    cpu = CPU(quirks=quirks, rng=SystemRandomSource(seed))
    try:
        cpu.load(rom)
    except LoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    state = DebuggerState(
        cpu=cpu,
        rom=rom,
        cycles_per_frame=cycles_per_frame,
        prev_regs=snapshot_registers(cpu.registers),
    )

    console = Console()

    def _render(st: DebuggerState) -> None:
        console.clear()
        lay = render_debugger(st)
        console.print(lay)

    state.render_fn = _render

    _render(state)

    while True:
        try:
            cmd = input("dbg> ")
        except (EOFError, KeyboardInterrupt):
            console.print("\nExiting debugger.")
            break

        should_continue = process_command(state, cmd)
        if not should_continue:
            console.print("Exiting debugger.")
            break

        _render(state)

    sys.exit(0)
