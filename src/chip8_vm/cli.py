"""Command-line interface for the CHIP-8 virtual machine."""

from __future__ import annotations

import argparse
import sys

from .cpu.cpu import CPU
from .cpu.decode import Instruction
from .cpu.quirks import Quirks
from .devices.rng import SystemRandomSource
from .errors import Chip8Error, LoadError
from .host import DEFAULT_CYCLES_PER_FRAME, run_frames
from .tui.disasm import disassemble_instruction
from .tui.display import format_screen
from .tui.registers import format_state

DEFAULT_FRAMES = 600  # 10 seconds of emulated time


def _positive_int(value: str) -> int:
    """argparse type for integers >= 1."""
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer '{value}'")
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {n}")
    return n


def _add_machine_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("rom", help="Path to a raw CHIP-8 ROM image")
    parser.add_argument(
        "--speed", type=_positive_int, default=DEFAULT_CYCLES_PER_FRAME,
        help=f"Instructions per 60 Hz timer tick (default {DEFAULT_CYCLES_PER_FRAME})",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Seed for the RND instruction's random source",
    )
    parser.add_argument(
        "--shift-vy", action="store_true",
        help="8xy6/8xyE shift Vy into Vx instead of shifting Vx in place",
    )
    parser.add_argument(
        "--tall-display", action="store_true",
        help="Use a 64x64 display instead of 64x32",
    )


def _quirks_from_args(args: argparse.Namespace) -> Quirks:
    return Quirks(
        shift_uses_vy=args.shift_vy,
        display_height=64 if args.tall_display else 32,
    )


def main() -> None:
    """Entry point for the emulator CLI."""
    parser = argparse.ArgumentParser(description="CHIP-8 Virtual Machine")
    sub = parser.add_subparsers(dest="command")

    run_parser = sub.add_parser("run", help="Run a ROM headless and print the final screen")
    _add_machine_args(run_parser)
    run_parser.add_argument(
        "--frames", type=_positive_int, default=DEFAULT_FRAMES,
        help=f"Number of 1/60 s frames to emulate (default {DEFAULT_FRAMES})",
    )
    run_parser.add_argument(
        "--trace", action="store_true",
        help="Print every executed instruction to stderr",
    )

    debug_parser = sub.add_parser("debug", help="Run with TUI debugger")
    _add_machine_args(debug_parser)

    args = parser.parse_args()

    if args.command == "run":
        code = run_rom(
            args.rom,
            frames=args.frames,
            cycles_per_frame=args.speed,
            quirks=_quirks_from_args(args),
            seed=args.seed,
            trace=args.trace,
        )
        sys.exit(code)
    elif args.command == "debug":
        from .tui import run_debugger
        run_debugger(
            args.rom,
            quirks=_quirks_from_args(args),
            seed=args.seed,
            cycles_per_frame=args.speed,
        )
    else:
        parser.print_help()
        sys.exit(1)


def _print_trace(pc: int, inst: Instruction) -> None:
    print(f"0x{pc:03X}: {inst.word:04X}  {disassemble_instruction(inst)}", file=sys.stderr)


def run_rom(
    path: str,
    frames: int = DEFAULT_FRAMES,
    cycles_per_frame: int = DEFAULT_CYCLES_PER_FRAME,
    quirks: Quirks | None = None,
    seed: int | None = None,
    trace: bool = False,
) -> int:
    """Load a ROM and run it for a fixed number of frames.

    Prints the final screen to stdout and a summary with the machine
    state to stderr.

    Args:
        path: Path to the ROM file.
        frames: Number of 60 Hz frames to emulate.
        cycles_per_frame: Instructions executed per frame.
        quirks: Compatibility modes for the CPU.
        seed: Optional seed for the random source.
        trace: Print each executed instruction to stderr.

    Returns:
        Process exit code: 0 on success, 1 on a load or execution error.
    """
    try:
        with open(path, "rb") as f:
            rom = f.read()
    except OSError as e:
        print(f"Error: cannot read '{path}': {e}", file=sys.stderr)
        return 1

    cpu = CPU(quirks=quirks, rng=SystemRandomSource(seed))
    try:
        cpu.load(rom)
    except LoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Loaded {len(rom)} bytes from {path} at 0x200", file=sys.stderr)

    code = 0
    try:
        run_frames(cpu, frames, cycles_per_frame, _print_trace if trace else None)
    except Chip8Error as e:
        print(f"Error: {e}", file=sys.stderr)
        code = 1

    print(format_screen(cpu.framebuffer))
    status = " (waiting for key)" if cpu.waiting_for_key else ""
    print(f"Stopped after {cpu.cycle_count} cycles{status}.", file=sys.stderr)
    print(format_state(cpu), file=sys.stderr)
    return code
