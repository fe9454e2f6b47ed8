"""TUI debugger controller: state management and command processing."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from ..cpu.cpu import CPU, PROGRAM_START
from ..cpu.decode import decode
from ..errors import Chip8Error
from ..host import DEFAULT_CYCLES_PER_FRAME
from .disasm import disassemble_instruction
from .registers import snapshot_registers


@dataclass
class DebuggerState:
    """Mutable state for the TUI debugger session.

    Holds the CPU, the loaded ROM (for resets), breakpoint set, previous
    register snapshot for change tracking, memory view address, the last
    execution error and the status message.

    Timers are ticked once every ``cycles_per_frame`` executed
    instructions, so stepping keeps the same instructions-per-tick ratio
    as a free run.
    """

    cpu: CPU
    rom: bytes = b""
    breakpoints: set[int] = field(default_factory=set)
    prev_regs: list[int] = field(default_factory=lambda: [0] * 16)
    mem_view_addr: int = PROGRAM_START
    cycles_per_frame: int = DEFAULT_CYCLES_PER_FRAME
    frame_cycles: int = 0
    error: Chip8Error | None = None
    message: str = "Ready. Type 's' to step, 'c' to continue, 'q' to quit."
    render_fn: Callable[[DebuggerState], None] | None = None


def _execute_one(state: DebuggerState) -> bool:
    """Run one cycle, ticking timers on frame boundaries.

    Returns:
        True if the cycle succeeded, False if it raised (the error is
        stored on the state and reported in the message).
    """
    if state.frame_cycles == 0:
        state.cpu.tick_timers()
    try:
        state.cpu.cycle()
    except Chip8Error as e:
        state.error = e
        state.message = f"Error: {e}"
        return False
    state.frame_cycles = (state.frame_cycles + 1) % state.cycles_per_frame
    return True


def _waiting_message(state: DebuggerState) -> str:
    inst = state.cpu.memory.read16(state.cpu.pc)
    return (
        f"Waiting for key at 0x{state.cpu.pc:03X} "
        f"(0x{inst:04X}); press one with 'k <key>'."
    )


def debugger_step(state: DebuggerState) -> None:
    """Execute one instruction and update register snapshot.

    Takes a snapshot of the current registers before stepping, so the
    display can highlight which registers changed.

    Args:
        state: The current debugger state (modified in place).
    """
    if state.error is not None:
        state.message = f"CPU halted: {state.error}"
        return

    state.prev_regs = snapshot_registers(state.cpu.registers)
    pc = state.cpu.pc
    word = state.cpu.memory.read16(pc) if pc + 2 <= state.cpu.memory.size else 0
    if not _execute_one(state):
        return
    if state.cpu.waiting_for_key:
        state.message = _waiting_message(state)
    else:
        state.message = (
            f"0x{pc:03X}: {disassemble_instruction(decode(word))}  ->  "
            f"PC 0x{state.cpu.pc:03X} (cycle {state.cpu.cycle_count})"
        )


def debugger_continue(state: DebuggerState, max_cycles: int = 10000) -> None:
    """Run until breakpoint, error, key wait, or cycle limit.

    Args:
        state: The current debugger state (modified in place).
        max_cycles: Maximum number of cycles to execute before stopping.
    """
    if state.error is not None:
        state.message = f"CPU halted: {state.error}"
        return

    state.prev_regs = snapshot_registers(state.cpu.registers)
    cycles_run = 0

    while cycles_run < max_cycles:
        if not _execute_one(state):
            return
        cycles_run += 1

        if state.cpu.pc in state.breakpoints:
            state.message = (
                f"Breakpoint hit at 0x{state.cpu.pc:03X} "
                f"(ran {cycles_run} cycles)"
            )
            return

        if state.cpu.waiting_for_key:
            state.message = _waiting_message(state)
            return

    state.message = f"Stopped after {max_cycles} cycles (limit reached)."


def debugger_run_at_speed(
    state: DebuggerState,
    hz: int,
    max_steps: int | None = None,
) -> None:
    """Run at a fixed speed with live display updates.

    Executes instructions at the given rate (steps per second), calling
    ``state.render_fn`` to redraw the display between frames. For rates
    above 30 Hz, batches multiple steps per frame to cap redraws at ~30 fps.
    Key waits do not stop the run, so a game can sit at its input prompt.

    Stops on breakpoint, execution error, max_steps limit, or
    KeyboardInterrupt.

    Args:
        state: The current debugger state (modified in place).
        hz: Target steps per second (must be >= 1).
        max_steps: Optional maximum number of steps before stopping.
    """
    if state.error is not None:
        state.message = f"CPU halted: {state.error}"
        return

    steps_per_frame = max(1, hz // 30)
    frame_interval = steps_per_frame / hz

    total_steps = 0

    def _render() -> None:
        if state.render_fn is not None:
            state.render_fn(state)

    try:
        while True:
            frame_start = time.monotonic()
            state.prev_regs = snapshot_registers(state.cpu.registers)

            for _ in range(steps_per_frame):
                if max_steps is not None and total_steps >= max_steps:
                    break

                if not _execute_one(state):
                    _render()
                    return
                total_steps += 1

                if state.cpu.pc in state.breakpoints:
                    state.message = (
                        f"Breakpoint hit at 0x{state.cpu.pc:03X} "
                        f"(ran {total_steps} steps at {hz} Hz)"
                    )
                    _render()
                    return

            state.message = (
                f"Running at {hz} Hz, "
                f"step {total_steps}, "
                f"PC 0x{state.cpu.pc:03X} "
                f"(Ctrl+C to stop)"
            )
            _render()

            if max_steps is not None and total_steps >= max_steps:
                state.message = f"Stopped after {total_steps} steps (limit reached)."
                _render()
                return

            elapsed = time.monotonic() - frame_start
            remaining = frame_interval - elapsed
            if remaining > 0:
                time.sleep(remaining)

    except KeyboardInterrupt:
        state.message = f"Paused after {total_steps} steps at {hz} Hz."


def debugger_reset(state: DebuggerState) -> None:
    """Reset the machine and reload the session ROM."""
    state.cpu.reset()
    state.cpu.load(state.rom)
    state.error = None
    state.frame_cycles = 0
    state.prev_regs = snapshot_registers(state.cpu.registers)
    state.message = f"Reset; reloaded {len(state.rom)} bytes."


HELP_TEXT = (
    "s, step                  - step one instruction\n"
    "c, continue              - run until breakpoint/error/key wait\n"
    "r, run <hz> [max_steps]  - run at fixed speed (Ctrl+C to pause)\n"
    "b <addr>                 - toggle breakpoint (hex address)\n"
    "g <addr>                 - set memory view address (hex)\n"
    "k <key>                  - toggle key 0-F held/released\n"
    "t, tick                  - tick the delay/sound timers once\n"
    "x, reset                 - reset and reload the ROM\n"
    "h, help                  - show this help\n"
    "q, quit                  - exit debugger"
)


def _parse_hex(text: str) -> int | None:
    try:
        return int(text, 16)
    except ValueError:
        return None


def process_command(state: DebuggerState, cmd: str) -> bool:
    """Parse and execute a debugger command.

    See ``HELP_TEXT`` for the supported commands.

    Args:
        state: The current debugger state (modified in place).
        cmd: The raw command string from the user.

    Returns:
        True to continue the debugger loop, False to quit.
    """
    parts = cmd.strip().split()
    if not parts:
        state.message = HELP_TEXT
        return True

    verb = parts[0].lower()

    if verb in ("s", "step"):
        debugger_step(state)

    elif verb in ("c", "continue"):
        debugger_continue(state)

    elif verb in ("r", "run"):
        if len(parts) < 2:
            state.message = "Usage: run <hz> [max_steps]"
            return True
        try:
            hz = int(parts[1])
        except ValueError:
            state.message = f"Invalid hz: {parts[1]}"
            return True
        if hz < 1:
            state.message = "Hz must be >= 1."
            return True

        max_steps: int | None = None
        if len(parts) >= 3:
            try:
                max_steps = int(parts[2])
            except ValueError:
                state.message = f"Invalid max_steps: {parts[2]}"
                return True
            if max_steps < 1:
                state.message = "max_steps must be >= 1."
                return True

        debugger_run_at_speed(state, hz, max_steps)

    elif verb in ("b", "breakpoint"):
        if len(parts) < 2:
            state.message = "Usage: b <hex_address>"
            return True
        addr = _parse_hex(parts[1])
        if addr is None:
            state.message = f"Invalid address: {parts[1]}"
            return True
        addr &= 0xFFFF

        if addr in state.breakpoints:
            state.breakpoints.discard(addr)
            state.message = f"Breakpoint removed at 0x{addr:03X}"
        else:
            state.breakpoints.add(addr)
            state.message = f"Breakpoint set at 0x{addr:03X}"

    elif verb in ("g", "goto"):
        if len(parts) < 2:
            state.message = "Usage: g <hex_address>"
            return True
        addr = _parse_hex(parts[1])
        if addr is None:
            state.message = f"Invalid address: {parts[1]}"
            return True
        state.mem_view_addr = addr & 0xFFFF
        state.message = f"Memory view set to 0x{state.mem_view_addr:03X}"

    elif verb in ("k", "key"):
        if len(parts) < 2:
            state.message = "Usage: k <key 0-F>"
            return True
        key = _parse_hex(parts[1])
        if key is None or not 0 <= key <= 0xF:
            state.message = f"Invalid key: {parts[1]}"
            return True
        pressed = not state.cpu.keypad.is_pressed(key)
        state.cpu.set_key(key, pressed)
        state.message = f"Key {key:X} {'pressed' if pressed else 'released'}"

    elif verb in ("t", "tick"):
        state.cpu.tick_timers()
        state.message = (
            f"Timers ticked: DT={state.cpu.timers.delay} ST={state.cpu.timers.sound}"
        )

    elif verb in ("x", "reset"):
        debugger_reset(state)

    elif verb in ("h", "help"):
        state.message = HELP_TEXT

    elif verb in ("q", "quit"):
        return False

    else:
        state.message = f"Unknown command: {verb}\n\n{HELP_TEXT}"

    return True
