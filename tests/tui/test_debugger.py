"""Tests for the TUI debugger controller."""

from chip8_vm.cpu.cpu import PROGRAM_START
from chip8_vm.errors import DecodeError
from chip8_vm.tui.debugger import (
    HELP_TEXT,
    DebuggerState,
    debugger_continue,
    debugger_run_at_speed,
    debugger_step,
    process_command,
)

# LD V0, 1 ; LD V1, 2 ; LD V2, 3 ; JP 0x206
COUNT_ROM = bytes([0x60, 0x01, 0x61, 0x02, 0x62, 0x03, 0x12, 0x06])
# JP 0x200
LOOP_ROM = bytes([0x12, 0x00])
# LD V3, K ; JP 0x202
KEY_ROM = bytes([0xF3, 0x0A, 0x12, 0x02])


class TestDebuggerStep:
    def test_step_advances_pc(self, make_state) -> None:
        state = make_state(COUNT_ROM)
        debugger_step(state)
        assert state.cpu.pc == PROGRAM_START + 2
        assert state.cpu.registers.read(0) == 1

    def test_step_updates_prev_regs(self, make_state) -> None:
        state = make_state(COUNT_ROM)
        debugger_step(state)
        debugger_step(state)
        assert state.prev_regs[0] == 1
        assert state.prev_regs[1] == 0

    def test_step_message(self, make_state) -> None:
        state = make_state(COUNT_ROM)
        debugger_step(state)
        assert state.message == "0x200: LD V0, 0x01  ->  PC 0x202 (cycle 1)"

    def test_step_error_halts(self, make_state) -> None:
        state = make_state(b"")
        debugger_step(state)
        assert isinstance(state.error, DecodeError)
        assert state.message.startswith("Error: Unknown opcode: 0x0000")
        debugger_step(state)
        assert state.message.startswith("CPU halted")
        assert state.cpu.pc == PROGRAM_START

    def test_step_reports_key_wait(self, make_state) -> None:
        state = make_state(KEY_ROM)
        debugger_step(state)
        assert state.cpu.waiting_for_key
        assert state.message.startswith("Waiting for key at 0x200")

    def test_timers_tick_once_per_frame(self, make_state) -> None:
        state = make_state(LOOP_ROM, cycles_per_frame=4)
        state.cpu.timers.delay = 10
        debugger_step(state)
        assert state.cpu.timers.delay == 9
        for _ in range(3):
            debugger_step(state)
        assert state.cpu.timers.delay == 9
        debugger_step(state)
        assert state.cpu.timers.delay == 8


class TestDebuggerContinue:
    def test_continue_stops_at_breakpoint(self, make_state) -> None:
        state = make_state(COUNT_ROM)
        state.breakpoints.add(0x204)
        debugger_continue(state)
        assert state.cpu.pc == 0x204
        assert state.message == "Breakpoint hit at 0x204 (ran 2 cycles)"

    def test_continue_stops_at_key_wait(self, make_state) -> None:
        state = make_state(KEY_ROM)
        debugger_continue(state)
        assert state.cpu.pc == PROGRAM_START
        assert state.cpu.cycle_count == 1
        assert "Waiting for key" in state.message

    def test_continue_resumes_after_key(self, make_state) -> None:
        state = make_state(KEY_ROM)
        debugger_continue(state)
        process_command(state, "k 7")
        debugger_continue(state, max_cycles=20)
        assert state.cpu.registers.read(3) == 7
        assert state.message == "Stopped after 20 cycles (limit reached)."

    def test_continue_stops_at_max_cycles(self, make_state) -> None:
        state = make_state(LOOP_ROM)
        debugger_continue(state, max_cycles=50)
        assert state.cpu.cycle_count == 50
        assert "limit reached" in state.message

    def test_continue_stops_on_error(self, make_state) -> None:
        state = make_state(bytes([0x00, 0xEE]))
        debugger_continue(state)
        assert state.error is not None
        assert "Stack underflow" in state.message


class TestRunAtSpeed:
    def test_max_steps(self, make_state) -> None:
        state = make_state(LOOP_ROM)
        renders: list[int] = []
        state.render_fn = lambda st: renders.append(st.cpu.cycle_count)
        debugger_run_at_speed(state, hz=1000, max_steps=10)
        assert state.cpu.cycle_count == 10
        assert state.message == "Stopped after 10 steps (limit reached)."
        assert renders

    def test_stops_at_breakpoint(self, make_state) -> None:
        state = make_state(COUNT_ROM)
        state.breakpoints.add(0x206)
        debugger_run_at_speed(state, hz=1000, max_steps=100)
        assert state.cpu.pc == 0x206
        assert "Breakpoint hit at 0x206" in state.message


class TestProcessCommand:
    def test_step_command(self, make_state) -> None:
        state = make_state(COUNT_ROM)
        assert process_command(state, "s") is True
        assert state.cpu.pc == PROGRAM_START + 2

    def test_case_insensitive(self, make_state) -> None:
        state = make_state(COUNT_ROM)
        process_command(state, "STEP")
        assert state.cpu.pc == PROGRAM_START + 2

    def test_breakpoint_toggle(self, make_state) -> None:
        state = make_state(COUNT_ROM)
        process_command(state, "b 204")
        assert 0x204 in state.breakpoints
        process_command(state, "b 0x204")
        assert 0x204 not in state.breakpoints
        assert state.message == "Breakpoint removed at 0x204"

    def test_breakpoint_invalid(self, make_state) -> None:
        state = make_state()
        process_command(state, "b xyz")
        assert state.message == "Invalid address: xyz"
        process_command(state, "b")
        assert state.message.startswith("Usage")

    def test_goto(self, make_state) -> None:
        state = make_state()
        process_command(state, "g 300")
        assert state.mem_view_addr == 0x300

    def test_key_toggle(self, make_state) -> None:
        state = make_state()
        process_command(state, "k a")
        assert state.cpu.keypad.is_pressed(0xA)
        assert state.cpu.keypad.last_pressed == 0xA
        assert state.message == "Key A pressed"
        process_command(state, "k A")
        assert not state.cpu.keypad.is_pressed(0xA)
        assert state.message == "Key A released"

    def test_key_invalid(self, make_state) -> None:
        state = make_state()
        process_command(state, "k 10")
        assert state.message == "Invalid key: 10"
        assert state.cpu.keypad.held() == []

    def test_tick(self, make_state) -> None:
        state = make_state()
        state.cpu.timers.sound = 3
        process_command(state, "t")
        assert state.cpu.timers.sound == 2
        assert state.message == "Timers ticked: DT=0 ST=2"

    def test_reset_reloads_rom(self, make_state) -> None:
        state = make_state(COUNT_ROM)
        process_command(state, "c")
        state.cpu.memory.write8(PROGRAM_START, 0xFF)
        process_command(state, "x")
        assert state.cpu.pc == PROGRAM_START
        assert state.cpu.memory.read8(PROGRAM_START) == 0x60
        assert state.cpu.cycle_count == 0
        assert state.error is None

    def test_reset_clears_error(self, make_state) -> None:
        state = make_state(bytes([0x00, 0xEE]))
        process_command(state, "s")
        assert state.error is not None
        process_command(state, "reset")
        assert state.error is None

    def test_run_usage_errors(self, make_state) -> None:
        state = make_state()
        process_command(state, "r")
        assert state.message == "Usage: run <hz> [max_steps]"
        process_command(state, "r fast")
        assert state.message == "Invalid hz: fast"
        process_command(state, "r 0")
        assert state.message == "Hz must be >= 1."
        process_command(state, "r 60 0")
        assert state.message == "max_steps must be >= 1."

    def test_help_and_empty(self, make_state) -> None:
        state = make_state()
        process_command(state, "h")
        assert state.message == HELP_TEXT
        state.message = ""
        process_command(state, "   ")
        assert state.message == HELP_TEXT

    def test_unknown_command(self, make_state) -> None:
        state = make_state()
        assert process_command(state, "zap") is True
        assert state.message.startswith("Unknown command: zap")

    def test_quit(self, make_state) -> None:
        state = make_state()
        assert process_command(state, "q") is False
        assert process_command(state, "quit") is False


class TestDebuggerState:
    def test_defaults(self, make_state) -> None:
        state = make_state()
        assert isinstance(state, DebuggerState)
        assert state.breakpoints == set()
        assert state.mem_view_addr == PROGRAM_START
        assert state.error is None
        assert state.frame_cycles == 0
