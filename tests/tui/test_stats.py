"""Tests for TUI instruction statistics formatting."""

from chip8_vm.cpu.decode import Op
from chip8_vm.tui.stats import _categorize, format_instruction_stats


class TestCategorize:
    def test_flow(self) -> None:
        assert _categorize("JUMP") == "Flow"
        assert _categorize("SKIP_EQUAL") == "Flow"

    def test_alu(self) -> None:
        assert _categorize("ADD") == "ALU"
        assert _categorize("RAND") == "ALU"

    def test_memory(self) -> None:
        assert _categorize("STORE_BCD") == "Memory"

    def test_display(self) -> None:
        assert _categorize("DRAW") == "Display"

    def test_keys_timers(self) -> None:
        assert _categorize("HALT_UNTIL_PRESSED") == "Keys/Timers"
        assert _categorize("SET_SOUND") == "Keys/Timers"

    def test_every_executable_op_categorized(self) -> None:
        for op in Op:
            if op is Op.UNKNOWN:
                continue
            assert _categorize(op.name) != "Other", op.name

    def test_unknown(self) -> None:
        assert _categorize("NOPE") == "Other"


class TestFormatInstructionStats:
    def test_empty_dict(self) -> None:
        assert format_instruction_stats({}) == "No instructions executed."

    def test_shows_top_n_entries(self) -> None:
        stats = {f"INSTR_{i}": (100 - i) for i in range(20)}
        result = format_instruction_stats(stats, top_n=5)
        assert "INSTR_0" in result
        assert "INSTR_4" in result
        assert "INSTR_5" not in result
        assert "... others" in result

    def test_header_total(self) -> None:
        result = format_instruction_stats({"ADD": 1500, "DRAW": 500})
        assert "Top 2 instructions (total: 2,000)" in result

    def test_percentages(self) -> None:
        result = format_instruction_stats({"ADD": 3, "DRAW": 1})
        assert "( 75.0%)" in result
        assert "( 25.0%)" in result

    def test_category_totals(self) -> None:
        result = format_instruction_stats({"ADD": 3, "DRAW": 1})
        assert "ALU: 3 (75%)" in result
        assert "Display: 1 (25%)" in result
