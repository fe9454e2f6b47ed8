"""Shared helpers for TUI tests."""

from __future__ import annotations

import pytest

from chip8_vm.cpu.cpu import CPU
from chip8_vm.devices.rng import SystemRandomSource
from chip8_vm.tui.debugger import DebuggerState


@pytest.fixture
def make_state():
    """Factory fixture: DebuggerState with `rom` loaded at 0x200."""
    def _make(rom: bytes = b"", cycles_per_frame: int = 8) -> DebuggerState:
        cpu = CPU(rng=SystemRandomSource(0))
        cpu.load(rom)
        return DebuggerState(cpu=cpu, rom=rom, cycles_per_frame=cycles_per_frame)
    return _make
