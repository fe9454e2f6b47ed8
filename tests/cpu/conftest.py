"""Shared fixtures for CPU tests."""

from __future__ import annotations

import pytest

from chip8_vm.cpu.cpu import CPU
from chip8_vm.cpu.quirks import Quirks


class FixedRandom:
    """RandomSource that replays a fixed byte sequence."""

    def __init__(self, values: list[int]) -> None:
        self._values = list(values)
        self._pos = 0

    def next_byte(self) -> int:
        value = self._values[self._pos % len(self._values)]
        self._pos += 1
        return value


@pytest.fixture
def make_cpu():
    """Factory fixture: returns a function that creates a fresh CPU."""
    def _make(quirks: Quirks | None = None, rng_values: list[int] | None = None) -> CPU:
        rng = FixedRandom(rng_values) if rng_values is not None else FixedRandom([0xAB])
        return CPU(quirks=quirks, rng=rng)
    return _make


@pytest.fixture
def exec_instruction(make_cpu):
    """Write a single 16-bit opcode at PC, run one cycle, return the cpu."""
    def _exec(cpu: CPU | None = None, word: int = 0) -> CPU:
        if cpu is None:
            cpu = make_cpu()
        cpu.memory.write16(cpu.pc, word)
        cpu.cycle()
        return cpu
    return _exec


@pytest.fixture
def set_regs():
    """Set named registers (e.g., set_regs(cpu, V0=5, VF=1))."""
    def _set(cpu: CPU, **kwargs: int) -> None:
        for name, value in kwargs.items():
            if not name.startswith("V"):
                raise ValueError(f"Register name must start with 'V': {name}")
            cpu.registers.write(int(name[1:], 16), value)
    return _set
