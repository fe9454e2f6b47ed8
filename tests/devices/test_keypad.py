"""Tests for the keypad, timers and random source."""

import pytest

from chip8_vm.devices.keypad import Keypad
from chip8_vm.devices.rng import RandomSource, SystemRandomSource
from chip8_vm.devices.timers import Timers
from chip8_vm.errors import InvalidKeyError


class TestKeypad:
    def test_press_latches(self) -> None:
        pad = Keypad()
        pad.set_key(7, True)
        assert pad.is_pressed(7)
        assert pad.last_pressed == 7

    def test_repeat_press_does_not_relatch(self) -> None:
        pad = Keypad()
        pad.set_key(7, True)
        pad.clear_latch()
        pad.set_key(7, True)
        assert pad.last_pressed is None

    def test_release_does_not_latch(self) -> None:
        pad = Keypad()
        pad.set_key(7, True)
        pad.clear_latch()
        pad.set_key(7, False)
        assert pad.last_pressed is None
        assert not pad.is_pressed(7)

    def test_newer_press_overwrites(self) -> None:
        pad = Keypad()
        pad.set_key(1, True)
        pad.set_key(2, True)
        assert pad.last_pressed == 2
        assert pad.held() == [1, 2]

    @pytest.mark.parametrize("index", [-1, 16])
    def test_invalid_index(self, index: int) -> None:
        pad = Keypad()
        with pytest.raises(InvalidKeyError):
            pad.set_key(index, True)
        with pytest.raises(InvalidKeyError):
            pad.is_pressed(index)

    def test_reset(self) -> None:
        pad = Keypad()
        pad.set_key(3, True)
        pad.reset()
        assert pad.held() == []
        assert pad.last_pressed is None


class TestTimers:
    def test_tick_decrements_both(self) -> None:
        timers = Timers()
        timers.delay = 3
        timers.sound = 1
        timers.tick()
        assert (timers.delay, timers.sound) == (2, 0)

    def test_stops_at_zero(self) -> None:
        timers = Timers()
        timers.tick()
        assert (timers.delay, timers.sound) == (0, 0)

    def test_reset(self) -> None:
        timers = Timers()
        timers.delay = 9
        timers.reset()
        assert timers.delay == 0


class TestRandomSource:
    def test_bytes_in_range(self) -> None:
        rng = SystemRandomSource()
        assert all(0 <= rng.next_byte() <= 0xFF for _ in range(200))

    def test_seed_is_reproducible(self) -> None:
        a = SystemRandomSource(42)
        b = SystemRandomSource(42)
        assert [a.next_byte() for _ in range(10)] == [b.next_byte() for _ in range(10)]

    def test_protocol(self) -> None:
        assert isinstance(SystemRandomSource(), RandomSource)
