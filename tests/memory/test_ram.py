"""Tests for RAM and the built-in font."""

import pytest

from chip8_vm.errors import MemoryAccessError
from chip8_vm.memory.font import FONT, FONT_START, GLYPH_SIZE, glyph_address
from chip8_vm.memory.ram import MEMORY_SIZE, RAM


class TestRAM:
    def test_zeroed_on_init(self) -> None:
        ram = RAM()
        assert ram.size == MEMORY_SIZE
        assert ram.dump() == bytes(MEMORY_SIZE)

    def test_byte_round_trip(self) -> None:
        ram = RAM()
        ram.write8(0x300, 0x1AB)
        assert ram.read8(0x300) == 0xAB

    def test_word_is_big_endian(self) -> None:
        ram = RAM()
        ram.write16(0x200, 0x1234)
        assert ram.read8(0x200) == 0x12
        assert ram.read8(0x201) == 0x34
        assert ram.read16(0x200) == 0x1234

    def test_last_byte_accessible(self) -> None:
        ram = RAM()
        ram.write8(0xFFF, 7)
        assert ram.read8(0xFFF) == 7

    @pytest.mark.parametrize("addr", [-1, MEMORY_SIZE])
    def test_byte_out_of_bounds(self, addr: int) -> None:
        ram = RAM()
        with pytest.raises(MemoryAccessError):
            ram.read8(addr)
        with pytest.raises(MemoryAccessError):
            ram.write8(addr, 0)

    def test_word_straddling_end(self) -> None:
        ram = RAM()
        with pytest.raises(MemoryAccessError):
            ram.read16(0xFFF)

    def test_read_block(self) -> None:
        ram = RAM()
        ram.load_segment(0x400, b"\x01\x02\x03")
        assert ram.read_block(0x400, 3) == b"\x01\x02\x03"
        assert ram.read_block(0x400, 0) == b""

    def test_segment_too_large_writes_nothing(self) -> None:
        ram = RAM()
        with pytest.raises(MemoryAccessError):
            ram.load_segment(0xFFE, b"\xFF\xFF\xFF")
        assert ram.dump() == bytes(MEMORY_SIZE)

    def test_check_attaches_pc(self) -> None:
        ram = RAM()
        with pytest.raises(MemoryAccessError) as exc_info:
            ram.check(0xFFD, 5, pc=0x246)
        assert exc_info.value.pc == 0x246

    def test_clear(self) -> None:
        ram = RAM()
        ram.write8(0x10, 1)
        ram.clear()
        assert ram.read8(0x10) == 0

    def test_dump_is_a_copy(self) -> None:
        ram = RAM()
        snap = ram.dump()
        ram.write8(0, 1)
        assert snap[0] == 0


class TestFont:
    def test_sixteen_five_byte_glyphs(self) -> None:
        assert len(FONT) == 16 * GLYPH_SIZE
        assert FONT_START == 0

    def test_glyph_addresses(self) -> None:
        assert glyph_address(0) == 0
        assert glyph_address(1) == 5
        assert glyph_address(0xF) == 75

    def test_glyphs_fit_left_nibble(self) -> None:
        assert all(b & 0x0F == 0 for b in FONT)

    def test_digit_one(self) -> None:
        start = glyph_address(1)
        assert FONT[start:start + GLYPH_SIZE] == bytes([0x20, 0x60, 0x20, 0x20, 0x70])
