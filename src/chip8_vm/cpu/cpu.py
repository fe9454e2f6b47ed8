"""CPU core: fetch-decode-execute loop over the CHIP-8 machine state."""

from __future__ import annotations

from ..devices.display import DISPLAY_WIDTH, Framebuffer
from ..devices.keypad import Keypad
from ..devices.rng import RandomSource, SystemRandomSource
from ..devices.timers import Timers
from ..errors import DecodeError, LoadError, PcOutOfBoundsError
from ..memory.font import FONT, FONT_START
from ..memory.ram import MEMORY_SIZE, RAM
from .decode import Instruction, Op, decode, instruction_mnemonic
from .execute import execute
from .quirks import Quirks
from .registers import RegisterFile
from .stack import CallStack

PROGRAM_START = 0x200
MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START


class CPU:
    """CHIP-8 interpreter owning memory, registers, stack, display, timers and keys.

    The host drives it: ``load`` a ROM, call ``cycle`` some number of
    times per frame, ``tick_timers`` once per 1/60 s, and ``set_key`` as
    input arrives. Nothing here sleeps or blocks; waiting for a key is a
    PC stall that the host observes through ``waiting_for_key``.
    """

    def __init__(
        self,
        quirks: Quirks | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self.quirks = quirks if quirks is not None else Quirks()
        self.rng: RandomSource = rng if rng is not None else SystemRandomSource()
        self.memory = RAM(MEMORY_SIZE)
        self.registers = RegisterFile()
        self.stack = CallStack()
        self.display = Framebuffer(DISPLAY_WIDTH, self.quirks.display_height)
        self.timers = Timers()
        self.keypad = Keypad()
        self.pc: int = PROGRAM_START
        self.i: int = 0
        self.draw_flag: bool = False
        self.waiting_for_key: bool = False
        self.cycle_count: int = 0
        self.instruction_stats: dict[str, int] = {}
        self.reset()

    def reset(self) -> None:
        """Zero all state and reload the font. Quirks and RNG are kept."""
        self.memory.clear()
        self.memory.load_segment(FONT_START, FONT)
        self.registers.reset()
        self.stack.reset()
        self.display.clear()
        self.timers.reset()
        self.keypad.reset()
        self.pc = PROGRAM_START
        self.i = 0
        self.draw_flag = False
        self.waiting_for_key = False
        self.cycle_count = 0
        self.instruction_stats = {}

    def load(self, rom: bytes) -> None:
        """Copy a ROM image into memory at 0x200.

        Raises:
            LoadError: If the image is larger than the program area.
                Memory is not modified.
        """
        if len(rom) > MAX_ROM_SIZE:
            raise LoadError(
                f"ROM is {len(rom)} bytes, program area holds {MAX_ROM_SIZE}"
            )
        self.memory.load_segment(PROGRAM_START, bytes(rom))

    def cycle(self) -> Instruction:
        """Execute one instruction cycle: fetch, decode, execute.

        Clears the key-press latch afterwards whether or not the
        instruction used it, and records the mnemonic in
        ``instruction_stats``. A failed cycle leaves all state untouched.

        Returns:
            The instruction that was executed.

        Raises:
            PcOutOfBoundsError: If PC does not address a full opcode.
            DecodeError: If the opcode is unknown.
            ExecutionError: If the instruction cannot complete.
        """
        pc = self.pc
        if pc < 0 or pc + 2 > self.memory.size:
            raise PcOutOfBoundsError(f"PC out of bounds: 0x{pc:04X}", pc)
        inst = decode(self.memory.read16(pc))
        if inst.op is Op.UNKNOWN:
            raise DecodeError(inst.word, pc)

        next_pc = execute(inst, self)
        self.waiting_for_key = inst.op is Op.HALT_UNTIL_PRESSED and next_pc == pc
        self.pc = next_pc
        self.keypad.clear_latch()

        mnemonic = instruction_mnemonic(inst)
        self.instruction_stats[mnemonic] = self.instruction_stats.get(mnemonic, 0) + 1
        self.cycle_count += 1
        return inst

    def tick_timers(self) -> None:
        """Decrement delay and sound timers. Call at 60 Hz."""
        self.timers.tick()

    def set_key(self, index: int, pressed: bool) -> None:
        """Set key `index` (0-15) held or released."""
        self.keypad.set_key(index, pressed)

    @property
    def framebuffer(self) -> tuple[tuple[bool, ...], ...]:
        """Read-only snapshot of the display, indexed [row][col]."""
        return self.display.view()

    @property
    def sound_active(self) -> bool:
        return self.timers.sound > 0
