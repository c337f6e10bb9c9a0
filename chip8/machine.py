# Chip-8 machine state.
#
# To the extent possible under law, the person who associated CC0 with
# this work has waived all copyright and related or neighboring rights
# to this work.
#
# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

import logging

from chip8.constants import (TOTAL_RAM, LOAD_POS, REGISTER_COUNT, STACK_SIZE,
                             KEY_COUNT, FONT_LOAD, FONT_MAP)
from chip8.errors import (StackOverflow, StackUnderflow, OutOfBoundsAccess,
                          ProgramTooLarge)

log = logging.getLogger(__name__)


class Machine:
    """Architectural state of a Chip-8: memory, registers, stack, timers
    and the last keypad snapshot. Everything the engine mutates lives here."""

    def __init__(self):
        self.memory = bytearray(TOTAL_RAM)
        self.registers = bytearray(REGISTER_COUNT)
        self.index_register = 0
        self.program_counter = LOAD_POS
        # stack_pointer counts held entries, 0 means empty
        self.stack = [0] * STACK_SIZE
        self.stack_pointer = 0
        # programmable timers, decremented by the driver at TIMER_HZ
        self.delay_timer = 0
        self.sound_timer = 0
        self.keypad = [False] * KEY_COUNT
        self._last_keypad = [False] * KEY_COUNT
        # register id an Fx0A is waiting to fill, or None
        self.awaiting_key = None

    def load_fonts(self, font=FONT_MAP, at=FONT_LOAD):
        self.memory[at:at + len(font)] = font
        log.debug(f"Fonts loaded to {at:04x}")

    def load_program(self, program, at=LOAD_POS):
        """Copy program bytes into memory starting at the load address"""
        if len(program) > len(self.memory) - at:
            raise ProgramTooLarge(
                f"Program is too large: {len(program)} bytes, "
                f"{len(self.memory) - at} available at 0x{at:04x}")
        self.memory[at:at + len(program)] = program
        self.program_counter = at
        log.info(f"Program length {len(program)} bytes loaded at 0x{at:04x}")

    def fetch(self):
        """Read the big-endian opcode at PC and advance PC past it"""
        pc = self.program_counter
        if pc < 0 or pc + 1 >= len(self.memory):
            raise OutOfBoundsAccess(f"Instruction fetch outside memory at 0x{pc:04x}")
        opcode = self.memory[pc] << 8 | self.memory[pc + 1]
        self.program_counter = pc + 2
        return opcode

    def _check_range(self, address, count):
        if address < 0 or address + count > len(self.memory):
            raise OutOfBoundsAccess(
                f"Memory access 0x{address:04x}+{count} outside 0x000-0x{len(self.memory) - 1:03x}")

    def read(self, address, count=1):
        self._check_range(address, count)
        return bytes(self.memory[address:address + count])

    def write(self, address, data):
        self._check_range(address, len(data))
        self.memory[address:address + len(data)] = data

    def check_register(self, x, what="register"):
        if not 0 <= x < REGISTER_COUNT:
            raise OutOfBoundsAccess(f"Invalid {what} 0x{x:02x}")
        return x

    def push(self, address):
        if self.stack_pointer >= len(self.stack):
            raise StackOverflow(f"Stack overflow, {len(self.stack)} return addresses held")
        self.stack_pointer += 1
        self.stack[self.stack_pointer - 1] = address

    def pop(self):
        if self.stack_pointer <= 0:
            raise StackUnderflow("Stack underflow, return with empty stack")
        address = self.stack[self.stack_pointer - 1]
        self.stack_pointer -= 1
        return address

    def tick_timers(self):
        """One 60 Hz tick: count both timers down towards zero"""
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1

    @property
    def sound_active(self):
        return self.sound_timer > 0

    def set_keypad(self, snapshot):
        if len(snapshot) != KEY_COUNT:
            raise ValueError(f"Keypad snapshot needs {KEY_COUNT} keys, got {len(snapshot)}")
        self._last_keypad = self.keypad
        self.keypad = [bool(k) for k in snapshot]

    def begin_key_wait(self, x):
        """Suspend on Fx0A. Only keys going down in a later snapshot count,
        so the current snapshot becomes the baseline."""
        self.awaiting_key = self.check_register(x)
        self._last_keypad = list(self.keypad)

    def new_key_presses(self):
        """Keys down in the current snapshot that were up in the previous one"""
        return [k for k in range(KEY_COUNT)
                if self.keypad[k] and not self._last_keypad[k]]

    def key_pressed(self, key):
        return self.keypad[self.check_register(key, "key")]
