# Chip-8 decode-execute engine.
#
# To the extent possible under law, the person who associated CC0 with
# this work has waived all copyright and related or neighboring rights
# to this work.
#
# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

import logging
import random

from chip8 import instructions as ins
from chip8.constants import FLAG, FONT_LOAD, FONT_HEIGHT
from chip8.errors import Chip8Error

log = logging.getLogger(__name__)


class Interpreter:
    """The decode-execute engine.

    Owns no state of its own beyond the address of the instruction being
    executed; everything is read from and written to the Machine and the
    Framebuffer it was given. Timers are never touched here, the driver
    ticks them.
    """

    # decoded instruction class -> handler method name
    HANDLERS = {
        ins.Cls: "ins_cls",
        ins.Ret: "ins_ret",
        ins.Jump: "ins_jmp",
        ins.Call: "ins_call",
        ins.SkipEqual: "ins_skip_eq",
        ins.SkipNotEqual: "ins_skip_ne",
        ins.SkipEqualReg: "ins_skip_eq_reg",
        ins.Load: "ins_load",
        ins.Add: "ins_add",
        ins.Move: "ins_move",
        ins.Or: "ins_or",
        ins.And: "ins_and",
        ins.Xor: "ins_xor",
        ins.AddReg: "ins_add_reg",
        ins.Sub: "ins_sub",
        ins.ShiftRight: "ins_shr",
        ins.SubN: "ins_subn",
        ins.ShiftLeft: "ins_shl",
        ins.SkipNotEqualReg: "ins_skip_ne_reg",
        ins.LoadIndex: "ins_loadi",
        ins.JumpOffset: "ins_jmp_offset",
        ins.Random: "ins_rnd",
        ins.Draw: "ins_draw",
        ins.SkipKey: "ins_skip_key",
        ins.SkipNotKey: "ins_skip_not_key",
        ins.LoadDelay: "ins_load_delay",
        ins.WaitKey: "ins_wait_key",
        ins.SetDelay: "ins_set_delay",
        ins.SetSound: "ins_set_sound",
        ins.AddIndex: "ins_add_index",
        ins.LoadFont: "ins_load_font",
        ins.StoreBCD: "ins_bcd",
        ins.StoreRegisters: "ins_store",
        ins.LoadRegisters: "ins_restore",
    }

    def __init__(self, machine, framebuffer, rng=None):
        self.machine = machine
        self.framebuffer = framebuffer
        self.rng = rng if rng is not None else random.Random()
        self.address = machine.program_counter
        self._dispatch = {kind: getattr(self, name) for kind, name in self.HANDLERS.items()}

    def fetch(self):
        self.address = self.machine.program_counter
        return self.machine.fetch()

    def decode_and_execute(self, opcode):
        try:
            instruction = ins.decode(opcode)
            log.debug(f"{self.address:04x} | OP 0x{opcode:04x} - {ins.disassemble(instruction)}")
            self._dispatch[type(instruction)](instruction)
        except Chip8Error as e:
            e.locate(opcode, self.address)
            raise
        return instruction

    def step(self):
        """Run one cycle. Returns the executed opcode, or None while an
        Fx0A key wait is still unresolved."""
        if self.machine.awaiting_key is not None:
            self.resolve_key_wait()
            return None
        opcode = self.fetch()
        self.decode_and_execute(opcode)
        return opcode

    def resolve_key_wait(self):
        """Finish a pending Fx0A if the keypad shows a new press"""
        pressed = self.machine.new_key_presses()
        if not pressed:
            return False
        x = self.machine.awaiting_key
        self.machine.registers[x] = pressed[0]
        self.machine.awaiting_key = None
        log.debug(f"Key {pressed[0]:1X} stored to V{x:1X}")
        return True

    def _skip_if(self, condition):
        if condition:
            self.machine.program_counter += 2

    # 0x00E0 CLS - clear the screen
    def ins_cls(self, i):
        self.framebuffer.clear()

    # 0x00EE RET - return from subroutine
    def ins_ret(self, i):
        self.machine.program_counter = self.machine.pop()

    def ins_jmp(self, i):
        self.machine.program_counter = i.nnn

    def ins_call(self, i):
        self.machine.push(self.machine.program_counter)
        self.machine.program_counter = i.nnn

    def ins_skip_eq(self, i):
        self._skip_if(self.machine.registers[i.x] == i.kk)

    def ins_skip_ne(self, i):
        self._skip_if(self.machine.registers[i.x] != i.kk)

    def ins_skip_eq_reg(self, i):
        v = self.machine.registers
        self._skip_if(v[i.x] == v[i.y])

    def ins_skip_ne_reg(self, i):
        v = self.machine.registers
        self._skip_if(v[i.x] != v[i.y])

    def ins_load(self, i):
        self.machine.registers[i.x] = i.kk

    def ins_add(self, i):
        # No carry flag for the immediate form
        v = self.machine.registers
        v[i.x] = (v[i.x] + i.kk) & 0xFF

    # ALU ops. VF is always written last so a flag beats a result in VF.

    def ins_move(self, i):
        v = self.machine.registers
        v[i.x] = v[i.y]

    def ins_or(self, i):
        v = self.machine.registers
        v[i.x] = v[i.x] | v[i.y]

    def ins_and(self, i):
        v = self.machine.registers
        v[i.x] = v[i.x] & v[i.y]

    def ins_xor(self, i):
        v = self.machine.registers
        v[i.x] = v[i.x] ^ v[i.y]

    def ins_add_reg(self, i):
        # ADD Vx, Vy, set carry flag if > 255. Truncate to 8 bits.
        v = self.machine.registers
        result = v[i.x] + v[i.y]
        v[i.x] = result & 0xFF
        v[FLAG] = 1 if result > 0xFF else 0

    def ins_sub(self, i):
        # VF is NOT borrow: 1 when Vx >= Vy
        v = self.machine.registers
        flag = 1 if v[i.x] >= v[i.y] else 0
        v[i.x] = (v[i.x] - v[i.y]) & 0xFF
        v[FLAG] = flag

    def ins_subn(self, i):
        v = self.machine.registers
        flag = 1 if v[i.y] >= v[i.x] else 0
        v[i.x] = (v[i.y] - v[i.x]) & 0xFF
        v[FLAG] = flag

    def ins_shr(self, i):
        v = self.machine.registers
        flag = v[i.x] & 0x1
        v[i.x] = v[i.x] >> 1
        v[FLAG] = flag

    def ins_shl(self, i):
        v = self.machine.registers
        flag = v[i.x] >> 7 & 0x1
        v[i.x] = (v[i.x] << 1) & 0xFF
        v[FLAG] = flag

    def ins_loadi(self, i):
        self.machine.index_register = i.nnn

    def ins_jmp_offset(self, i):
        self.machine.program_counter = i.nnn + self.machine.registers[0]

    def ins_rnd(self, i):
        self.machine.registers[i.x] = self.rng.randint(0, 255) & i.kk

    def ins_draw(self, i):
        """Draw n-row sprite from [I] at (Vx, Vy), VF = collision"""
        m = self.machine
        sprite = m.read(m.index_register, i.n)
        for row in sprite:
            log.debug(f"{row:08b} | {row:02x}")
        collision = self.framebuffer.draw_sprite(m.registers[i.x], m.registers[i.y], sprite)
        m.registers[FLAG] = 1 if collision else 0
        if log.isEnabledFor(logging.DEBUG):
            log.debug(f"{self.framebuffer.lit()} pixels lit, collision {collision}\n{self.framebuffer.dump()}")

    def ins_skip_key(self, i):
        self._skip_if(self.machine.key_pressed(self.machine.registers[i.x]))

    def ins_skip_not_key(self, i):
        self._skip_if(not self.machine.key_pressed(self.machine.registers[i.x]))

    def ins_load_delay(self, i):
        self.machine.registers[i.x] = self.machine.delay_timer

    def ins_wait_key(self, i):
        # Execution is suspended in step() until a new key press arrives
        self.machine.begin_key_wait(i.x)
        log.debug(f"Waiting for key press into V{i.x:1X}")

    def ins_set_delay(self, i):
        self.machine.delay_timer = self.machine.registers[i.x]

    def ins_set_sound(self, i):
        self.machine.sound_timer = self.machine.registers[i.x]

    def ins_add_index(self, i):
        m = self.machine
        m.index_register = (m.index_register + m.registers[i.x]) & 0xFFFF

    def ins_load_font(self, i):
        digit = self.machine.registers[i.x] & 0x0F
        self.machine.index_register = FONT_LOAD + FONT_HEIGHT * digit

    def ins_bcd(self, i):
        value = self.machine.registers[i.x]
        self.machine.write(self.machine.index_register,
                           bytes([value // 100, value // 10 % 10, value % 10]))

    def ins_store(self, i):
        m = self.machine
        m.write(m.index_register, m.registers[:i.x + 1])

    def ins_restore(self, i):
        m = self.machine
        m.registers[:i.x + 1] = m.read(m.index_register, i.x + 1)


_missing = set(ins.INSTRUCTIONS) - set(Interpreter.HANDLERS)
if _missing:
    raise TypeError(f"No handler for {sorted(k.__name__ for k in _missing)}")
