# Chip-8 instruction decoder.
#
# To the extent possible under law, the person who associated CC0 with
# this work has waived all copyright and related or neighboring rights
# to this work.
#
# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

"""Decoded instructions.

Every Chip-8 instruction is its own NamedTuple class carrying only the
opcode fields it uses. decode() turns a raw 16-bit opcode into one of
them, so the engine dispatches on the class instead of re-matching bits.

Field names follow Cowgod's reference:
    nnn  lowest 12 bits, an address
    x    bits 11-8, a register
    y    bits 7-4, a register
    n    lowest 4 bits
    kk   lowest 8 bits, a byte
"""

from typing import NamedTuple

from chip8.errors import DecodeError


class Cls(NamedTuple):          # 00E0
    pass


class Ret(NamedTuple):          # 00EE
    pass


class Jump(NamedTuple):         # 1nnn
    nnn: int


class Call(NamedTuple):         # 2nnn
    nnn: int


class SkipEqual(NamedTuple):    # 3xkk
    x: int
    kk: int


class SkipNotEqual(NamedTuple): # 4xkk
    x: int
    kk: int


class SkipEqualReg(NamedTuple): # 5xy0
    x: int
    y: int


class Load(NamedTuple):         # 6xkk
    x: int
    kk: int


class Add(NamedTuple):          # 7xkk
    x: int
    kk: int


class Move(NamedTuple):         # 8xy0
    x: int
    y: int


class Or(NamedTuple):           # 8xy1
    x: int
    y: int


class And(NamedTuple):          # 8xy2
    x: int
    y: int


class Xor(NamedTuple):          # 8xy3
    x: int
    y: int


class AddReg(NamedTuple):       # 8xy4
    x: int
    y: int


class Sub(NamedTuple):          # 8xy5
    x: int
    y: int


class ShiftRight(NamedTuple):   # 8xy6
    x: int
    y: int


class SubN(NamedTuple):         # 8xy7
    x: int
    y: int


class ShiftLeft(NamedTuple):    # 8xyE
    x: int
    y: int


class SkipNotEqualReg(NamedTuple): # 9xy0
    x: int
    y: int


class LoadIndex(NamedTuple):    # Annn
    nnn: int


class JumpOffset(NamedTuple):   # Bnnn
    nnn: int


class Random(NamedTuple):       # Cxkk
    x: int
    kk: int


class Draw(NamedTuple):         # Dxyn
    x: int
    y: int
    n: int


class SkipKey(NamedTuple):      # Ex9E
    x: int


class SkipNotKey(NamedTuple):   # ExA1
    x: int


class LoadDelay(NamedTuple):    # Fx07
    x: int


class WaitKey(NamedTuple):      # Fx0A
    x: int


class SetDelay(NamedTuple):     # Fx15
    x: int


class SetSound(NamedTuple):     # Fx18
    x: int


class AddIndex(NamedTuple):     # Fx1E
    x: int


class LoadFont(NamedTuple):     # Fx29
    x: int


class StoreBCD(NamedTuple):     # Fx33
    x: int


class StoreRegisters(NamedTuple): # Fx55
    x: int


class LoadRegisters(NamedTuple): # Fx65
    x: int


# The whole instruction set, in opcode order
INSTRUCTIONS = (
    Cls, Ret, Jump, Call, SkipEqual, SkipNotEqual, SkipEqualReg, Load, Add,
    Move, Or, And, Xor, AddReg, Sub, ShiftRight, SubN, ShiftLeft,
    SkipNotEqualReg, LoadIndex, JumpOffset, Random, Draw, SkipKey, SkipNotKey,
    LoadDelay, WaitKey, SetDelay, SetSound, AddIndex, LoadFont, StoreBCD,
    StoreRegisters, LoadRegisters,
)

# 0x8xyN family, keyed on N
_ALU = {
    0x0: Move, 0x1: Or, 0x2: And, 0x3: Xor, 0x4: AddReg,
    0x5: Sub, 0x6: ShiftRight, 0x7: SubN, 0xE: ShiftLeft,
}

# 0xFxkk family, keyed on kk
_MISC = {
    0x07: LoadDelay, 0x0A: WaitKey, 0x15: SetDelay, 0x18: SetSound,
    0x1E: AddIndex, 0x29: LoadFont, 0x33: StoreBCD, 0x55: StoreRegisters,
    0x65: LoadRegisters,
}

_KEYS = {0x9E: SkipKey, 0xA1: SkipNotKey}


def decode(opcode):
    """Decode a 16-bit opcode, raising DecodeError for anything outside
    the instruction set."""
    family = opcode >> 12 & 0xF
    x = opcode >> 8 & 0x0F
    y = opcode >> 4 & 0x0F
    n = opcode & 0x000F
    kk = opcode & 0x00FF
    nnn = opcode & 0x0FFF

    if family == 0x0:
        if opcode == 0x00E0:
            return Cls()
        if opcode == 0x00EE:
            return Ret()
    elif family == 0x1:
        return Jump(nnn)
    elif family == 0x2:
        return Call(nnn)
    elif family == 0x3:
        return SkipEqual(x, kk)
    elif family == 0x4:
        return SkipNotEqual(x, kk)
    elif family == 0x5:
        if n == 0:
            return SkipEqualReg(x, y)
    elif family == 0x6:
        return Load(x, kk)
    elif family == 0x7:
        return Add(x, kk)
    elif family == 0x8:
        if n in _ALU:
            return _ALU[n](x, y)
    elif family == 0x9:
        if n == 0:
            return SkipNotEqualReg(x, y)
    elif family == 0xA:
        return LoadIndex(nnn)
    elif family == 0xB:
        return JumpOffset(nnn)
    elif family == 0xC:
        return Random(x, kk)
    elif family == 0xD:
        return Draw(x, y, n)
    elif family == 0xE:
        if kk in _KEYS:
            return _KEYS[kk](x)
    elif family == 0xF:
        if kk in _MISC:
            return _MISC[kk](x)
    raise DecodeError(f"Undefined opcode 0x{opcode:04x}", opcode=opcode)


# Mnemonics for the trace log
_MNEMONICS = {
    Cls: "CLS",
    Ret: "RET",
    Jump: "JP {nnn:03x}",
    Call: "CALL {nnn:03x}",
    SkipEqual: "SE V{x:X}, {kk:02x}",
    SkipNotEqual: "SNE V{x:X}, {kk:02x}",
    SkipEqualReg: "SE V{x:X}, V{y:X}",
    Load: "LD V{x:X}, {kk:02x}",
    Add: "ADD V{x:X}, {kk:02x}",
    Move: "LD V{x:X}, V{y:X}",
    Or: "OR V{x:X}, V{y:X}",
    And: "AND V{x:X}, V{y:X}",
    Xor: "XOR V{x:X}, V{y:X}",
    AddReg: "ADD V{x:X}, V{y:X}",
    Sub: "SUB V{x:X}, V{y:X}",
    ShiftRight: "SHR V{x:X}",
    SubN: "SUBN V{x:X}, V{y:X}",
    ShiftLeft: "SHL V{x:X}",
    SkipNotEqualReg: "SNE V{x:X}, V{y:X}",
    LoadIndex: "LD I, {nnn:03x}",
    JumpOffset: "JP V0, {nnn:03x}",
    Random: "RND V{x:X}, {kk:02x}",
    Draw: "DRW V{x:X}, V{y:X}, {n:x}",
    SkipKey: "SKP V{x:X}",
    SkipNotKey: "SKNP V{x:X}",
    LoadDelay: "LD V{x:X}, DT",
    WaitKey: "LD V{x:X}, K",
    SetDelay: "LD DT, V{x:X}",
    SetSound: "LD ST, V{x:X}",
    AddIndex: "ADD I, V{x:X}",
    LoadFont: "LD F, V{x:X}",
    StoreBCD: "LD B, V{x:X}",
    StoreRegisters: "LD [I], V{x:X}",
    LoadRegisters: "LD V{x:X}, [I]",
}


def disassemble(instruction):
    return _MNEMONICS[type(instruction)].format(**instruction._asdict())
