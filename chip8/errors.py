# Chip-8 fatal faults.
#
# To the extent possible under law, the person who associated CC0 with
# this work has waived all copyright and related or neighboring rights
# to this work.
#
# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

"""Faults that halt emulation. None of them are recovered by the engine."""


class Chip8Error(Exception):
    """Base class. opcode and address are filled in by the interpreter
    when the fault happens while executing an instruction."""

    def __init__(self, message, opcode=None, address=None):
        super().__init__(message)
        self.message = message
        self.opcode = opcode
        self.address = address

    def locate(self, opcode, address):
        if self.opcode is None:
            self.opcode = opcode
        if self.address is None:
            self.address = address

    def __str__(self):
        if self.opcode is None or self.address is None:
            return self.message
        return f"{self.message} (opcode 0x{self.opcode:04x} at 0x{self.address:04x})"


class DecodeError(Chip8Error):
    pass


class StackOverflow(Chip8Error):
    pass


class StackUnderflow(Chip8Error):
    pass


class OutOfBoundsAccess(Chip8Error):
    pass


class ProgramTooLarge(Chip8Error):
    pass
