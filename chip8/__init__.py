# Chip-8 interpreter package.
#
# To the extent possible under law, the person who associated CC0 with
# this work has waived all copyright and related or neighboring rights
# to this work.
#
# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

"""A Chip-8 interpreter: machine state, decoder, engine and a pygame host."""

from chip8.errors import (Chip8Error, DecodeError, StackOverflow,
                          StackUnderflow, OutOfBoundsAccess, ProgramTooLarge)
from chip8.machine import Machine
from chip8.framebuffer import Framebuffer
from chip8.instructions import decode, disassemble
from chip8.cpu import Interpreter

__version__ = "0.2.0"
