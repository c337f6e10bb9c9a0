# Chip-8 ROM loader.
#
# To the extent possible under law, the person who associated CC0 with
# this work has waived all copyright and related or neighboring rights
# to this work.
#
# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

import logging

from chip8.machine import Machine

log = logging.getLogger(__name__)


def read_rom(path):
    log.info(f"Loading program {path}")
    with open(path, 'rb') as p:
        return p.read()


def boot(program):
    """A fresh machine with fonts loaded and program (bytes or a path) at 0x200"""
    if not isinstance(program, (bytes, bytearray)):
        program = read_rom(program)
    machine = Machine()
    machine.load_fonts()
    machine.load_program(program)
    return machine
