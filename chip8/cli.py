# Chip-8 interpreter command line.
#
# To the extent possible under law, the person who associated CC0 with
# this work has waived all copyright and related or neighboring rights
# to this work.
#
# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

import argparse
import logging
import sys

import pygame

from chip8.constants import CYCLE_HZ, TIMER_HZ, VIDEO_RES
from chip8.cpu import Interpreter
from chip8.driver import Driver
from chip8.errors import Chip8Error
from chip8.framebuffer import Framebuffer
from chip8.host import PygameInput, PygameRenderer
from chip8.loader import boot

aparser = argparse.ArgumentParser(prog="chip8", description="A Chip-8 interpreter")
aparser.add_argument('program',
    help="A compiled Chip-8 program to load")
aparser.add_argument('--breakpoint',
    help="A hexadecimal program address at which to pause execution",
    metavar="X",
    nargs="+",
    default=[],
    type=lambda x: int(x, 0))
aparser.add_argument('--debug',
    help="Enable verbose debug logging",
    action="store_true")
aparser.add_argument('--speed',
    help=f"Instructions per second (default {CYCLE_HZ})",
    metavar="HZ",
    default=CYCLE_HZ,
    type=int)
aparser.add_argument('--scale',
    help=f"Screen pixels per Chip-8 pixel (default {VIDEO_RES})",
    default=VIDEO_RES,
    type=int)
aparser.add_argument('--wrap-sprites',
    help="Wrap sprites around the screen edges instead of clipping them",
    action="store_true")
aparser.add_argument('--registers',
    help="Show the register panel under the screen",
    action="store_true")


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    args = aparser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        machine = boot(args.program)
    except (OSError, Chip8Error) as e:
        logging.critical(f"Cannot load {args.program}: {e}")
        return 1

    framebuffer = Framebuffer(wrap=args.wrap_sprites)
    interpreter = Interpreter(machine, framebuffer)

    logging.info("Initialise display engine")
    pygame.init()
    try:
        renderer = PygameRenderer(scale=args.scale, show_registers=args.registers)
        driver = Driver(interpreter, renderer, PygameInput(),
                        cycles_per_frame=args.speed // TIMER_HZ,
                        breakpoints=args.breakpoint)
        driver.run(pygame.time.Clock())
    except Chip8Error as e:
        logging.critical(f"Emulation halted: {e}")
        return 1
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
