# Chip-8 emulation loop.
#
# To the extent possible under law, the person who associated CC0 with
# this work has waived all copyright and related or neighboring rights
# to this work.
#
# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

import logging

from chip8.constants import TIMER_HZ, CYCLE_HZ
from chip8.host import QUIT, STEP, RESUME

log = logging.getLogger(__name__)


class Driver:
    """The main emulation loop, one frame per TIMER_HZ tick.

    Each frame polls input, runs a slice of instructions, ticks the timers
    and presents the screen. Timers tick on every frame, including ones
    spent paused or waiting on Fx0A.
    """

    def __init__(self, interpreter, renderer, keypad,
                 cycles_per_frame=CYCLE_HZ // TIMER_HZ, breakpoints=()):
        self.interpreter = interpreter
        self.machine = interpreter.machine
        self.framebuffer = interpreter.framebuffer
        self.renderer = renderer
        self.keypad = keypad
        self.cycles_per_frame = max(1, cycles_per_frame)
        self.breakpoints = set(breakpoints)
        self.running = True
        self.paused = False
        self._step_once = False
        # address we were paused at, so resuming doesn't re-trigger it
        self._released = None

    def handle_command(self, command):
        if command == QUIT:
            self.running = False
        elif command == STEP:
            self.paused = True
            self._step_once = True
        elif command == RESUME:
            self.paused = False
            self._released = self.machine.program_counter
            log.info("Resuming")

    def run_cycles(self):
        """Run this frame's instructions"""
        if self.paused and not self._step_once:
            return 0
        if self._step_once:
            self._step_once = False
            self._released = self.machine.program_counter
            self.interpreter.step()
            return 1
        executed = 0
        for _ in range(self.cycles_per_frame):
            if self.machine.awaiting_key is not None:
                # one attempt per frame, a resolution needs a fresh snapshot
                self.interpreter.step()
                if self.machine.awaiting_key is not None:
                    break
                continue
            pc = self.machine.program_counter
            if pc in self.breakpoints and pc != self._released:
                log.info(f"Breakpoint at 0x{pc:04x}")
                self.paused = True
                break
            self._released = None
            self.interpreter.step()
            executed += 1
        return executed

    def frame(self):
        for command in self.keypad.poll():
            self.handle_command(command)
        if not self.running:
            return False
        self.machine.set_keypad(self.keypad.snapshot())
        self.run_cycles()
        self.machine.tick_timers()
        if self.framebuffer.dirty:
            self.renderer.present(self.framebuffer)
            self.framebuffer.dirty = False
        self.renderer.draw_registers(self.machine)
        self.renderer.flip()
        return True

    def run(self, clock):
        log.info("Emulation starting")
        while self.frame():
            clock.tick(TIMER_HZ)
        log.info("Emulation halted")
