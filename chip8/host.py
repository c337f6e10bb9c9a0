# Chip-8 pygame display and keyboard.
#
# To the extent possible under law, the person who associated CC0 with
# this work has waived all copyright and related or neighboring rights
# to this work.
#
# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

"""pygame host: keyboard in, pixels out."""

import logging

import pygame

from chip8.constants import (KEY_COUNT, VIDEO_X, VIDEO_Y, VIDEO_RES, PIXEL_ON,
                             PIXEL_OFF, REG_FONT, REG_FONT_RES, REG_FONT_PAD,
                             REG_TEXT, REG_BACK)

log = logging.getLogger(__name__)

# The key map is a little jumbled since the
# Chip-8 has a slightly skewed layout, where
# internal key values are identical to their
# face value in hex.
# Their equivalents are mapped to a grid beginning at key 1 and
# proceeding 4 keys across each row and all the way down

# +-----+-----+-----+-----+
# | 1/1 | 2/2 | 3/3 | C/4 |
# +-----+-----+-----+-----+
# | 4/Q | 5/W | 6/E | D/R |
# +-----+-----+-----+-----+
# | 7/A | 8/S | 9/D | E/F |
# +-----+-----+-----+-----+
# | A/Z | 0/X | B/C | F/V |
# +-----+-----+-----+-----+

# Indexed by Chip-8 key
KEY_MAP = [
    pygame.K_x, pygame.K_1, pygame.K_2, pygame.K_3,
    pygame.K_q, pygame.K_w, pygame.K_e, pygame.K_a,
    pygame.K_s, pygame.K_d, pygame.K_z, pygame.K_c,
    pygame.K_4, pygame.K_r, pygame.K_f, pygame.K_v
]

# Control commands returned by PygameInput
QUIT = "quit"
STEP = "step"
RESUME = "resume"

CONTROL_KEYS = {
    pygame.K_ESCAPE: QUIT,
    pygame.K_SPACE: STEP,
    pygame.K_p: RESUME,
}


class PygameInput:
    """Tracks which of the 16 keys are held from pygame key events"""

    def __init__(self, key_map=KEY_MAP):
        self.key_map = key_map
        self.keys = [False] * KEY_COUNT

    def handle_event(self, event):
        if event.type == pygame.QUIT:
            return QUIT
        if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
            return None
        down = event.type == pygame.KEYDOWN
        if event.key in self.key_map:
            self.keys[self.key_map.index(event.key)] = down
            log.debug(f"Key {self.key_map.index(event.key):1X} {'down' if down else 'up'}")
            return None
        if down:
            return CONTROL_KEYS.get(event.key)
        return None

    def poll(self):
        """Drain the pygame event queue, returning control commands seen"""
        commands = []
        for event in pygame.event.get():
            command = self.handle_event(event)
            if command is not None:
                commands.append(command)
        return commands

    def snapshot(self):
        return list(self.keys)


class PygameRenderer:
    """Presents the framebuffer in a pygame window, optionally with a
    register panel underneath it."""

    def __init__(self, scale=VIDEO_RES, palette=(PIXEL_ON, PIXEL_OFF),
                 show_registers=False, width=VIDEO_X, height=VIDEO_Y):
        self.scale = scale
        self.on_color, self.off_color = palette
        self.show_registers = show_registers
        self.video_w = width * scale
        self.video_h = height * scale
        self.font = None
        panel_h = 0
        if show_registers:
            pygame.font.init()
            self.font = pygame.font.SysFont(REG_FONT, REG_FONT_RES)
            panel_h = 5 * REG_FONT_RES + REG_FONT_PAD
        log.info(f"Display mode {self.video_w} x {self.video_h + panel_h}")
        pygame.display.set_caption("CHIP-8")
        self.screen = pygame.display.set_mode([self.video_w, self.video_h + panel_h])
        self.panel = (0, self.video_h, self.video_w, panel_h)

    def present(self, framebuffer):
        self.screen.fill(self.off_color, (0, 0, self.video_w, self.video_h))
        for y, row in enumerate(framebuffer.rows()):
            for x, px in enumerate(row):
                if px:
                    pygame.draw.rect(self.screen, self.on_color,
                                     (x * self.scale, y * self.scale, self.scale, self.scale))

    def draw_registers(self, machine):
        if not self.show_registers:
            return
        line_off = self.font.size("V")[1]
        # This just blanks the register display.
        self.screen.fill(REG_BACK, self.panel)
        v = machine.registers
        for x in range(0, 16, 4):
            disp = " ".join(f"V{x + r:1X}: 0x{v[x + r]:02x}" for r in range(4))
            text = self.font.render(disp, False, REG_TEXT)
            self.screen.blit(text, (0, self.video_h + line_off * (x // 4)))
        disp = (f"PC: 0x{machine.program_counter:04x} I: 0x{machine.index_register:04x} "
                f"DT: 0x{machine.delay_timer:02x} ST: 0x{machine.sound_timer:02x}"
                f"{' BEEP' if machine.sound_active else ''}")
        text = self.font.render(disp, False, REG_TEXT)
        self.screen.blit(text, (0, self.video_h + line_off * 4))

    def flip(self):
        pygame.display.flip()
