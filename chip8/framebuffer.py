# Chip-8 monochrome framebuffer.
#
# To the extent possible under law, the person who associated CC0 with
# this work has waived all copyright and related or neighboring rights
# to this work.
#
# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

from chip8.constants import VIDEO_X, VIDEO_Y, SPRITE_WIDTH


class Framebuffer:
    """Monochrome pixel grid, one cell per pixel holding 0 or 1.

    Sprites are XOR'd in. The first pixel of a sprite always lands on
    screen (its position wraps), the rest clip at the right and bottom
    edges unless wrap is set, in which case they reappear on the other side.
    """

    def __init__(self, width=VIDEO_X, height=VIDEO_Y, wrap=False):
        self.width = width
        self.height = height
        self.wrap = wrap
        self.pixels = bytearray(width * height)
        # Set on every change so the host only presents when needed
        self.dirty = True

    def clear(self):
        self.pixels = bytearray(self.width * self.height)
        self.dirty = True

    def pixel(self, x, y):
        return self.pixels[y * self.width + x]

    def draw_sprite(self, x, y, rows):
        """XOR sprite rows (bit 7 leftmost) in at (x, y).
        Returns True if any lit pixel was switched off."""
        x0 = x % self.width
        y0 = y % self.height
        collision = False
        for row, byte in enumerate(rows):
            y_off = y0 + row
            if y_off >= self.height:
                if not self.wrap:
                    break
                y_off %= self.height
            for col in range(SPRITE_WIDTH):
                x_off = x0 + col
                if x_off >= self.width:
                    if not self.wrap:
                        break
                    x_off %= self.width
                if not byte >> (7 - col) & 0x1:
                    continue
                cell = y_off * self.width + x_off
                if self.pixels[cell]:
                    collision = True
                self.pixels[cell] ^= 1
        self.dirty = True
        return collision

    def rows(self):
        return [list(self.pixels[y * self.width:(y + 1) * self.width])
                for y in range(self.height)]

    def lit(self):
        return sum(self.pixels)

    def dump(self, on="#", off="."):
        return "\n".join("".join(on if p else off for p in row) for row in self.rows())
