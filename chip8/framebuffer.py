# Output - 64x32 display, every pixel is either on or off.
# Sprites are XORed onto the screen one byte (8 pixels) per row.

import numpy as np

from .constants import HEIGHT, WIDTH

_BITS = np.arange(8)


class Framebuffer:

    def __init__(self, width=WIDTH, height=HEIGHT):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width), dtype=bool)

    def clear(self):
        self.pixels[:] = False

    def draw_sprite(self, x, y, sprite, wrap=False):
        """XOR ``sprite`` (one byte per row) onto the screen at (x, y).

        The origin always wraps onto the screen. Pixels that run past the right or
        bottom edge wrap around when ``wrap`` is set and are dropped otherwise.
        Returns True if any lit pixel was switched off.
        """
        x %= self.width
        y %= self.height
        rows = np.frombuffer(bytes(sprite), dtype=np.uint8)
        if rows.size == 0:
            return False
        bits = np.unpackbits(rows).reshape(-1, 8).astype(bool)
        row_idx = y + np.arange(rows.size)
        col_idx = x + _BITS
        if wrap:
            row_idx %= self.height
            col_idx %= self.width
        else:
            bits = bits[row_idx < self.height][:, col_idx < self.width]
            row_idx = row_idx[row_idx < self.height]
            col_idx = col_idx[col_idx < self.width]

        region = np.ix_(row_idx, col_idx)
        collision = bool(np.any(self.pixels[region] & bits))
        self.pixels[region] ^= bits
        return collision

    def snapshot(self):
        """Read-only copy of the screen, indexed [row, column]."""
        frame = self.pixels.copy()
        frame.flags.writeable = False
        return frame

    def __getitem__(self, pos):
        x, y = pos
        return bool(self.pixels[y, x])

    def __str__(self):
        return "\n".join("".join("#" if p else "." for p in row) for row in self.pixels)
