#!/usr/bin/env python3

"""
Display Buffer Emulator

Programs cannot write directly into video memory.  Instead, sprites are drawn
to the screen one pixel at a time using an XOR method, so drawing the same
sprite twice in the same place removes it again.  Whenever an XOR turns a lit
pixel off, this is reported back so the CPU can raise its collision flag.

The buffer itself is just one byte per pixel (0 or 1), stored row by row.  It
knows nothing about rendering: the Driver hands a read-only view of it to
whichever Renderer plugin is active, usually at 60Hz.

Coordinates are wrapped once only.  A coordinate past the right or bottom edge
has the width or height subtracted a single time, and a negative coordinate
has it added a single time.  Sprites drawn far off-screen therefore land on
the following rows instead of wrapping cleanly.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import VID_WIDTH, VID_HEIGHT


class Display:
    def __init__(self, vid_width=VID_WIDTH, vid_height=VID_HEIGHT):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.cells = bytearray(self.vid_size)

    def set_pixel(self, x, y):
        # Returns True if the pixel was lit and has now been erased
        if x >= self.vid_width:
            x -= self.vid_width
        elif x < 0:
            x += self.vid_width

        if y >= self.vid_height:
            y -= self.vid_height
        elif y < 0:
            y += self.vid_height

        vram_loc = x + y * self.vid_width

        if not 0 <= vram_loc < self.vid_size:
            # Far enough off-screen that there is no cell to flip
            return False

        pixel = self.cells[vram_loc] ^ 1
        self.cells[vram_loc] = pixel
        return pixel == 0

    def get_pixel(self, x, y):
        return self.cells[x + y * self.vid_width]

    def clear(self):
        self.cells[:] = bytes(self.vid_size)

    def present(self):
        return memoryview(self.cells).toreadonly()

    def get_vid_size(self):
        return self.vid_width, self.vid_height
