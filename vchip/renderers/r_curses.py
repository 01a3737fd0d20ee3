#!/usr/bin/env python3

"""
Curses Renderer Plugin

Used by the Driver to draw the screen.  This draws graphics in a standard
Linux-style TTY Terminal, the Windows Command Prompt, or PowerShell.

Each pixel is drawn as 'scale' inverted spaces, since terminal characters are
roughly twice as tall as they are wide.  The top line of the pad holds the
title bar.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import curses
from .r_null import Renderer as RendererBase
from ..constants import VID_WIDTH, VID_HEIGHT


class Renderer(RendererBase):
    def __init__(self, scale=None, curses_cursor_mode=0, **kwargs):
        if scale is None:
            scale = 2  # Default horizontal stretch if not supplied, or set to default

        super().__init__(scale, **kwargs)
        self.pixel_char = " " * self.scale
        self.last_screen_height = -1
        self.last_screen_width = -1
        self.cursor_mode = curses_cursor_mode
        self.screen = curses.initscr()
        curses.curs_set(self.cursor_mode)
        curses.noecho()
        curses.cbreak()

        # We have to allow one extra character, presumably for the cursor, otherwise we can't write the furthest
        # bottom-right pixel.  The extra line at the top is for the title.
        self.pad = curses.newpad(VID_HEIGHT + 2, VID_WIDTH * self.scale + 1)

    def present(self, cells, cols, rows):
        pad = self.pad
        pixel_char = self.pixel_char
        scale = self.scale

        for row in range(rows):
            row_start = row * cols

            for col in range(cols):
                pad.addstr(
                    row + 1, col * scale, pixel_char, curses.A_REVERSE if cells[row_start + col] else curses.A_NORMAL
                )

        screen_height, screen_width = self.screen.getmaxyx()

        if screen_height != self.last_screen_height or screen_width != self.last_screen_width:
            # Screen resolution changed, redraw everything
            self.screen.clear()

            if hasattr(curses, "resizeterm"):
                # This doesn't work on Windows
                curses.resizeterm(screen_height, screen_width)

            self.screen.refresh()
            self.last_screen_height = screen_height
            self.last_screen_width = screen_width

        pad.refresh(0, 0, 0, 0, screen_height - 1, screen_width - 1)
        super().present(cells, cols, rows)

    def set_title(self, title):
        line_width = VID_WIDTH * self.scale
        self.pad.addstr(0, 0, title[:line_width].ljust(line_width), curses.A_REVERSE)
        super().set_title(title)

    def shutdown(self):
        curses.nocbreak()
        curses.echo()

        if self.cursor_mode != 1:
            try:
                curses.curs_set(1)
            except curses.error:
                pass

        curses.endwin()
        super().shutdown()

    # No Superclass for this Curses-specific method

    def get_curses_screen(self):
        return self.screen
