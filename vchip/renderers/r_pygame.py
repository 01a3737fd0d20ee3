#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Used by the Driver to draw the screen.  This draws graphics onto an SDL window
surface via PyGame.  The window is sized to the display multiplied by the
scale, and every lit pixel is drawn as a filled square, so there is no need to
stretch anything afterwards.

Lit pixels are drawn in white on a dark grey background, unless a palette has
been given.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase
from ..constants import APP_NAME, VID_WIDTH, VID_HEIGHT


class Renderer(RendererBase):
    def __init__(self, scale=None, pygame_palette=None, **kwargs):
        if scale is None:
            scale = 10  # Default pixel size if not supplied, or set to default

        # Background, then foreground
        colour_map = [0x222222, 0xDDDDDD]

        # Override one (or both) of the colours with a user-defined palette, if necessary
        if pygame_palette is not None:
            pygame_palette_split = pygame_palette.split(",")

            if len(pygame_palette_split) > 2:
                raise RendererError("Too many palette colours defined.")

            for pygame_colour_num, pygame_colour in enumerate(pygame_palette_split):
                if len(pygame_colour) != 6:
                    raise RendererError("Palette colours must all be 6 hex digits long.")

                try:
                    colour_map[pygame_colour_num] = int(pygame_colour, 16)
                except ValueError:
                    raise RendererError("Invalid palette colour defined.") from None

        # Split compound RGB values so PyGame can take them directly
        self.rgb_map = [(i >> 16, (i >> 8) & 0xFF, i & 0xFF) for i in colour_map]

        super().__init__(scale, **kwargs)

        pygame.display.init()
        self.set_title(APP_NAME)
        self.display_surface = pygame.display.set_mode((VID_WIDTH * self.scale, VID_HEIGHT * self.scale))

    def present(self, cells, cols, rows):
        scale = self.scale
        surface = self.display_surface
        foreground = self.rgb_map[1]
        surface.fill(self.rgb_map[0])

        for row in range(rows):
            row_start = row * cols

            for col in range(cols):
                if cells[row_start + col]:
                    surface.fill(foreground, (col * scale, row * scale, scale, scale))

        pygame.display.flip()
        super().present(cells, cols, rows)

    def set_title(self, title):
        pygame.display.set_caption(title)
        super().set_title(title)

    def shutdown(self):
        # PyGame currently segfaults if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
