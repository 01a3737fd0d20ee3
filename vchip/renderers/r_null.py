#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

This module can be used on its own as a Renderer plugin for headless runs.
Without a renderer, performance data will also not be shown.  The last frame
presented is kept, so it can still be inspected.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale

        if self.scale < 1:
            raise RendererError("Scale must be at least 1")

        self.title = ""
        self.last_frame = None
        self.frames_presented = 0

    def present(self, cells, cols, rows):  # pylint: disable=unused-argument
        # Draw every lit cell as a filled square of side 'scale' at (col * scale, row * scale)
        self.last_frame = bytes(cells)
        self.frames_presented += 1

    def set_title(self, title):
        self.title = title

    def shutdown(self):
        pass
