#!/usr/bin/env python3

"""
Curses Audio Plugin

Allows beeps to be played in the Terminal window (no sampled sound)!

A beep occurs when the tone starts, and at no other time.  Beeps cannot be
stopped, or pitched, since they are effectively just a CTRL+G (character 7 -
BEL).
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import curses
from .a_null import Audio as AudioBase


class Audio(AudioBase):
    def play(self, frequency):
        if not self.playing:
            curses.beep()

        super().play(frequency)
