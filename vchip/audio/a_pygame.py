#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays the emulated buzzer within PyGame / SDL.

The buzzer only has an 'on' or 'off' status, so a single cycle of a square wave
at the requested frequency is built into an 8-bit PyGame / SDL buffer, and then
looped for as long as the buzzer stays on.  The buffer is only rebuilt if the
frequency changes.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100.0
DEFAULT_VOLUME = 0.1


class Audio(AudioBase):
    def __init__(self):
        self.sound = None
        self.frequency = None
        pygame.mixer.pre_init(int(PLAYBACK_FREQUENCY), size=8, channels=1, buffer=512, allowedchanges=0)
        pygame.mixer.init()
        super().__init__()

    def _build_sound(self, frequency):
        # One full cycle: high for the first half, low for the second
        cycle_size = max(2, int(PLAYBACK_FREQUENCY / frequency))
        half_cycle = cycle_size // 2
        buffer = bytearray(cycle_size)

        for pos in range(half_cycle):
            buffer[pos] = 0xFF

        self.sound = pygame.mixer.Sound(buffer=bytes(buffer))
        self.sound.set_volume(DEFAULT_VOLUME)
        self.frequency = frequency

    def play(self, frequency):
        # If the tone is already playing at this frequency, it won't be restarted.
        if frequency != self.frequency:
            if self.playing:
                self.sound.stop()
                self.playing = False

            self._build_sound(frequency)

        if not self.playing:
            self.sound.play(-1)

        super().play(frequency)

    def stop(self):
        if self.playing:
            self.sound.stop()

        super().stop()

    def shutdown(self):
        if self.sound:
            self.sound.stop()

        pygame.mixer.quit()
        super().shutdown()
