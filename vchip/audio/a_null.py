#!/usr/bin/env python3

"""
Null Audio Plugin

Serves as a base class for other Audio plugins.  Can be used on its own if no
sound is required.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Audio:
    def __init__(self):
        # The tone should be stopped (not playing sounds) by default
        self.playing = False

    def play(self, frequency):
        # Play a constant tone at the given rate in Hz, while the sound timer is >0.  Repeated calls are harmless.
        self.playing = True

    def stop(self):
        self.playing = False

    def is_playing(self):
        return self.playing

    def shutdown(self):
        self.playing = False
