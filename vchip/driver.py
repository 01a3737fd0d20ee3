#!/usr/bin/env python3

"""
Driver Loop

Runs the machine at a fixed number of ticks per second (60 by default).  Every
tick does the same things in the same order:
    1. Hands any fresh keypress to the CPU, in case it is waiting for one
    2. Steps the CPU a fixed number of times (10 by default)
    3. Counts the timers down, unless the CPU is waiting for a key
    4. Starts or stops the tone, depending on the sound timer
    5. Presents the display through the Renderer

Ticks are scheduled against the wall clock.  poll() only runs a tick once more
than one tick interval has passed since the last one, and any time over the
interval is carried into the next, so a late tick does not push every later
tick back with it.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter, sleep
from .constants import APP_NAME, DEFAULT_TICK_RATE, DEFAULT_STEPS_PER_TICK, DEFAULT_TONE_FREQUENCY


class DriverError(Exception):
    pass


class Driver:
    def __init__(self, cpu, display, renderer, inputs, audio, tick_rate=None, steps_per_tick=None,
                 tone_frequency=None, clock=perf_counter):

        self.cpu = cpu
        self.display = display
        self.renderer = renderer
        self.inputs = inputs
        self.audio = audio
        self.clock = clock
        self.tick_rate = DEFAULT_TICK_RATE if tick_rate is None else tick_rate
        self.steps_per_tick = DEFAULT_STEPS_PER_TICK if steps_per_tick is None else steps_per_tick
        self.tone_frequency = DEFAULT_TONE_FREQUENCY if tone_frequency is None else tone_frequency

        if self.tick_rate <= 0:
            raise DriverError("Tick rate must be above zero")

        if self.steps_per_tick < 0:
            raise DriverError("Steps per tick cannot be negative")

        self.tick_interval = 1.0 / self.tick_rate
        self.last_tick_time = clock()
        self.running = False

        # Performance-related vars
        self.perf_counter_ticks = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0
        self.report_perf()

    def tick(self):
        cpu = self.cpu
        key = self.inputs.get_keypress()

        if key is not None:
            cpu.key_pressed(key)

        for _ in range(self.steps_per_tick):
            cpu.step()

        if not cpu.paused:
            cpu.tick_timers()

        if cpu.is_sound_active():
            self.audio.play(self.tone_frequency)
        else:
            self.audio.stop()

        vid_width, vid_height = self.display.get_vid_size()
        self.renderer.present(self.display.present(), vid_width, vid_height)

        self.perf_counter_ticks += 1
        self.perf_counter_ops += self.steps_per_tick

    def poll(self):
        # Returns True if a tick was due, and has run
        this_time = self.clock()
        elapsed = this_time - self.last_tick_time

        if elapsed <= self.tick_interval:
            return False

        # Keep the remainder so the schedule doesn't drift
        self.last_tick_time = this_time - (elapsed % self.tick_interval)
        self.tick()

        if this_time >= self.next_perf_report_time:
            self.next_perf_report_time = int(this_time) + 1.0
            self.report_perf(self.perf_counter_ticks, self.perf_counter_ops)
            self.perf_counter_ticks = 0
            self.perf_counter_ops = 0

        return True

    def run(self):
        if self.running:
            raise DriverError("Driver is already running")

        self.running = True

        try:
            while True:
                if self.inputs.process_messages():
                    return

                self.poll()

                # Wait for the next tick.  Do this last, so time spent on this tick is taken into account
                wait_time = self.last_tick_time + self.tick_interval - self.clock()

                if wait_time > 0:
                    sleep(wait_time)
        finally:
            self.running = False

    def report_perf(self, tps=0, ops=0):
        # Ops count every step, including those skipped while waiting for a key
        title = "{} - {} TPS, {} OPS".format(APP_NAME, tps, ops)
        self.renderer.set_title(title)
