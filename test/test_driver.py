#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from vchip import create_machine
from vchip.constants import DEFAULT_KEYMAP
from vchip.cpu import CPU
from vchip.driver import Driver, DriverError
from vchip.stack import StackError
from vchip.renderers.r_null import Renderer
from vchip.inputs.i_null import Inputs
from vchip.audio.a_null import Audio


class FakeClock:
    def __init__(self, now=0.0, step=0.0):
        self.now = now
        self.step = step

    def __call__(self):
        now = self.now
        self.now += self.step
        return now


class CountingCPU(CPU):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.steps = 0

    def step(self):
        self.steps += 1
        super().step()


class RecordingAudio(Audio):
    def __init__(self):
        super().__init__()
        self.frequencies = []

    def play(self, frequency):
        self.frequencies.append(frequency)
        super().play(frequency)


class QuittingInputs(Inputs):
    def __init__(self, keymap, renderer, quit_after):
        super().__init__(keymap, renderer)
        self.quit_after = quit_after
        self.messages_processed = 0

    def process_messages(self):
        self.messages_processed += 1
        return self.messages_processed > self.quit_after


class TestDriver(unittest.TestCase):
    def setUp(self):
        self.renderer = Renderer()
        self.inputs = Inputs(DEFAULT_KEYMAP, self.renderer)
        self.audio = RecordingAudio()
        self.clock = FakeClock()
        # Jump to self, forever
        self._build(b"\x12\x00")

    def _build(self, program, **kwargs):
        self.state, self.display, _ = create_machine(self.inputs, program=program)
        self.cpu = CountingCPU(self.state, self.display, self.inputs)
        self.driver = Driver(
            self.cpu, self.display, self.renderer, self.inputs, self.audio, clock=self.clock, **kwargs
        )

    def test_driver_defaults(self):
        self.assertEqual(60, self.driver.tick_rate)
        self.assertEqual(10, self.driver.steps_per_tick)
        self.assertEqual(440.0, self.driver.tone_frequency)
        self.assertAlmostEqual(1.0 / 60, self.driver.tick_interval)

    def test_driver_bad_settings(self):
        self.assertRaises(DriverError, Driver, self.cpu, self.display, self.renderer, self.inputs, self.audio, 0)
        self.assertRaises(
            DriverError, Driver, self.cpu, self.display, self.renderer, self.inputs, self.audio, 60, -1
        )

    def test_driver_steps_per_tick(self):
        for steps_per_tick, ticks in (10, 7), (1, 3), (25, 4), (0, 2):
            self._build(b"\x12\x00", steps_per_tick=steps_per_tick)

            for _ in range(ticks):
                self.driver.tick()

            self.assertEqual(steps_per_tick * ticks, self.cpu.steps)

    def test_driver_timers(self):
        self.state.dt = 3
        self.state.st = 2
        self.driver.tick()
        self.assertEqual((2, 1), (self.state.dt, self.state.st))
        self.assertTrue(self.audio.is_playing())
        self.assertEqual([440.0], self.audio.frequencies)
        self.driver.tick()
        self.assertEqual((1, 0), (self.state.dt, self.state.st))
        self.assertFalse(self.audio.is_playing())

        for _ in range(3):
            self.driver.tick()

        self.assertEqual((0, 0), (self.state.dt, self.state.st))

    def test_driver_tone_frequency(self):
        self._build(b"\x12\x00", tone_frequency=880.0)
        self.state.st = 5
        self.driver.tick()
        self.assertEqual([880.0], self.audio.frequencies)

    def test_driver_key_wait(self):
        # LD V0, K then jump to self
        self._build(b"\xF0\x0A\x12\x02")
        self.state.dt = 5
        self.driver.tick()
        self.assertTrue(self.cpu.paused)
        self.assertEqual(5, self.state.dt)  # Timers are frozen while waiting

        self.driver.tick()
        self.assertTrue(self.cpu.paused)
        self.assertEqual(5, self.state.dt)

        self.inputs.last_keypress = 0x7
        self.driver.tick()
        self.assertFalse(self.cpu.paused)
        self.assertEqual(0x7, self.state.v[0])
        self.assertEqual(4, self.state.dt)
        self.assertIsNone(self.inputs.get_keypress())  # Handed over once only

    def test_driver_key_discarded_when_running(self):
        self.inputs.last_keypress = 0x3
        self.driver.tick()
        self.assertIsNone(self.inputs.get_keypress())
        self.assertEqual(bytes(16), bytes(self.state.v))

    def test_driver_present(self):
        self.display.set_pixel(2, 3)
        self.driver.tick()
        self.assertEqual(1, self.renderer.frames_presented)
        self.assertEqual(bytes(self.display.cells), self.renderer.last_frame)
        self.assertEqual(1, self.renderer.last_frame[2 + 3 * 64])

    def test_driver_poll(self):
        self._build(b"\x12\x00", tick_rate=4)  # 0.25s per tick
        self.clock.now = 0.2
        self.assertFalse(self.driver.poll())
        self.clock.now = 0.25
        self.assertFalse(self.driver.poll())  # Must be strictly over the interval
        self.clock.now = 0.6
        self.assertTrue(self.driver.poll())
        self.assertEqual(10, self.cpu.steps)

        # The 0.1s left over is carried forward, so the next tick is due after 0.75s rather than 0.85s
        self.assertAlmostEqual(0.5, self.driver.last_tick_time)
        self.clock.now = 0.7
        self.assertFalse(self.driver.poll())
        self.clock.now = 0.76
        self.assertTrue(self.driver.poll())
        self.assertEqual(20, self.cpu.steps)

    def test_driver_report_perf(self):
        self.assertIn("0 TPS, 0 OPS", self.renderer.title)
        self._build(b"\x12\x00", tick_rate=4)
        self.clock.now = 1.3
        self.assertTrue(self.driver.poll())
        self.assertIn("1 TPS, 10 OPS", self.renderer.title)

    def test_driver_run(self):
        self.clock.step = 0.5  # Every reading of the clock is half a second later than the last
        self.inputs = QuittingInputs(DEFAULT_KEYMAP, self.renderer, 3)
        self._build(b"\x12\x00", tick_rate=4)
        self.driver.run()
        self.assertEqual(4, self.inputs.messages_processed)
        self.assertEqual(30, self.cpu.steps)
        self.assertFalse(self.driver.running)

    def test_driver_run_not_reentrant(self):
        self.driver.running = True
        self.assertRaises(DriverError, self.driver.run)

    def test_driver_fault_propagates(self):
        # RET with nothing on the stack
        self._build(b"\x00\xEE")
        self.assertRaises(StackError, self.driver.tick)
