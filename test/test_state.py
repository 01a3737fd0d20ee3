#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from vchip import create_machine
from vchip.constants import DEFAULT_KEYMAP, FONT
from vchip.ram import RAMError
from vchip.state import MachineState
from vchip.renderers.r_null import Renderer
from vchip.inputs.i_null import Inputs


class TestMachineState(unittest.TestCase):
    def setUp(self):
        self.state = MachineState()

    def test_state_init(self):
        self.assertEqual(0x200, self.state.pc)
        self.assertEqual(0, self.state.i)
        self.assertEqual((0, 0), (self.state.dt, self.state.st))
        self.assertEqual(bytes(16), bytes(self.state.v))
        self.assertEqual(0, len(self.state.stack))
        self.assertIsNone(self.state.waiting_register)

    def test_state_font(self):
        self.assertEqual(80, len(FONT))
        self.assertEqual(FONT, bytes(self.state.ram.mem[:80]))
        self.assertFalse(any(self.state.ram.mem[80:]))

    def test_state_load_program(self):
        self.state.load_program(b"\x12\x34\x56")
        self.assertEqual(b"\x12\x34\x56", bytes(self.state.ram.mem[0x200:0x203]))
        self.assertEqual(0, self.state.ram.read(0x203))

    def test_state_load_program_full(self):
        self.state.load_program(b"\xAA" * (0x1000 - 0x200))
        self.assertEqual(0xAA, self.state.ram.read(0xFFF))

    def test_state_load_program_too_big(self):
        self.assertRaises(RAMError, self.state.load_program, b"\xAA" * (0x1000 - 0x200 + 1))

    def test_state_create_machine(self):
        inputs = Inputs(DEFAULT_KEYMAP, Renderer())
        state, display, cpu = create_machine(inputs, program=b"\x00\xE0")
        self.assertIs(state, cpu.state)
        self.assertIs(display, cpu.display)
        self.assertEqual(0x00, state.ram.read(0x200))
        self.assertEqual(0xE0, state.ram.read(0x201))
        self.assertFalse(cpu.shl_flag_quirks)

        # A reset is a new machine, sharing nothing with the old one
        state.v[0] = 0x12
        display.set_pixel(0, 0)
        new_state, new_display, _ = create_machine(inputs, shl_flag_quirks=True)
        self.assertEqual(0, new_state.v[0])
        self.assertFalse(any(new_display.present()))
        self.assertEqual(0, new_state.ram.read(0x201))
