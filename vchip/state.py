#!/usr/bin/env python3

"""
Machine State

Everything the CPU mutates while executing a program lives here: RAM, the V
registers, the index register, the program counter, the return stack, both
timers and the pending key wait.  The CPU is handed one of these and is the
only thing that writes to it, so resetting the machine is just a matter of
building a new one.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import FONT, FONT_LOC, PROGRAM_LOC
from .ram import RAM
from .stack import Stack


class MachineState:
    def __init__(self, ram=None, stack=None):
        self.ram = RAM() if ram is None else ram
        self.stack = Stack() if stack is None else stack
        self.v = memoryview(bytearray(16))  # V0 - Vf, each a byte, so Python can't overflow them by accident
        self.i = 0              # Index register
        self.pc = PROGRAM_LOC   # Program counter
        self.dt = 0             # Delay timer
        self.st = 0             # Sound timer

        # Register index waiting for the next keypress (LD Vx, K), or None if running
        self.waiting_register = None

        self.ram.write_block(FONT_LOC, FONT)

    def load_program(self, program):
        self.ram.write_block(PROGRAM_LOC, program)
