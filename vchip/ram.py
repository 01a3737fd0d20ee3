#!/usr/bin/env python3

"""
RAM Emulator

A single fixed bank of 4KB.  The CPU masks every address it derives to 12 bits
before calling in here, so reads and writes of single bytes can never fall
outside the bank.  Block writes are checked, as these come from outside the
machine (the font table and the program image).
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MEM_SIZE


class RAMError(Exception):
    pass


class RAM:
    def __init__(self, mem_size=MEM_SIZE):
        self.mem = memoryview(bytearray(mem_size))
        self.mem_top = mem_size - 1

    def read(self, location):
        return self.mem[location]

    def write(self, location, byte):
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)
        block_top = location + block_size
        self.check_overflow(block_top - 1)
        self.mem[location:block_top] = block

    def check_overflow(self, location):
        if location > self.mem_top:
            raise RAMError("Memory overflow: block ends at 0x{:x}, past the end of RAM".format(location))
