#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  Each
call to step() fetches one big-endian opcode from RAM, decodes it into an
Instruction, advances the program counter past it, and then runs the routine
registered for the instruction's pattern.  Jumps, calls and skips simply
overwrite (or add to) the already-advanced program counter.

Only one opcode can stop the CPU: LD Vx, K waits for a keypress.  Rather than
blocking, the CPU records which register is waiting, and step() does nothing
until key_pressed() is called with the key.  The Driver does that on the next
key-down it sees.

The CPU owns no storage of its own.  Registers, RAM, timers and the stack are
all in the MachineState it is given, and pixels are in the Display.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import Random
from .constants import MEM_MASK, FONT_LOC, FONT_GLYPH_SIZE
from .debugger import Debugger
from .instructions import DecodeError, decode, disassemble
from .stack import StackError


class CPU:
    def __init__(self, state, display, inputs, debugger=None, rng=None, shl_flag_quirks=False):
        self.state = state
        self.display = display
        self.inputs = inputs
        self.debugger = Debugger() if debugger is None else debugger
        self.rng = Random() if rng is None else rng

        """
        Quirks
        ------

        - SHL flag quirks: Some interpreters mask the high bit into Vf without shifting it down, so the flag
                           holds 0x80 rather than 1.  Disabled by default.
        """

        self.shl_flag_quirks = shl_flag_quirks

        # Every pattern the decoder can produce must appear here
        self.instructions = {
            "00E0": self._00E0,
            "00EE": self._00EE,
            "1nnn": self._1nnn,
            "2nnn": self._2nnn,
            "3xkk": self._3xkk,
            "4xkk": self._4xkk,
            "5xy0": self._5xy0,
            "6xkk": self._6xkk,
            "7xkk": self._7xkk,
            "8xy0": self._8xy0,
            "8xy1": self._8xy1,
            "8xy2": self._8xy2,
            "8xy3": self._8xy3,
            "8xy4": self._8xy4,
            "8xy5": self._8xy5,
            "8xy6": self._8xy6,
            "8xy7": self._8xy7,
            "8xyE": self._8xyE,
            "9xy0": self._9xy0,
            "Annn": self._Annn,
            "Bnnn": self._Bnnn,
            "Cxkk": self._Cxkk,
            "Dxyn": self._Dxyn,
            "Ex9E": self._Ex9E,
            "ExA1": self._ExA1,
            "Fx07": self._Fx07,
            "Fx0A": self._Fx0A,
            "Fx15": self._Fx15,
            "Fx18": self._Fx18,
            "Fx1E": self._Fx1E,
            "Fx29": self._Fx29,
            "Fx33": self._Fx33,
            "Fx55": self._Fx55,
            "Fx65": self._Fx65,
            "NOP": self._NOP
        }

    @property
    def paused(self):
        return self.state.waiting_register is not None

    def fetch(self):
        ram = self.state.ram
        pc = self.state.pc
        return (ram.read(pc) << 8) | ram.read((pc + 1) & MEM_MASK)

    def step(self):
        if self.paused:
            return

        state = self.state
        pc = state.pc
        opcode = self.fetch()

        try:
            instruction = decode(opcode)
        except DecodeError:
            # The program counter is left on the bad opcode
            raise DecodeError(opcode, pc, self.debugger.crash_report(state, pc, opcode)) from None

        state.pc = (pc + 2) & MEM_MASK

        try:
            self.instructions[instruction.pattern](instruction)
        except StackError:
            raise StackError(
                "{}\n\nReturned from address 0x{:03x} with an empty stack".format(
                    self.debugger.crash_report(state, pc, opcode, disassemble(instruction)), pc
                )
            ) from None

    def key_pressed(self, key):
        # Completes LD Vx, K.  Returns True if the key was consumed.
        state = self.state
        register = state.waiting_register

        if register is None:
            return False

        state.v[register] = key & 0xF
        state.waiting_register = None
        return True

    def tick_timers(self):
        state = self.state

        if state.dt > 0:
            state.dt -= 1

        if state.st > 0:
            state.st -= 1

    def is_sound_active(self):
        return self.state.st > 0

    def _skip(self):
        self.state.pc = (self.state.pc + 2) & MEM_MASK

    def _00E0(self, ins):  # CLS
        self.display.clear()

    def _00EE(self, ins):  # RET
        self.state.pc = self.state.stack.pop()

    def _1nnn(self, ins):  # JP addr
        self.state.pc = ins.nnn

    def _2nnn(self, ins):  # CALL addr
        self.state.stack.push(self.state.pc)
        self.state.pc = ins.nnn

    def _3xkk(self, ins):  # SE Vx, byte
        if self.state.v[ins.x] == ins.kk:
            self._skip()

    def _4xkk(self, ins):  # SNE Vx, byte
        if self.state.v[ins.x] != ins.kk:
            self._skip()

    def _5xy0(self, ins):  # SE Vx, Vy
        v = self.state.v

        if v[ins.x] == v[ins.y]:
            self._skip()

    def _6xkk(self, ins):  # LD Vx, byte
        self.state.v[ins.x] = ins.kk

    def _7xkk(self, ins):  # ADD Vx, byte
        v = self.state.v
        v[ins.x] = (v[ins.x] + ins.kk) & 0xFF  # Vf is not affected

    def _8xy0(self, ins):  # LD Vx, Vy
        v = self.state.v
        v[ins.x] = v[ins.y]

    def _8xy1(self, ins):  # OR Vx, Vy
        v = self.state.v
        v[ins.x] |= v[ins.y]

    def _8xy2(self, ins):  # AND Vx, Vy
        v = self.state.v
        v[ins.x] &= v[ins.y]

    def _8xy3(self, ins):  # XOR Vx, Vy
        v = self.state.v
        v[ins.x] ^= v[ins.y]

    # For the flag-setting instructions below, both operands are read first, then Vf is written, and Vx is written
    # last.  If x is Vf, the result overwrites the flag.

    def _8xy4(self, ins):  # ADD Vx, Vy
        v = self.state.v
        val = v[ins.x] + v[ins.y]
        v[0xF] = int(val > 0xFF)  # Vf is set when carrying
        v[ins.x] = val & 0xFF

    def _8xy5(self, ins):  # SUB Vx, Vy
        v = self.state.v
        minuend = v[ins.x]
        subtrahend = v[ins.y]
        v[0xF] = int(minuend > subtrahend)  # Vf is set when NOT borrowing.  Equal values count as a borrow
        v[ins.x] = (minuend - subtrahend) & 0xFF

    def _8xy6(self, ins):  # SHR Vx
        v = self.state.v
        val = v[ins.x]
        v[0xF] = val & 1
        v[ins.x] = val >> 1

    def _8xy7(self, ins):  # SUBN Vx, Vy
        v = self.state.v
        minuend = v[ins.y]
        subtrahend = v[ins.x]
        v[0xF] = int(minuend > subtrahend)
        v[ins.x] = (minuend - subtrahend) & 0xFF

    def _8xyE(self, ins):  # SHL Vx
        v = self.state.v
        val = v[ins.x]
        v[0xF] = (val & 0x80) if self.shl_flag_quirks else (val >> 7)
        v[ins.x] = (val << 1) & 0xFF

    def _9xy0(self, ins):  # SNE Vx, Vy
        v = self.state.v

        if v[ins.x] != v[ins.y]:
            self._skip()

    def _Annn(self, ins):  # LD I, addr
        self.state.i = ins.nnn

    def _Bnnn(self, ins):  # JP V0, addr
        self.state.pc = (ins.nnn + self.state.v[0]) & MEM_MASK

    def _Cxkk(self, ins):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.state.v[ins.x] = self.rng.randint(0, 0xFF) & ins.kk

    def _Dxyn(self, ins):  # DRW Vx, Vy, nibble
        # Sprites are always 8 pixels wide and 'nibble' rows high, one byte per row, read from I onwards.  The
        # starting position is not wrapped here, as the Display does its own (one-shot) wrapping per pixel.
        state = self.state
        v = state.v
        ram = state.ram
        set_pixel = self.display.set_pixel
        v[0xF] = 0
        vx_pos = v[ins.x]
        vy_pos = v[ins.y]
        i = state.i
        collided = False

        for y in range(ins.n):
            spr_data = ram.read((i + y) & MEM_MASK)
            scr_y = vy_pos + y

            for x in range(8):
                if spr_data & (0x80 >> x) and set_pixel(vx_pos + x, scr_y):
                    # Don't stop drawing.  Set the flag, and never unset it for this sprite.
                    collided = True

        if collided:
            v[0xF] = 1

    def _key_down(self, key):
        # Registers can hold values past the last key, and those keys can never be down
        return key < 0x10 and self.inputs.is_key_down(key)

    def _Ex9E(self, ins):  # SKP Vx
        if self._key_down(self.state.v[ins.x]):
            self._skip()

    def _ExA1(self, ins):  # SKNP Vx
        if not self._key_down(self.state.v[ins.x]):
            self._skip()

    def _Fx07(self, ins):  # LD Vx, DT
        self.state.v[ins.x] = self.state.dt

    def _Fx0A(self, ins):  # LD Vx, K
        # Pause until key_pressed() supplies the key.  Timers also stop while waiting.
        self.state.waiting_register = ins.x

    def _Fx15(self, ins):  # LD DT, Vx
        self.state.dt = self.state.v[ins.x]

    def _Fx18(self, ins):  # LD ST, Vx
        self.state.st = self.state.v[ins.x]

    def _Fx1E(self, ins):  # ADD I, Vx
        state = self.state
        state.i = (state.i + state.v[ins.x]) & MEM_MASK

    def _Fx29(self, ins):  # LD F, Vx
        state = self.state
        state.i = FONT_LOC + FONT_GLYPH_SIZE * state.v[ins.x]

    def _Fx33(self, ins):  # LD B, Vx
        state = self.state
        val = state.v[ins.x]
        i = state.i
        ram = state.ram
        ram.write(i & MEM_MASK, val // 100)            # Most-significant digit
        ram.write((i + 1) & MEM_MASK, (val // 10) % 10)  # Middle digit
        ram.write((i + 2) & MEM_MASK, val % 10)          # Least-significant digit

    def _Fx55(self, ins):  # LD [I], Vx
        state = self.state
        i = state.i

        for reg in range(ins.x + 1):
            state.ram.write((i + reg) & MEM_MASK, state.v[reg])

    def _Fx65(self, ins):  # LD Vx, [I]
        state = self.state
        i = state.i

        for reg in range(ins.x + 1):
            state.v[reg] = state.ram.read((i + reg) & MEM_MASK)

    def _NOP(self, ins):  # Unassigned opcode, including SYS addr
        pass
