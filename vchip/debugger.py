#!/usr/bin/env python3

"""
CPU Crash Reporter

When emulation halts, this builds the register dump attached to the error:
    * All 16 of the [V] registers, starting with most significant (Vf) and
      reducing to least significant (V0)
    * I  - Index register
    * DT - Delay timer
    * ST - Sound timer
    * PC - Address of the failing instruction
    * OP - OpCode number
    * IN - Decoded instruction, or ??? if it could not be decoded
    * Stack - Stack contents
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_INTRO


class Debugger:
    def debug(self, state, pc, opcode, instruction="???"):
        debug_str = (
            "V: 0x" + ("{:02x}" * 16) + " I: 0x{:04x} DT: 0x{:02x} ST: 0x{:02x} PC: 0x{:03x} OP: 0x{:04x} IN: {}"
        ).format(
            *[state.v[reg_num] for reg_num in range(15, -1, -1)] +
            [state.i, state.dt, state.st, pc, opcode, instruction]
        )

        stack_items = state.stack.get_items()
        stack_str = (" 0x{:03x}" * len(stack_items)).format(*stack_items)
        debug_str += "\nStack:{}".format(stack_str or " (Empty)")
        return debug_str

    def crash_report(self, state, pc, opcode, instruction="???"):
        return "Emulation halted.\n\n{}Debug info:\n{}".format(
            APP_INTRO, self.debug(state, pc, opcode, instruction)
        )
