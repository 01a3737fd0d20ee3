#!/usr/bin/env python3

"""
Instruction Decoder

Turns a raw 16-bit opcode into an Instruction: the opcode's pattern (e.g.
"8xy4") plus every operand field already pulled out of it.  The CPU then only
has to look the pattern up once to find the routine that executes it.

The first nibble selects an instruction family.  Some families contain a
single instruction, and the rest are told apart by masking the opcode:
    * 0x0       - exact match (bitmask 0xFFFF)
    * 0x8       - first and last nibbles (bitmask 0xF00F)
    * 0xE/F     - first nibble and low byte (bitmask 0xF0FF)

The 5xy0 and 9xy0 comparisons ignore their last nibble.  Opcodes inside the
0x0, 0x8, 0xE and 0xF families that match no instruction (including SYS addr)
decode to a NOP, which does nothing but advance the program counter.  Only a
value that is not a 16-bit opcode at all fails to decode.

Operand naming:
    n   = nibble
    kk  = byte
    nnn = address
    x/y = register (0-15)
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple


class DecodeError(Exception):
    def __init__(self, opcode, address=None, details=None):
        self.opcode = opcode
        self.address = address

        if address is None:
            message = "Opcode 0x{:04x} is not a valid instruction".format(opcode)
        else:
            message = "Opcode 0x{:04x} at address 0x{:03x} is not a valid instruction".format(opcode, address)

        if details:
            message = "{}\n\n{}".format(details, message)

        super().__init__(message)


Instruction = namedtuple("Instruction", ["pattern", "opcode", "x", "y", "n", "kk", "nnn"])

FAMILY_MASKS = {
    0x0: 0xFFFF,
    0x1: 0xF000,
    0x2: 0xF000,
    0x3: 0xF000,
    0x4: 0xF000,
    0x5: 0xF000,
    0x6: 0xF000,
    0x7: 0xF000,
    0x8: 0xF00F,
    0x9: 0xF000,
    0xA: 0xF000,
    0xB: 0xF000,
    0xC: 0xF000,
    0xD: 0xF000,
    0xE: 0xF0FF,
    0xF: 0xF0FF
}

# Masked opcode to pattern, and the assembly text shown for each pattern in crash reports
PATTERNS = {
    0x00E0: ("00E0", "CLS"),
    0x00EE: ("00EE", "RET"),
    0x1000: ("1nnn", "JP 0x{nnn:03x}"),
    0x2000: ("2nnn", "CALL 0x{nnn:03x}"),
    0x3000: ("3xkk", "SE V{x:01x}, 0x{kk:02x}"),
    0x4000: ("4xkk", "SNE V{x:01x}, 0x{kk:02x}"),
    0x5000: ("5xy0", "SE V{x:01x}, V{y:01x}"),
    0x6000: ("6xkk", "LD V{x:01x}, 0x{kk:02x}"),
    0x7000: ("7xkk", "ADD V{x:01x}, 0x{kk:02x}"),
    0x8000: ("8xy0", "LD V{x:01x}, V{y:01x}"),
    0x8001: ("8xy1", "OR V{x:01x}, V{y:01x}"),
    0x8002: ("8xy2", "AND V{x:01x}, V{y:01x}"),
    0x8003: ("8xy3", "XOR V{x:01x}, V{y:01x}"),
    0x8004: ("8xy4", "ADD V{x:01x}, V{y:01x}"),
    0x8005: ("8xy5", "SUB V{x:01x}, V{y:01x}"),
    0x8006: ("8xy6", "SHR V{x:01x}"),
    0x8007: ("8xy7", "SUBN V{x:01x}, V{y:01x}"),
    0x800E: ("8xyE", "SHL V{x:01x}"),
    0x9000: ("9xy0", "SNE V{x:01x}, V{y:01x}"),
    0xA000: ("Annn", "LD I, 0x{nnn:03x}"),
    0xB000: ("Bnnn", "JP V0, 0x{nnn:03x}"),
    0xC000: ("Cxkk", "RND V{x:01x}, 0x{kk:02x}"),
    0xD000: ("Dxyn", "DRW V{x:01x}, V{y:01x}, 0x{n:01x}"),
    0xE09E: ("Ex9E", "SKP V{x:01x}"),
    0xE0A1: ("ExA1", "SKNP V{x:01x}"),
    0xF007: ("Fx07", "LD V{x:01x}, DT"),
    0xF00A: ("Fx0A", "LD V{x:01x}, K"),
    0xF015: ("Fx15", "LD DT, V{x:01x}"),
    0xF018: ("Fx18", "LD ST, V{x:01x}"),
    0xF01E: ("Fx1E", "ADD I, V{x:01x}"),
    0xF029: ("Fx29", "LD F, V{x:01x}"),
    0xF033: ("Fx33", "LD B, V{x:01x}"),
    0xF055: ("Fx55", "LD [I], V{x:01x}"),
    0xF065: ("Fx65", "LD V{x:01x}, [I]")
}

# Unassigned opcodes within a family
NO_OPERATION = ("NOP", "NOP")

MNEMONICS = dict(PATTERNS.values())
MNEMONICS[NO_OPERATION[0]] = NO_OPERATION[1]


def decode(opcode):
    if not 0 <= opcode <= 0xFFFF:
        raise DecodeError(opcode)

    masked_opcode = opcode & FAMILY_MASKS[(opcode & 0xF000) >> 12]
    entry = PATTERNS.get(masked_opcode, NO_OPERATION)

    return Instruction(
        pattern=entry[0],
        opcode=opcode,
        x=(opcode & 0xF00) >> 8,
        y=(opcode & 0xF0) >> 4,
        n=opcode & 0xF,
        kk=opcode & 0xFF,
        nnn=opcode & 0xFFF
    )


def disassemble(instruction):
    return MNEMONICS[instruction.pattern].format(**instruction._asdict())
