# Instruction decode - CowGods CHIP8 Technical reference http://devernay.free.fr/hacks/chip8/C8TECH10.HTM
# An opcode is 4 nibbles. The first nibble picks the instruction family and the rest are
# operands:  X / Y = register index, N = 4 bit, NN = 8 bit, NNN = 12 bit literal.

import enum
from functools import lru_cache
from typing import NamedTuple

from .errors import IllegalInstruction


class Op(enum.Enum):
    CLS = "CLS"                # 00E0
    RET = "RET"                # 00EE
    JP = "JP"                  # 1NNN
    CALL = "CALL"              # 2NNN
    SE_VX_NN = "SE_VX_NN"      # 3XNN
    SNE_VX_NN = "SNE_VX_NN"    # 4XNN
    SE_VX_VY = "SE_VX_VY"      # 5XY0
    LD_VX_NN = "LD_VX_NN"      # 6XNN
    ADD_VX_NN = "ADD_VX_NN"    # 7XNN
    LD_VX_VY = "LD_VX_VY"      # 8XY0
    OR = "OR"                  # 8XY1
    AND = "AND"                # 8XY2
    XOR = "XOR"                # 8XY3
    ADD = "ADD"                # 8XY4
    SUB = "SUB"                # 8XY5
    SHR = "SHR"                # 8XY6
    SUBN = "SUBN"              # 8XY7
    SHL = "SHL"                # 8XYE
    SNE_VX_VY = "SNE_VX_VY"    # 9XY0
    LD_I = "LD_I"              # ANNN
    JP_V0 = "JP_V0"            # BNNN
    RND = "RND"                # CXNN
    DRW = "DRW"                # DXYN
    SKP = "SKP"                # EX9E
    SKNP = "SKNP"              # EXA1
    LD_VX_DT = "LD_VX_DT"      # FX07
    WAITKEY = "WAITKEY"        # FX0A
    LD_DT_VX = "LD_DT_VX"      # FX15
    LD_ST_VX = "LD_ST_VX"      # FX18
    ADD_I_VX = "ADD_I_VX"      # FX1E
    FONT = "FONT"              # FX29
    BCD = "BCD"                # FX33
    STORE = "STORE"            # FX55
    LOAD = "LOAD"              # FX65


# (mask, pattern, op) - an opcode matches when opcode & mask == pattern
OPCODES = [
    (0xFFFF, 0x00E0, Op.CLS),
    (0xFFFF, 0x00EE, Op.RET),

    (0xF000, 0x1000, Op.JP),
    (0xF000, 0x2000, Op.CALL),
    (0xF000, 0x3000, Op.SE_VX_NN),
    (0xF000, 0x4000, Op.SNE_VX_NN),
    (0xF00F, 0x5000, Op.SE_VX_VY),
    (0xF000, 0x6000, Op.LD_VX_NN),
    (0xF000, 0x7000, Op.ADD_VX_NN),

    (0xF00F, 0x8000, Op.LD_VX_VY),
    (0xF00F, 0x8001, Op.OR),
    (0xF00F, 0x8002, Op.AND),
    (0xF00F, 0x8003, Op.XOR),
    (0xF00F, 0x8004, Op.ADD),
    (0xF00F, 0x8005, Op.SUB),
    (0xF00F, 0x8006, Op.SHR),
    (0xF00F, 0x8007, Op.SUBN),
    (0xF00F, 0x800E, Op.SHL),

    (0xF00F, 0x9000, Op.SNE_VX_VY),
    (0xF000, 0xA000, Op.LD_I),
    (0xF000, 0xB000, Op.JP_V0),
    (0xF000, 0xC000, Op.RND),
    (0xF000, 0xD000, Op.DRW),

    (0xF0FF, 0xE09E, Op.SKP),
    (0xF0FF, 0xE0A1, Op.SKNP),

    (0xF0FF, 0xF007, Op.LD_VX_DT),
    (0xF0FF, 0xF00A, Op.WAITKEY),
    (0xF0FF, 0xF015, Op.LD_DT_VX),
    (0xF0FF, 0xF018, Op.LD_ST_VX),
    (0xF0FF, 0xF01E, Op.ADD_I_VX),
    (0xF0FF, 0xF029, Op.FONT),
    (0xF0FF, 0xF033, Op.BCD),
    (0xF0FF, 0xF055, Op.STORE),
    (0xF0FF, 0xF065, Op.LOAD),
]

# mnemonics for trace logs
_FORMATS = {
    Op.CLS: "CLS",
    Op.RET: "RET",
    Op.JP: "JP {nnn:03X}",
    Op.CALL: "CALL {nnn:03X}",
    Op.SE_VX_NN: "SE V{x:X}, {nn:02X}",
    Op.SNE_VX_NN: "SNE V{x:X}, {nn:02X}",
    Op.SE_VX_VY: "SE V{x:X}, V{y:X}",
    Op.LD_VX_NN: "LD V{x:X}, {nn:02X}",
    Op.ADD_VX_NN: "ADD V{x:X}, {nn:02X}",
    Op.LD_VX_VY: "LD V{x:X}, V{y:X}",
    Op.OR: "OR V{x:X}, V{y:X}",
    Op.AND: "AND V{x:X}, V{y:X}",
    Op.XOR: "XOR V{x:X}, V{y:X}",
    Op.ADD: "ADD V{x:X}, V{y:X}",
    Op.SUB: "SUB V{x:X}, V{y:X}",
    Op.SHR: "SHR V{x:X}, V{y:X}",
    Op.SUBN: "SUBN V{x:X}, V{y:X}",
    Op.SHL: "SHL V{x:X}, V{y:X}",
    Op.SNE_VX_VY: "SNE V{x:X}, V{y:X}",
    Op.LD_I: "LD I, {nnn:03X}",
    Op.JP_V0: "JP V0, {nnn:03X}",
    Op.RND: "RND V{x:X}, {nn:02X}",
    Op.DRW: "DRW V{x:X}, V{y:X}, {n}",
    Op.SKP: "SKP V{x:X}",
    Op.SKNP: "SKNP V{x:X}",
    Op.LD_VX_DT: "LD V{x:X}, DT",
    Op.WAITKEY: "LD V{x:X}, K",
    Op.LD_DT_VX: "LD DT, V{x:X}",
    Op.LD_ST_VX: "LD ST, V{x:X}",
    Op.ADD_I_VX: "ADD I, V{x:X}",
    Op.FONT: "LD F, V{x:X}",
    Op.BCD: "LD B, V{x:X}",
    Op.STORE: "LD [I], V{x:X}",
    Op.LOAD: "LD V{x:X}, [I]",
}


class Instruction(NamedTuple):
    op: Op
    opcode: int

    @property
    def x(self):
        return (self.opcode >> 8) & 0xF

    @property
    def y(self):
        return (self.opcode >> 4) & 0xF

    @property
    def n(self):
        return self.opcode & 0xF

    @property
    def nn(self):
        return self.opcode & 0xFF

    @property
    def nnn(self):
        return self.opcode & 0xFFF

    def __str__(self):
        return _FORMATS[self.op].format(x=self.x, y=self.y, n=self.n, nn=self.nn, nnn=self.nnn)


@lru_cache(maxsize=None)
def decode(opcode):
    """Turn a 16 bit opcode into an Instruction, or raise IllegalInstruction."""
    for mask, pattern, op in OPCODES:
        if (opcode & mask) == pattern:
            return Instruction(op, opcode)
    raise IllegalInstruction(opcode)
