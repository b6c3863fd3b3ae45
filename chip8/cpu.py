# CHIP8 Virtual Machine
# CPU - fetch two bytes at PC, decode them into an Instruction and run its handler.
# The machine owns memory, registers, timers and the screen; the host owns the keypad
# snapshot and decides how often to call step() / run_frame().
#----------------------------------------------------------------------------------------------
# Driving it from a host loop (one frame):
#     machine.run_frame()          # cycles_per_tick instructions, then one timer tick
#     render(machine.framebuffer.snapshot())
#     machine.keypad.update(poll_keys())

import enum
import logging
import random

from .config import Config
from .constants import FONT_ADDRESS, GLYPH_SIZE, MAX_IMAGE_SIZE
from .errors import IllegalInstruction, ImageTooLarge
from .framebuffer import Framebuffer
from .instructions import Op, decode
from .keypad import Keypad
from .memory import Memory, Registers
from .timers import Timers

logger = logging.getLogger(__name__)


class Status(enum.Enum):
    RUNNING = "running"
    AWAITING_KEY = "awaiting_key"  # blocked on FX0A, see Chip8.wait_register


class Chip8:

    def __init__(self, config=None):
        self.config = config if config is not None else Config()
        self.quirks = self.config.quirks
        self.random = random.Random(self.config.seed)
        self.keypad = Keypad()
        self._image = b""
        self.setup_funcmap()
        self.reset()

    def reset(self):
        """Power-on state, with the last loaded ROM put back at 0x200."""
        self.memory = Memory(protect_reserved=self.config.protect_reserved)
        self.registers = Registers()
        self.timers = Timers()
        self.framebuffer = Framebuffer()
        self.status = Status.RUNNING
        self.wait_register = None
        self._wait_keys = None
        self._drew = False
        self.cycle_count = 0
        if self._image:
            self.memory.load_image(self._image)
        logger.info("Machine reset")

    # ---- Load ROM ----
    def load_rom(self, data):
        data = bytes(data)
        if len(data) > MAX_IMAGE_SIZE:
            raise ImageTooLarge(len(data), MAX_IMAGE_SIZE)
        self._image = data
        self.reset()

    def load_rom_file(self, path):
        logger.info("Loading ROM: %s", path)
        with open(path, "rb") as f:
            self.load_rom(f.read())

    # ---- Convenience views ----
    @property
    def V(self):
        return self.registers.V

    @property
    def pc(self):
        return self.registers.pc

    # ---- Cycle ----
    def fetch(self):
        return self.memory.read_word(self.registers.pc)

    def step(self):
        """Execute one instruction and return the machine status.

        While an FX0A is pending this only polls the keypad; PC does not move until
        a key goes down.
        """
        if self.status is Status.AWAITING_KEY:
            self._poll_key()
            return self.status

        pc = self.registers.pc
        opcode = self.fetch()
        try:
            ins = decode(opcode)
        except IllegalInstruction as e:
            raise IllegalInstruction(opcode, pc) from e

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%03X: %04X  %s", pc, opcode, ins)

        self.funcmap[ins.op](ins)
        self.cycle_count += 1
        return self.status

    def run_frame(self):
        """Run one frame worth of instructions, then tick the timers once.

        Returns the number of instructions executed.
        """
        executed = 0
        self._drew = False
        try:
            for _ in range(self.config.cycles_per_tick):
                if self.step() is Status.AWAITING_KEY:
                    break
                executed += 1
                if self._drew and self.quirks.display_wait:
                    break
        finally:
            # the timers run at 60Hz even when the batch faults
            self.timers.tick()
        return executed

    def _advance(self, skip=False):
        self.registers.pc = (self.registers.pc + (4 if skip else 2)) & 0xFFFF

    def _poll_key(self):
        counts = self.keypad.press_counts()
        for key, (before, now) in enumerate(zip(self._wait_keys, counts)):
            if now > before:
                self.V[self.wait_register] = key
                logger.debug("Key %X pressed, stored in V%X", key, self.wait_register)
                self.status = Status.RUNNING
                self.wait_register = None
                self._wait_keys = None
                self._advance()
                return

    # ---- Opcode function map ----
    def setup_funcmap(self):
        self.funcmap = {
            Op.CLS: self.op_CLS,              # 00E0 - Clear the screen
            Op.RET: self.op_RET,              # 00EE - Return from a subroutine
            Op.JP: self.op_JP,                # 1NNN - Jump to NNN
            Op.CALL: self.op_CALL,            # 2NNN - Call subroutine at NNN
            Op.SE_VX_NN: self.op_SE_VX_NN,    # 3XNN - Skip if Vx == NN
            Op.SNE_VX_NN: self.op_SNE_VX_NN,  # 4XNN - Skip if Vx != NN
            Op.SE_VX_VY: self.op_SE_VX_VY,    # 5XY0 - Skip if Vx == Vy
            Op.LD_VX_NN: self.op_LD_VX_NN,    # 6XNN - Vx = NN
            Op.ADD_VX_NN: self.op_ADD_VX_NN,  # 7XNN - Vx += NN, no carry
            Op.LD_VX_VY: self.op_LD_VX_VY,    # 8XY0 - Vx = Vy
            Op.OR: self.op_OR,                # 8XY1
            Op.AND: self.op_AND,              # 8XY2
            Op.XOR: self.op_XOR,              # 8XY3
            Op.ADD: self.op_ADD,              # 8XY4 - VF = carry
            Op.SUB: self.op_SUB,              # 8XY5 - VF = NOT borrow
            Op.SHR: self.op_SHR,              # 8XY6 - VF = bit shifted out
            Op.SUBN: self.op_SUBN,            # 8XY7 - VF = NOT borrow
            Op.SHL: self.op_SHL,              # 8XYE - VF = bit shifted out
            Op.SNE_VX_VY: self.op_SNE_VX_VY,  # 9XY0 - Skip if Vx != Vy
            Op.LD_I: self.op_LD_I,            # ANNN - I = NNN
            Op.JP_V0: self.op_JP_V0,          # BNNN - Jump to NNN + V0
            Op.RND: self.op_RND,              # CXNN - Vx = random & NN
            Op.DRW: self.op_DRW,              # DXYN - Draw N byte sprite from I at (Vx, Vy)
            Op.SKP: self.op_SKP,              # EX9E - Skip if key Vx is down
            Op.SKNP: self.op_SKNP,            # EXA1 - Skip if key Vx is up
            Op.LD_VX_DT: self.op_LD_VX_DT,    # FX07 - Vx = delay timer
            Op.WAITKEY: self.op_WAITKEY,      # FX0A - Wait for a key press
            Op.LD_DT_VX: self.op_LD_DT_VX,    # FX15 - delay timer = Vx
            Op.LD_ST_VX: self.op_LD_ST_VX,    # FX18 - sound timer = Vx
            Op.ADD_I_VX: self.op_ADD_I_VX,    # FX1E - I += Vx
            Op.FONT: self.op_FONT,            # FX29 - I = glyph for digit Vx
            Op.BCD: self.op_BCD,              # FX33 - BCD of Vx at I, I+1, I+2
            Op.STORE: self.op_STORE,          # FX55 - store V0..Vx at I
            Op.LOAD: self.op_LOAD,            # FX65 - load V0..Vx from I
        }

    # ---- Opcode Handlers ----
    def op_CLS(self, ins):
        self.framebuffer.clear()
        self._advance()

    def op_RET(self, ins):
        self.registers.pc = self.registers.pop()

    def op_JP(self, ins):
        self.registers.pc = ins.nnn

    def op_CALL(self, ins):
        self.registers.push(self.registers.pc + 2)
        self.registers.pc = ins.nnn

    def op_SE_VX_NN(self, ins):
        self._advance(skip=self.V[ins.x] == ins.nn)

    def op_SNE_VX_NN(self, ins):
        self._advance(skip=self.V[ins.x] != ins.nn)

    def op_SE_VX_VY(self, ins):
        self._advance(skip=self.V[ins.x] == self.V[ins.y])

    def op_LD_VX_NN(self, ins):
        self.V[ins.x] = ins.nn
        self._advance()

    def op_ADD_VX_NN(self, ins):
        self.V[ins.x] = (self.V[ins.x] + ins.nn) & 0xFF
        self._advance()

    def op_LD_VX_VY(self, ins):
        self.V[ins.x] = self.V[ins.y]
        self._advance()

    def op_OR(self, ins):
        self.V[ins.x] |= self.V[ins.y]
        self._logic_done()

    def op_AND(self, ins):
        self.V[ins.x] &= self.V[ins.y]
        self._logic_done()

    def op_XOR(self, ins):
        self.V[ins.x] ^= self.V[ins.y]
        self._logic_done()

    def _logic_done(self):
        if self.quirks.vf_reset:
            self.V[0xF] = 0
        self._advance()

    # VF is written after the result so a flag targeting VF itself wins
    def op_ADD(self, ins):
        total = self.V[ins.x] + self.V[ins.y]
        self.V[ins.x] = total & 0xFF
        self.V[0xF] = 1 if total > 0xFF else 0
        self._advance()

    def op_SUB(self, ins):
        vx, vy = self.V[ins.x], self.V[ins.y]
        self.V[ins.x] = (vx - vy) & 0xFF
        self.V[0xF] = 1 if vx >= vy else 0
        self._advance()

    def op_SHR(self, ins):
        value = self.V[ins.y] if self.quirks.shift_uses_vy else self.V[ins.x]
        self.V[ins.x] = value >> 1
        self.V[0xF] = value & 1
        self._advance()

    def op_SUBN(self, ins):
        vx, vy = self.V[ins.x], self.V[ins.y]
        self.V[ins.x] = (vy - vx) & 0xFF
        self.V[0xF] = 1 if vy >= vx else 0
        self._advance()

    def op_SHL(self, ins):
        value = self.V[ins.y] if self.quirks.shift_uses_vy else self.V[ins.x]
        self.V[ins.x] = (value << 1) & 0xFF
        self.V[0xF] = (value >> 7) & 1
        self._advance()

    def op_SNE_VX_VY(self, ins):
        self._advance(skip=self.V[ins.x] != self.V[ins.y])

    def op_LD_I(self, ins):
        self.registers.I = ins.nnn
        self._advance()

    def op_JP_V0(self, ins):
        offset = self.V[ins.x] if self.quirks.jump_uses_vx else self.V[0]
        self.registers.pc = ins.nnn + offset

    def op_RND(self, ins):
        self.V[ins.x] = self.random.getrandbits(8) & ins.nn
        self._advance()

    def op_DRW(self, ins):
        sprite = self.memory.read_block(self.registers.I, ins.n)
        collision = self.framebuffer.draw_sprite(
            self.V[ins.x], self.V[ins.y], sprite, wrap=not self.quirks.clip_sprites)
        self.V[0xF] = 1 if collision else 0
        self._drew = True
        self._advance()

    def op_SKP(self, ins):
        self._advance(skip=self.keypad.is_pressed(self.V[ins.x]))

    def op_SKNP(self, ins):
        self._advance(skip=not self.keypad.is_pressed(self.V[ins.x]))

    def op_LD_VX_DT(self, ins):
        self.V[ins.x] = self.timers.delay
        self._advance()

    def op_WAITKEY(self, ins):
        # PC stays on this instruction until _poll_key sees a key go down
        self.status = Status.AWAITING_KEY
        self.wait_register = ins.x
        self._wait_keys = self.keypad.press_counts()
        logger.debug("Waiting for a key press into V%X", ins.x)

    def op_LD_DT_VX(self, ins):
        self.timers.delay = self.V[ins.x]
        self._advance()

    def op_LD_ST_VX(self, ins):
        self.timers.sound = self.V[ins.x]
        self._advance()

    def op_ADD_I_VX(self, ins):
        self.registers.I = (self.registers.I + self.V[ins.x]) & 0xFFFF
        self._advance()

    def op_FONT(self, ins):
        self.registers.I = FONT_ADDRESS + (self.V[ins.x] & 0xF) * GLYPH_SIZE
        self._advance()

    def op_BCD(self, ins):
        v = self.V[ins.x]
        self.memory.write_block(self.registers.I, (v // 100, (v // 10) % 10, v % 10))
        self._advance()

    def op_STORE(self, ins):
        self.memory.write_block(self.registers.I, self.V[:ins.x + 1])
        if self.quirks.increment_index:
            self.registers.I = (self.registers.I + ins.x + 1) & 0xFFFF
        self._advance()

    def op_LOAD(self, ins):
        self.V[:ins.x + 1] = self.memory.read_block(self.registers.I, ins.x + 1)
        if self.quirks.increment_index:
            self.registers.I = (self.registers.I + ins.x + 1) & 0xFFFF
        self._advance()

    def __repr__(self):
        return "<Chip8 %s %r>" % (self.status.value, self.registers)


