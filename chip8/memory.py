# Memory - can hold up to 4096 bytes which includes: the interpreter, fonts, and inputted ROM.
# Register file - 16 general purpose registers (V0-VF), the I register, the program counter
# and a 16 entry stack for subroutine calls.

import logging

from .constants import (FONT_ADDRESS, FONTSET, MAX_IMAGE_SIZE, MEMORY_SIZE,
                        NUM_REGISTERS, PROGRAM_START, STACK_DEPTH)
from .errors import ImageTooLarge, OutOfBounds, StackOverflow, StackUnderflow

logger = logging.getLogger(__name__)


class Memory:

    def __init__(self, protect_reserved=True):
        self.data = bytearray(MEMORY_SIZE)
        self.protect_reserved = protect_reserved
        self.data[FONT_ADDRESS:FONT_ADDRESS + len(FONTSET)] = bytes(FONTSET)

    def __len__(self):
        return len(self.data)

    def check(self, address, length=1):
        """Raise OutOfBounds unless [address, address + length) is addressable."""
        if address < 0 or address + length > MEMORY_SIZE:
            raise OutOfBounds(address if address < 0 else max(address, MEMORY_SIZE))

    def check_writable(self, address, length=1):
        self.check(address, length)
        if self.protect_reserved and address < PROGRAM_START:
            raise OutOfBounds(address, "is reserved for the interpreter")

    def read(self, address):
        self.check(address)
        return self.data[address]

    def read_block(self, address, length):
        self.check(address, length)
        return bytes(self.data[address:address + length])

    def read_word(self, address):
        # big-endian: high byte first
        self.check(address, 2)
        return (self.data[address] << 8) | self.data[address + 1]

    def write(self, address, value):
        self.check_writable(address)
        self.data[address] = value & 0xFF

    def write_block(self, address, values):
        values = bytes(values)
        self.check_writable(address, len(values))
        self.data[address:address + len(values)] = values

    def load_image(self, image):
        image = bytes(image)
        if len(image) > MAX_IMAGE_SIZE:
            raise ImageTooLarge(len(image), MAX_IMAGE_SIZE)
        self.data[PROGRAM_START:] = bytes(MAX_IMAGE_SIZE)
        self.data[PROGRAM_START:PROGRAM_START + len(image)] = image
        logger.info("Loaded %d byte image at 0x%03X", len(image), PROGRAM_START)


class Registers:

    def __init__(self):
        self.V = [0] * NUM_REGISTERS
        self.I = 0
        self.pc = PROGRAM_START
        self.stack = []

    @property
    def sp(self):
        return len(self.stack)

    def push(self, address):
        if len(self.stack) >= STACK_DEPTH:
            raise StackOverflow(len(self.stack))
        self.stack.append(address & 0xFFFF)

    def pop(self):
        if not self.stack:
            raise StackUnderflow()
        return self.stack.pop()

    def __repr__(self):
        regs = " ".join("V%X=%02X" % (i, v) for i, v in enumerate(self.V))
        return "<Registers pc=%03X I=%03X sp=%d %s>" % (self.pc, self.I, self.sp, regs)
