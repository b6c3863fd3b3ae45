"""Errors raised by the CHIP-8 core.

Every error belongs to a single instruction (or to loading an image) and is
raised before the machine state is touched, so the caller can decide to halt,
report or skip without cleaning up after a half-executed instruction.
"""


class Chip8Error(Exception):
    """Base class for all interpreter errors."""


class IllegalInstruction(Chip8Error):
    def __init__(self, opcode, address=None):
        self.opcode = opcode
        self.address = address
        msg = "Illegal instruction 0x%04X" % opcode
        if address is not None:
            msg += " at 0x%03X" % address
        super().__init__(msg)


class OutOfBounds(Chip8Error):
    def __init__(self, address, reason="out of bounds"):
        self.address = address
        super().__init__("Address 0x%03X %s" % (address, reason))


class StackOverflow(Chip8Error):
    def __init__(self, depth):
        self.depth = depth
        super().__init__("Stack overflow on CALL (depth %d)" % depth)


class StackUnderflow(Chip8Error):
    def __init__(self):
        super().__init__("Stack underflow on RET")


class ImageTooLarge(Chip8Error):
    def __init__(self, size, capacity):
        self.size = size
        self.capacity = capacity
        super().__init__("ROM is %d bytes, only %d fit in memory" % (size, capacity))
