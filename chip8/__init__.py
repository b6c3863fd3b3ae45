"""CHIP-8 interpreter core with a pyglet front end."""

from .config import Config, Quirks
from .cpu import Chip8, Status
from .errors import (Chip8Error, IllegalInstruction, ImageTooLarge, OutOfBounds,
                     StackOverflow, StackUnderflow)
from .framebuffer import Framebuffer
from .instructions import Instruction, Op, decode
from .keypad import Keypad
from .memory import Memory, Registers
from .timers import Timers

__version__ = "0.1.0"

__all__ = [
    "Chip8", "Chip8Error", "Config", "Framebuffer", "IllegalInstruction", "ImageTooLarge",
    "Instruction", "Keypad", "Memory", "Op", "OutOfBounds", "Quirks", "Registers",
    "StackOverflow", "StackUnderflow", "Status", "Timers", "decode",
]
