# CHIP-8 machine constants.
# Memory map - 0x000-0x1FF belongs to the interpreter (font lives at the bottom),
# programs are loaded at 0x200 and may use everything up to 0xFFF.
#----------------------------------------------------------------------------------------------

# ---- Screen ----
WIDTH, HEIGHT = 64, 32

# ---- Memory ----
MEMORY_SIZE = 4096
PROGRAM_START = 0x200
MAX_IMAGE_SIZE = MEMORY_SIZE - PROGRAM_START  # 3584 bytes

# ---- Registers ----
NUM_REGISTERS = 16
STACK_DEPTH = 16
NUM_KEYS = 16

# ---- Clocks ----
TIMER_HZ = 60
CYCLES_PER_TICK = 10  # ~600 instructions per second at 60Hz

# ---- Font ----
FONT_ADDRESS = 0x000
GLYPH_SIZE = 5

# set fonts (binary pixel patterns)
FONTSET = (
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
)  # 16 glyphs x 5 bytes
