"""Command line entry point: ``chip8 ROM [options]``."""

import argparse
import logging
import sys
from dataclasses import replace

from .config import PRESETS, Config, Quirks
from .constants import CYCLES_PER_TICK, TIMER_HZ
from .errors import Chip8Error

# command line flag -> Quirks field it switches on (or off, for --wrap)
QUIRK_FLAGS = {
    "shift_vy": ("shift_uses_vy", True),
    "wrap": ("clip_sprites", False),
    "vf_reset": ("vf_reset", True),
    "increment_index": ("increment_index", True),
    "jump_vx": ("jump_uses_vx", True),
    "display_wait": ("display_wait", True),
}


def build_parser():
    parser = argparse.ArgumentParser(prog="chip8", description="CHIP-8 interpreter")
    parser.add_argument("rom", help="Path to a CHIP-8 program image")
    parser.add_argument("--scale", type=int, default=10, help="Window pixels per CHIP-8 pixel")
    parser.add_argument("--cycles", type=int, default=None,
                        help="Instructions per 60Hz frame (default %d)" % CYCLES_PER_TICK)
    parser.add_argument("--hz", type=int, default=None,
                        help="Timer and refresh rate in Hz (default %d)" % TIMER_HZ)
    parser.add_argument("--preset", choices=sorted(PRESETS), default=None,
                        help="Start from a named set of quirks")
    parser.add_argument("--config", help="JSON configuration file")
    parser.add_argument("--seed", type=int, default=None, help="Seed for CXNN random numbers")
    parser.add_argument("--shift-vy", action="store_true", help="8XY6/8XYE shift Vy into Vx")
    parser.add_argument("--wrap", action="store_true", help="Wrap sprites at the screen edges")
    parser.add_argument("--vf-reset", action="store_true", help="8XY1/8XY2/8XY3 clear VF")
    parser.add_argument("--increment-index", action="store_true",
                        help="FX55/FX65 advance I past the copied registers")
    parser.add_argument("--jump-vx", action="store_true", help="BNNN jumps to NNN + VX")
    parser.add_argument("--display-wait", action="store_true",
                        help="Draw at most one sprite per frame")
    parser.add_argument("--on-error", choices=("halt", "skip"), default="halt",
                        help="What to do when the program faults")
    parser.add_argument("-v", "--verbose", action="store_true", help="Trace every instruction")
    return parser


def build_config(args):
    """Merge config file, preset and flags (in that order) into a Config."""
    config = Config.load(args.config) if args.config else Config()
    quirks = Quirks.preset(args.preset) if args.preset else config.quirks
    for flag, (name, value) in QUIRK_FLAGS.items():
        if getattr(args, flag):
            quirks = replace(quirks, **{name: value})
    return replace(
        config,
        cycles_per_tick=args.cycles if args.cycles is not None else config.cycles_per_tick,
        timer_hz=args.hz if args.hz is not None else config.timer_hz,
        seed=args.seed if args.seed is not None else config.seed,
        quirks=quirks,
    )


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    try:
        config = build_config(args)
    except (OSError, ValueError) as e:
        print("chip8: bad configuration: %s" % e, file=sys.stderr)
        return 2

    from .cpu import Chip8

    machine = Chip8(config)
    try:
        machine.load_rom_file(args.rom)
    except (OSError, Chip8Error) as e:
        print("chip8: cannot load %s: %s" % (args.rom, e), file=sys.stderr)
        return 1

    # pyglet opens a display on import of the window module
    import pyglet
    from .frontend import Chip8Window

    Chip8Window(machine, scale=args.scale, on_error=args.on_error)
    pyglet.app.run()
    return 0
