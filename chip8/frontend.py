# pyglet window around a Chip8 machine - draws the screen, feeds the keypad and
# paces the machine at timer_hz frames per second.
# Every frame: run cycles_per_tick instructions -> tick timers -> redraw -> key events.

import logging

import numpy as np
import pyglet
from pyglet.window import key

from .constants import HEIGHT, WIDTH
from .cpu import Status
from .errors import Chip8Error

logger = logging.getLogger(__name__)

#map binding keys
KEYMAP = {
    key._1: 0x1, key._2: 0x2, key._3: 0x3, key._4: 0xC,
    key.Q: 0x4, key.W: 0x5, key.E: 0x6, key.R: 0xD,
    key.A: 0x7, key.S: 0x8, key.D: 0x9, key.F: 0xE,
    key.Z: 0xA, key.X: 0x0, key.C: 0xB, key.V: 0xF,
}

ON_ERROR_CHOICES = ("halt", "skip")


def render_rgba(frame, scale, fg=(255, 255, 255), bg=(0, 0, 0)):
    """Turn a [row, column] boolean frame into upscaled RGBA bytes for ImageData.

    pyglet images start at the bottom-left corner, so rows are flipped.
    """
    rgba = np.empty(frame.shape + (4,), dtype=np.uint8)
    rgba[...] = bg + (255,)
    rgba[frame, :3] = fg
    rgba = rgba[::-1]
    if scale != 1:
        rgba = np.repeat(np.repeat(rgba, scale, axis=0), scale, axis=1)
    return rgba.tobytes()


class Chip8Window(pyglet.window.Window):

    def __init__(self, machine, scale=10, on_error="halt", show_hud=True):
        if on_error not in ON_ERROR_CHOICES:
            raise ValueError("on_error must be one of %s" % (ON_ERROR_CHOICES,))
        self.scale = scale
        window_width, window_height = WIDTH * scale, HEIGHT * scale
        super().__init__(
            width=window_width,
            height=window_height,
            caption="CHIP-8 Emulator",
            resizable=False,
            vsync=False
        )

        self.machine = machine
        self.on_error = on_error
        self.show_hud = show_hud
        self.should_draw = True
        self.halted = False

        self.image = pyglet.image.ImageData(
            window_width,
            window_height,
            'RGBA',
            render_rgba(machine.framebuffer.snapshot(), scale)
        )

        # Performance tracking counters
        self._fps_counter = 0
        self._cps_counter = 0
        self.fps_label = pyglet.text.Label(
            "FPS: 0",
            font_size=12,
            x=5,
            y=window_height - 15,
            anchor_x='left',
            anchor_y='center',
            color=(255, 255, 255, 255)
        )
        self.cps_label = pyglet.text.Label(
            "Cycles/s: 0",
            font_size=12,
            x=5,
            y=window_height - 30,
            anchor_x='left',
            anchor_y='center',
            color=(255, 255, 255, 255)
        )

        pyglet.clock.schedule_interval(self.frame, 1.0 / machine.config.timer_hz)
        pyglet.clock.schedule_interval(self._update_bench, 1.0)

    # ---- Frame ----
    def frame(self, dt):
        if self.halted:
            return
        try:
            self._cps_counter += self.machine.run_frame()
        except Chip8Error as e:
            self._handle_error(e)
        self.should_draw = True

    def _handle_error(self, error):
        if self.on_error == "skip":
            logger.error("Emulation error (skipped): %s", error)
            self.machine.registers.pc = (self.machine.registers.pc + 2) & 0xFFFF
            return
        logger.error("Emulation error: %s", error)
        self.halted = True
        self.close()

    def _update_bench(self, dt):
        self.fps_label.text = f"FPS: {self._fps_counter / dt:.1f}"
        self.cps_label.text = f"Cycles/s: {self._cps_counter / dt:.0f}"
        self._fps_counter = 0
        self._cps_counter = 0

    # ---- Drawing ----
    def on_draw(self):
        if not self.should_draw:
            return
        self.clear()
        frame = self.machine.framebuffer.snapshot()
        self.image.set_data('RGBA', self.width * 4, render_rgba(frame, self.scale))
        self.image.blit(0, 0)
        if self.show_hud:
            self.fps_label.draw()
            self.cps_label.draw()
        self.should_draw = False
        self._fps_counter += 1

    # ---- Input ----
    def on_key_press(self, symbol, modifiers):
        if symbol == key.ESCAPE:
            self.close()
        elif symbol == key.F1:
            # toggle instruction tracing
            chip8_logger = logging.getLogger("chip8")
            tracing = chip8_logger.getEffectiveLevel() <= logging.DEBUG
            chip8_logger.setLevel(logging.INFO if tracing else logging.DEBUG)
            logger.info("Instruction trace %s", "off" if tracing else "on")
        elif symbol == key.F5:
            logger.info("Reset")
            self.machine.reset()
            self.halted = False
        elif symbol in KEYMAP:
            self.machine.keypad.press(KEYMAP[symbol])

    def on_key_release(self, symbol, modifiers):
        if symbol in KEYMAP:
            self.machine.keypad.release(KEYMAP[symbol])

    def close(self):
        # on_close only fires for the window manager, so Escape and halts come here too
        pyglet.clock.unschedule(self.frame)
        pyglet.clock.unschedule(self._update_bench)
        if self.machine.status is Status.AWAITING_KEY:
            logger.info("Closed while waiting for a key press in V%X", self.machine.wait_register)
        super().close()
