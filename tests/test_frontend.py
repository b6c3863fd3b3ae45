import pytest

try:
    import pyglet
    from chip8.frontend import Chip8Window, render_rgba
except Exception as e:  # no display / GL libraries on this machine
    pytest.skip("pyglet window unavailable: %s" % e, allow_module_level=True)

import numpy as np

from chip8 import Chip8, Config


@pytest.fixture
def window(monkeypatch):
    unscheduled = []
    closed = []
    monkeypatch.setattr(pyglet.clock, "unschedule", unscheduled.append)
    monkeypatch.setattr(pyglet.window.Window, "close", lambda self: closed.append(self))
    win = Chip8Window.__new__(Chip8Window)
    win.machine = Chip8(Config(seed=0))
    win.on_error = "halt"
    win.halted = False
    win.should_draw = False
    win._cps_counter = 0
    win.unscheduled = unscheduled
    win.closed = closed
    return win


def test_close_unschedules_the_clock(window):
    window.close()
    assert window.frame in window.unscheduled
    assert window._update_bench in window.unscheduled
    assert window.closed == [window]


def test_halt_on_error_closes_and_unschedules(window):
    window.machine.load_rom(b"\x51\x21")
    window.frame(1 / 60)
    assert window.halted
    assert window.frame in window.unscheduled
    assert window.closed == [window]
    assert window.machine.timers.delay == 0


def test_skip_on_error_keeps_running(window):
    window.on_error = "skip"
    window.machine.load_rom(b"\x51\x21\x12\x02")
    window.frame(1 / 60)
    assert not window.halted
    assert window.machine.pc == 0x202
    assert window.closed == []


def test_render_rgba_flips_and_scales():
    frame = np.zeros((32, 64), dtype=bool)
    frame[0, 0] = True
    rgba = np.frombuffer(render_rgba(frame, 2), dtype=np.uint8).reshape(64, 128, 4)
    # top-left CHIP-8 pixel ends up in the last (top) rows of the pyglet image
    assert (rgba[62:64, 0:2, :3] == 255).all()
    assert (rgba[:62, :, :3] == 0).all()
    assert (rgba[..., 3] == 255).all()
