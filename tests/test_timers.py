from chip8 import Timers


def test_tick_counts_down_to_zero():
    timers = Timers()
    timers.delay = 3
    timers.sound = 1
    timers.tick()
    assert (timers.delay, timers.sound) == (2, 0)
    timers.tick()
    timers.tick()
    timers.tick()
    assert (timers.delay, timers.sound) == (0, 0)


def test_sound_active():
    timers = Timers()
    assert not timers.sound_active
    timers.sound = 2
    assert timers.sound_active
    timers.tick()
    timers.tick()
    assert not timers.sound_active


def test_reset():
    timers = Timers()
    timers.delay, timers.sound = 9, 9
    timers.reset()
    assert (timers.delay, timers.sound) == (0, 0)
