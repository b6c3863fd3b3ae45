# Delay and sound timers. Both count down by one per tick (60Hz) no matter how many
# instructions ran in between, and stop at zero.


class Timers:

    def __init__(self):
        self.delay = 0
        self.sound = 0

    def tick(self):
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

    @property
    def sound_active(self):
        # the buzzer plays while the sound timer is non-zero
        return self.sound > 0

    def reset(self):
        self.delay = 0
        self.sound = 0
