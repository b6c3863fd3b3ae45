# Input latch - the 16 key hex keypad.
#   1 2 3 C
#   4 5 6 D
#   7 8 9 E
#   A 0 B F
# The host writes a whole snapshot at once, the interpreter only ever reads it.
# Every released -> pressed transition also bumps a per-key counter, so a tap that
# goes down and up between two polls is still visible to FX0A.

from .constants import NUM_KEYS


class Keypad:

    def __init__(self):
        self._keys = (False,) * NUM_KEYS
        self._presses = (0,) * NUM_KEYS

    def update(self, states):
        """Replace the whole key state with a 16 flag snapshot."""
        keys = tuple(bool(s) for s in states)
        if len(keys) != NUM_KEYS:
            raise ValueError("Expected %d key states, got %d" % (NUM_KEYS, len(keys)))
        self._store(keys)

    def set_mask(self, mask):
        self._store(tuple(bool((mask >> k) & 1) for k in range(NUM_KEYS)))

    @property
    def mask(self):
        return sum(1 << k for k, down in enumerate(self._keys) if down)

    def press(self, key):
        self._set(key, True)

    def release(self, key):
        self._set(key, False)

    def _set(self, key, down):
        if not 0 <= key < NUM_KEYS:
            raise ValueError("No such key: %r" % key)
        keys = list(self._keys)
        keys[key] = down
        self._store(tuple(keys))

    def _store(self, keys):
        self._presses = tuple(n + (1 if now and not was else 0)
                              for n, was, now in zip(self._presses, self._keys, keys))
        self._keys = keys

    def is_pressed(self, key):
        return self._keys[key & 0xF]

    def snapshot(self):
        return self._keys

    def press_counts(self):
        """How many times each key has gone down since the keypad was created."""
        return self._presses

    def clear(self):
        self._keys = (False,) * NUM_KEYS
