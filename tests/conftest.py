import pytest

from chip8 import Chip8, Config, Quirks


def program(*opcodes):
    """Assemble 16 bit opcodes into a big-endian ROM image."""
    return b"".join(op.to_bytes(2, "big") for op in opcodes)


@pytest.fixture
def make_machine():
    def _make(*opcodes, **quirks):
        machine = Chip8(Config(seed=1234, quirks=Quirks(**quirks)))
        if opcodes:
            machine.load_rom(program(*opcodes))
        return machine
    return _make


@pytest.fixture
def machine(make_machine):
    return make_machine()
