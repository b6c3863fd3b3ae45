"""Machine configuration: clock rate, quirk toggles and RNG seed."""

from dataclasses import asdict, dataclass, field, fields, replace
from typing import Optional
import json

from .constants import CYCLES_PER_TICK, TIMER_HZ


@dataclass
class Quirks:
    """Behaviour that differs between historical CHIP-8 interpreters."""
    shift_uses_vy: bool = False    # 8XY6/8XYE: Vx := Vy shifted, instead of Vx shifted in place
    clip_sprites: bool = True      # DXYN: drop pixels past the screen edge instead of wrapping
    vf_reset: bool = False         # 8XY1/8XY2/8XY3 clear VF
    increment_index: bool = False  # FX55/FX65 leave I pointing past the last register
    jump_uses_vx: bool = False     # BNNN jumps to NNN + VX instead of NNN + V0
    display_wait: bool = False     # DXYN ends the current frame

    @classmethod
    def preset(cls, name: str) -> 'Quirks':
        try:
            return replace(PRESETS[name.lower()])
        except KeyError:
            raise ValueError("Unknown quirk preset %r (choose from %s)"
                             % (name, ", ".join(sorted(PRESETS)))) from None

    @classmethod
    def from_dict(cls, data: dict) -> 'Quirks':
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError("Unknown quirk(s): %s" % ", ".join(sorted(unknown)))
        return cls(**{k: bool(v) for k, v in data.items()})


PRESETS = {
    "chip8": Quirks(),
    "cosmac": Quirks(shift_uses_vy=True, clip_sprites=True, vf_reset=True,
                     increment_index=True, display_wait=True),
    "schip": Quirks(clip_sprites=True, jump_uses_vx=True),
}


@dataclass
class Config:
    """Everything the core reads at construction time."""
    cycles_per_tick: int = CYCLES_PER_TICK
    timer_hz: int = TIMER_HZ
    seed: Optional[int] = None
    protect_reserved: bool = True
    quirks: Quirks = field(default_factory=Quirks)

    def __post_init__(self):
        if self.cycles_per_tick < 1:
            raise ValueError("cycles_per_tick must be at least 1, got %d" % self.cycles_per_tick)
        if self.timer_hz < 1:
            raise ValueError("timer_hz must be at least 1, got %d" % self.timer_hz)

    @property
    def cpu_hz(self) -> int:
        return self.cycles_per_tick * self.timer_hz

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        defaults = cls()
        return cls(
            cycles_per_tick=int(data.get("cycles_per_tick", defaults.cycles_per_tick)),
            timer_hz=int(data.get("timer_hz", defaults.timer_hz)),
            seed=data.get("seed"),
            protect_reserved=bool(data.get("protect_reserved", defaults.protect_reserved)),
            quirks=Quirks.from_dict(data.get("quirks", {})),
        )

    def save(self, path: str) -> None:
        """Save configuration to JSON file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str) -> 'Config':
        """Load configuration from JSON file."""
        with open(path, 'r') as f:
            return cls.from_dict(json.load(f))
