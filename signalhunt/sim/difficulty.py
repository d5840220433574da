from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class DifficultyProfile:
    name: str
    relocation_delay_ms: int   # base interval between target moves
    target_size: int           # px
    chaos: bool = False


DEFAULT_DIFFICULTY = "normal"

DEFAULT_PROFILES: Dict[str, DifficultyProfile] = {
    "easy": DifficultyProfile("easy", 750, 90),
    "normal": DifficultyProfile("normal", 650, 60),
    "hard": DifficultyProfile("hard", 550, 40),
    "chaos": DifficultyProfile("chaos", 450, 30, chaos=True),
}


def load_profiles(overrides: Mapping[str, Any] | None) -> Dict[str, DifficultyProfile]:
    """
    Merge manifest overrides onto the built-in profiles, e.g.:

        difficulties:
          easy: {delay_ms: 800, size: 100}
          nightmare: {delay_ms: 400, size: 24, chaos: true}
    """
    profiles = dict(DEFAULT_PROFILES)
    for name, raw in (overrides or {}).items():
        key = str(name).lower()
        base = profiles.get(key, DEFAULT_PROFILES[DEFAULT_DIFFICULTY])
        raw = raw or {}
        profiles[key] = DifficultyProfile(
            name=key,
            relocation_delay_ms=int(raw.get("delay_ms", base.relocation_delay_ms)),
            target_size=int(raw.get("size", base.target_size)),
            chaos=bool(raw.get("chaos", base.chaos)),
        )
    return profiles


def get_profile(profiles: Mapping[str, DifficultyProfile], name: str | None) -> DifficultyProfile:
    # unknown names play as "normal"
    if name and name.lower() in profiles:
        return profiles[name.lower()]
    return profiles.get(DEFAULT_DIFFICULTY, DEFAULT_PROFILES[DEFAULT_DIFFICULTY])
