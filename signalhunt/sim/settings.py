from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from .combo import DEBOUNCE_MS
from .difficulty import DEFAULT_DIFFICULTY, DifficultyProfile, load_profiles
from .highscores import MAX_ENTRIES, STORAGE_KEY, DuplicatePolicy

ROUND_SECONDS = 30


@dataclass
class RoundSettings:
    round_seconds: int = ROUND_SECONDS
    debounce_ms: float = DEBOUNCE_MS
    difficulty: str = DEFAULT_DIFFICULTY
    profiles: Dict[str, DifficultyProfile] = field(default_factory=lambda: load_profiles(None))
    scores_key: str = STORAGE_KEY
    max_scores: int = MAX_ENTRIES
    duplicates: DuplicatePolicy = DuplicatePolicy.Replace

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None) -> "RoundSettings":
        """Build from a manifest's `options:` mapping; missing keys keep their defaults."""
        options = options or {}
        scores = options.get("highscores", {}) or {}
        profiles = load_profiles(options.get("difficulties"))
        difficulty = str(options.get("default_difficulty", DEFAULT_DIFFICULTY)).lower()
        if difficulty not in profiles:
            difficulty = DEFAULT_DIFFICULTY
        return cls(
            round_seconds=int(options.get("round_seconds", ROUND_SECONDS)),
            debounce_ms=float(options.get("debounce_ms", DEBOUNCE_MS)),
            difficulty=difficulty,
            profiles=profiles,
            scores_key=str(scores.get("key", STORAGE_KEY)),
            max_scores=int(scores.get("max_entries", MAX_ENTRIES)),
            duplicates=DuplicatePolicy(str(scores.get("duplicates", DuplicatePolicy.Replace.value)).lower()),
        )
