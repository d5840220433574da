"""
highscores.py: top-10 leaderboard kept as one JSON string in a key-value store.

Writes are read-modify-write: load, apply the duplicate-initials policy, sort
by score (high to low), keep the best MAX_ENTRIES, store.
"""
from __future__ import annotations

import json
import re
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, List, Optional, Protocol

from .schedule import Scheduler

STORAGE_KEY = "highScores"
MAX_ENTRIES = 10
INITIALS_LEN = 3
INITIALS_FILLER = "_"
WARNING_MS = 2000
WARNING_SCHEDULE = "initials-warning"

EMPTY_INITIALS_WARNING = "Please enter at least one letter!"
TAKEN_INITIALS_WARNING = "Initials already taken!"

_NON_LETTERS = re.compile(r"[^A-Z]")


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...


class DuplicatePolicy(Enum):
    Replace = "replace"   # a new score overwrites the old entry for those initials
    Reject = "reject"     # initials already on the board can't be saved again
    Allow = "allow"       # every save is a separate entry


class DuplicateInitialsError(ValueError):
    pass


@dataclass(frozen=True)
class HighScoreEntry:
    initials: str
    score: int
    difficulty: str

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["HighScoreEntry"]:
        if not isinstance(raw, dict):
            return None
        initials = raw.get("initials")
        score = raw.get("score")
        if not isinstance(initials, str) or isinstance(score, bool) or not isinstance(score, (int, float)):
            return None
        difficulty = raw.get("difficulty")
        return cls(initials=initials, score=int(score),
                   difficulty=str(difficulty) if difficulty else "UNKNOWN")

    def to_dict(self) -> dict:
        return asdict(self)


def sanitize_initials(raw: str) -> str:
    """Uppercase, letters only, at most three."""
    return _NON_LETTERS.sub("", (raw or "").upper())[:INITIALS_LEN]


def pad_initials(initials: str) -> str:
    return sanitize_initials(initials).ljust(INITIALS_LEN, INITIALS_FILLER)


class HighScoreStore:
    def __init__(self, store: KeyValueStore, key: str = STORAGE_KEY,
                 max_entries: int = MAX_ENTRIES,
                 policy: DuplicatePolicy = DuplicatePolicy.Replace):
        self.store = store
        self.key = key
        self.max_entries = max_entries
        self.policy = policy

    def load(self) -> List[HighScoreEntry]:
        raw = self.store.get(self.key)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            return []
        if not isinstance(data, list):
            return []
        entries = [HighScoreEntry.from_dict(item) for item in data]
        return [e for e in entries if e is not None]

    def has_initials(self, initials: str) -> bool:
        padded = pad_initials(initials)
        return any(e.initials == padded for e in self.load())

    def save(self, initials: str, score: int, difficulty: str) -> List[HighScoreEntry]:
        """Record a score; returns the stored board."""
        padded = pad_initials(initials)
        if not sanitize_initials(initials):
            raise ValueError("initials need at least one letter")

        entries = self.load()
        if self.policy == DuplicatePolicy.Reject and any(e.initials == padded for e in entries):
            raise DuplicateInitialsError(f"{padded} is already on the board")
        if self.policy == DuplicatePolicy.Replace:
            entries = [e for e in entries if e.initials != padded]

        entries.append(HighScoreEntry(padded, int(score), str(difficulty).upper()))
        entries.sort(key=lambda e: e.score, reverse=True)
        entries = entries[:self.max_entries]
        self.store.set(self.key, json.dumps([e.to_dict() for e in entries]))
        return entries


def format_entry(rank: int, entry: HighScoreEntry) -> str:
    return f"{rank}. {entry.initials} - {entry.score} / {entry.difficulty or 'UNKNOWN'}"


class InitialsPrompt:
    """Text entry for the end screen; warnings clear themselves after a while."""

    def __init__(self, scheduler: Scheduler, warning_ms: float = WARNING_MS):
        self.scheduler = scheduler
        self.warning_ms = warning_ms
        self.text = ""
        self.warning: Optional[str] = None

    def type(self, chars: str) -> None:
        self.text = sanitize_initials(self.text + chars)
        self.dismiss()

    def backspace(self) -> None:
        self.text = self.text[:-1]

    def warn(self, message: str) -> None:
        self.warning = message
        self.scheduler.after(WARNING_SCHEDULE, self.warning_ms, self.dismiss)

    def dismiss(self) -> None:
        self.warning = None
        self.scheduler.cancel(WARNING_SCHEDULE)

    def submit(self, board: HighScoreStore, score: int, difficulty: str) -> bool:
        if not self.text:
            self.warn(EMPTY_INITIALS_WARNING)
            return False
        if board.policy == DuplicatePolicy.Reject and board.has_initials(self.text):
            self.warn(TAKEN_INITIALS_WARNING)
            return False
        board.save(self.text, score, difficulty)
        self.text = ""
        self.dismiss()
        return True
