from .combo import InputOutcome, Phase, RoundState
from .difficulty import DifficultyProfile
from .highscores import DuplicatePolicy, HighScoreEntry, HighScoreStore
from .round import EventKind, GameEvent, RoundController, RoundStats
from .settings import RoundSettings

__all__ = [
    "DifficultyProfile",
    "DuplicatePolicy",
    "EventKind",
    "GameEvent",
    "HighScoreEntry",
    "HighScoreStore",
    "InputOutcome",
    "Phase",
    "RoundController",
    "RoundSettings",
    "RoundState",
    "RoundStats",
]
