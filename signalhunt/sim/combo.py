"""Hit/miss interpretation: debounce, forgiving near-misses, combo streaks."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .target import Target

DEBOUNCE_MS = 80
# release points closer than this fraction of the target width don't count as misses
MISS_FORGIVENESS = 0.6


class Phase(Enum):
    Idle = 1
    Active = 2
    Paused = 3
    Ended = 4


class InputOutcome(Enum):
    Hit = 1
    Miss = 2
    Debounced = 3
    Forgiven = 4
    Inactive = 5


@dataclass
class RoundState:
    score: int = 0
    time_left: int = 0
    combo: int = 0
    max_combo: int = 0
    misses: int = 0
    phase: Phase = Phase.Idle
    difficulty: str = "normal"

    @property
    def active(self) -> bool:
        return self.phase == Phase.Active

    def reset(self, time_left: int) -> None:
        self.score = 0
        self.combo = 0
        self.max_combo = 0
        self.misses = 0
        self.time_left = time_left

    def register_hit(self) -> None:
        self.score += 1
        self.combo += 1
        if self.combo > self.max_combo:
            self.max_combo = self.combo

    def register_miss(self) -> None:
        if self.combo > self.max_combo:
            self.max_combo = self.combo
        self.combo = 0
        self.misses += 1


class InputGate:
    """Drops inputs that arrive within `window_ms` of the last accepted one."""

    def __init__(self, window_ms: float = DEBOUNCE_MS):
        self.window_ms = window_ms
        self.last_ms: Optional[float] = None

    def accept(self, t_ms: float) -> bool:
        if self.last_ms is not None and t_ms - self.last_ms < self.window_ms:
            return False
        self.last_ms = t_ms
        return True

    def reset(self) -> None:
        self.last_ms = None


def is_forgiven(target: Target, x: float, y: float, factor: float = MISS_FORGIVENESS) -> bool:
    return target.distance_to(x, y) <= target.size * factor


class InputMachine:
    def __init__(self, state: RoundState, gate: InputGate | None = None,
                 forgiveness: float = MISS_FORGIVENESS):
        self.state = state
        self.gate = gate or InputGate()
        self.forgiveness = forgiveness

    def hit(self, t_ms: float) -> InputOutcome:
        if not self.state.active:
            return InputOutcome.Inactive
        if not self.gate.accept(t_ms):
            return InputOutcome.Debounced
        self.state.register_hit()
        return InputOutcome.Hit

    def miss(self, target: Target, x: float, y: float, t_ms: float) -> InputOutcome:
        if not self.state.active:
            return InputOutcome.Inactive
        if is_forgiven(target, x, y, self.forgiveness):
            return InputOutcome.Forgiven
        if not self.gate.accept(t_ms):
            return InputOutcome.Debounced
        self.state.register_miss()
        return InputOutcome.Miss
