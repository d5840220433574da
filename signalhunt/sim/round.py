"""
round.py: the round state machine.

Idle -> Active <-> Paused, Active -> Ended, Ended -> Active (replay) or Idle.

Everything that happens during a round arrives as a GameEvent through
`dispatch`: pointer hits and misses from the game, relocation and countdown
ticks from the scheduler, and (debounced) window resizes. Nothing here touches
the display, so a round can be replayed deterministically from seeded RNGs.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from .background import CELL_SIZE, CELL_SIZE_TOUCH, BackgroundField, Strikes
from .combo import InputGate, InputMachine, InputOutcome, Phase, RoundState
from .difficulty import DifficultyProfile, get_profile
from .feedback import FeedbackLayer
from .highscores import HighScoreEntry, HighScoreStore, InitialsPrompt, KeyValueStore
from .particles import ParticleSystem
from .schedule import Scheduler
from .settings import RoundSettings
from .target import TargetController

COUNTDOWN_MS = 1000
HIT_FLICKER_MS = 140
RESIZE_DEBOUNCE_MS = 120

COUNTDOWN_SCHEDULE = "countdown"
FLICKER_SCHEDULE = "flicker"
RESIZE_SCHEDULE = "resize"


class EventKind(Enum):
    Hit = 1
    Miss = 2
    RelocateTick = 3
    CountdownTick = 4
    Resize = 5


@dataclass(frozen=True)
class GameEvent:
    kind: EventKind
    x: Optional[float] = None
    y: Optional[float] = None
    t_ms: Optional[float] = None
    # only for Resize
    size: Optional[Tuple[int, int]] = None


@dataclass(frozen=True)
class RoundStats:
    score: int
    misses: int
    max_combo: int


class RoundController:
    def __init__(self, store: KeyValueStore, viewport: Tuple[int, int],
                 settings: RoundSettings | None = None, touch: bool = False,
                 seed: int | None = None):
        self.settings = settings or RoundSettings()
        self.touch = touch
        self.viewport = viewport
        self.scheduler = Scheduler()
        self.state = RoundState(difficulty=self.settings.difficulty)

        np_rng = np.random.default_rng(seed)
        w, h = viewport
        self.background = BackgroundField(
            w, h, CELL_SIZE_TOUCH if touch else CELL_SIZE, rng=np_rng)
        self.particles = ParticleSystem(touch=touch, rng=np_rng)
        self.targets = TargetController(
            self.scheduler, viewport, self.profile.target_size, touch=touch,
            rng=random.Random(seed),
            on_tick=lambda: self.dispatch(GameEvent(EventKind.RelocateTick)))
        self.input = InputMachine(self.state, InputGate(self.settings.debounce_ms))
        self.feedback = FeedbackLayer()
        self.scores = HighScoreStore(
            store, key=self.settings.scores_key,
            max_entries=self.settings.max_scores, policy=self.settings.duplicates)
        self.prompt = InitialsPrompt(self.scheduler)
        # background glyphs produced by the latest frame; None while paused
        self.strikes: Optional[Strikes] = None

        self.select_difficulty(self.state.difficulty)
        self.targets.relocate()

    # ------------- queries -------------
    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def target(self):
        return self.targets.target

    @property
    def profile(self) -> DifficultyProfile:
        return get_profile(self.settings.profiles, self.state.difficulty)

    @property
    def stats(self) -> RoundStats:
        s = self.state
        return RoundStats(score=s.score, misses=s.misses, max_combo=s.max_combo)

    @property
    def now_ms(self) -> float:
        return self.scheduler.now_ms

    def high_scores(self) -> List[HighScoreEntry]:
        return self.scores.load()

    # ------------- difficulty -------------
    def select_difficulty(self, name: str) -> DifficultyProfile:
        """Size and chaos apply right away; the relocation pace at the next start."""
        profile = get_profile(self.settings.profiles, name)
        self.state.difficulty = profile.name
        self.targets.set_size(profile.target_size)
        self.background.chaos = profile.chaos
        return profile

    # ------------- phase transitions -------------
    def start(self) -> None:
        self.scheduler.cancel(FLICKER_SCHEDULE)
        self.state.reset(self.settings.round_seconds)
        self.select_difficulty(self.state.difficulty)
        self.input.gate.reset()
        self.prompt.text = ""
        self.prompt.dismiss()
        self.state.phase = Phase.Active
        self.target.visible = True
        self._start_schedules()

    def pause(self) -> bool:
        if self.state.phase != Phase.Active:
            return False
        self.state.phase = Phase.Paused
        self._stop_schedules()
        return True

    def resume(self) -> bool:
        if self.state.phase != Phase.Paused:
            return False
        self.state.phase = Phase.Active
        self.target.visible = True
        self._start_schedules()
        return True

    def toggle_pause(self) -> bool:
        if self.state.phase == Phase.Paused:
            return self.resume()
        return self.pause()

    def end(self) -> RoundStats:
        self._stop_schedules()
        self.target.visible = False
        self.state.phase = Phase.Ended
        return self.stats

    def quit_to_menu(self) -> None:
        self._stop_schedules()
        self.target.visible = False
        self.prompt.dismiss()
        self.state.phase = Phase.Idle

    def _start_schedules(self) -> None:
        self.targets.start_relocating(self.profile.relocation_delay_ms)
        self.scheduler.every(
            COUNTDOWN_SCHEDULE, COUNTDOWN_MS,
            lambda: self.dispatch(GameEvent(EventKind.CountdownTick)))

    def _stop_schedules(self) -> None:
        self.targets.stop_relocating()
        self.scheduler.cancel(COUNTDOWN_SCHEDULE)
        self.scheduler.cancel(FLICKER_SCHEDULE)

    # ------------- input -------------
    def pointer_down(self, x: float | None, y: float | None, t_ms: float | None = None) -> Optional[InputOutcome]:
        """A press lands as a hit only on the visible target."""
        x, y = self._coords(x, y)
        if self.target.visible and self.target.contains(x, y):
            return self.dispatch(GameEvent(EventKind.Hit, x, y, t_ms))
        return None

    def pointer_up(self, x: float | None, y: float | None, t_ms: float | None = None) -> Optional[InputOutcome]:
        x, y = self._coords(x, y)
        if self.target.visible and self.target.contains(x, y):
            return None
        return self.dispatch(GameEvent(EventKind.Miss, x, y, t_ms))

    def _coords(self, x: float | None, y: float | None) -> Tuple[float, float]:
        w, h = self.viewport
        return (w / 2 if x is None else x), (h / 2 if y is None else y)

    # ------------- transition function -------------
    def dispatch(self, event: GameEvent) -> Optional[InputOutcome]:
        kind = event.kind
        if kind == EventKind.Resize:
            if event.size is not None:
                self._apply_resize(*event.size)
            return None
        if kind == EventKind.CountdownTick:
            self._on_countdown()
            return None
        if kind == EventKind.RelocateTick:
            if self.state.active:
                self.targets.relocate()
            return None

        t_ms = self.now_ms if event.t_ms is None else event.t_ms
        x, y = self._coords(event.x, event.y)
        if kind == EventKind.Hit:
            outcome = self.input.hit(t_ms)
            if outcome == InputOutcome.Hit:
                self._on_hit(x, y)
            return outcome
        if kind == EventKind.Miss:
            outcome = self.input.miss(self.target, x, y, t_ms)
            if outcome == InputOutcome.Miss:
                self.feedback.miss(x, y)
            return outcome
        raise ValueError(f"unhandled event kind: {kind}")

    def _on_countdown(self) -> None:
        if not self.state.active:
            return
        self.state.time_left -= 1
        if self.state.time_left <= 0:
            self.state.time_left = 0
            self.end()

    def _on_hit(self, x: float, y: float) -> None:
        self.targets.stop_relocating()
        cx, cy = self.target.center
        self.particles.spawn(cx, cy)
        self.target.visible = False
        self.scheduler.after(FLICKER_SCHEDULE, HIT_FLICKER_MS, self._end_flicker)

        w, h = self.viewport
        self.feedback.combo(self.state.combo, w / 2, 0.08 * h)
        self.feedback.hit(x, y)
        self.feedback.shake()

    def _end_flicker(self) -> None:
        if not self.state.active:
            return
        self.target.visible = True
        self.targets.start_relocating(self.profile.relocation_delay_ms)

    # ------------- viewport -------------
    def resize(self, w: int, h: int) -> None:
        """Coalesce bursts of resize notifications into one Resize event."""
        self.scheduler.after(
            RESIZE_SCHEDULE, RESIZE_DEBOUNCE_MS,
            lambda: self.dispatch(GameEvent(EventKind.Resize, size=(w, h))))

    def _apply_resize(self, w: int, h: int) -> None:
        self.viewport = (w, h)
        self.background.resize(w, h)
        self.targets.set_viewport(w, h)
        self.targets.relocate()

    # ------------- high scores -------------
    def submit_initials(self) -> bool:
        if self.state.phase != Phase.Ended:
            return False
        return self.prompt.submit(self.scores, self.state.score, self.state.difficulty)

    def save_score(self, initials: str) -> List[HighScoreEntry]:
        return self.scores.save(initials, self.state.score, self.state.difficulty)

    # ------------- frame step -------------
    def advance(self, dt_ms: float) -> None:
        self.scheduler.advance(dt_ms)
        self.feedback.advance(dt_ms)
        if self.state.phase == Phase.Paused:
            self.strikes = None
            return
        self.strikes = self.background.advance()
        if self.particles.running:
            self.particles.advance(dt_ms)
