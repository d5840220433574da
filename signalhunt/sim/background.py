"""
background.py: falling-glyph field behind the game.

One scalar "drop" (fall position, px) per font-cell column, kept in a numpy
array. Every frame each column strikes one random glyph at its drop, then the
drop moves down a cell. Columns past the bottom only reset with a small
probability, so streaks have uneven lengths instead of resetting in lockstep.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789@$%&*"

CELL_SIZE = 18
CELL_SIZE_TOUCH = 14

FADE_ALPHA = 0.05
FADE_ALPHA_CHAOS = 0.12
RESET_THRESHOLD = 0.975
RESET_THRESHOLD_CHAOS = 0.85
CHAOS_SPEED_MIN = 0.8
CHAOS_SPEED_SPAN = 0.5


@dataclass
class Strikes:
    """Glyphs to draw this frame, one per column (plus a jittered copy in chaos mode)."""
    x: np.ndarray
    y: np.ndarray
    glyphs: List[str]
    jitter_x: Optional[np.ndarray] = None


class BackgroundField:
    def __init__(self, width: int, height: int, cell_size: int = CELL_SIZE,
                 chaos: bool = False, rng: np.random.Generator | None = None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.chaos = chaos
        self.width = 0
        self.height = 0
        self.cell_size = cell_size
        self.drops = np.zeros(0, dtype=np.float64)
        self.resize(width, height, cell_size)

    @property
    def columns(self) -> int:
        return int(self.drops.shape[0])

    @property
    def fade_alpha(self) -> float:
        return FADE_ALPHA_CHAOS if self.chaos else FADE_ALPHA

    @property
    def reset_threshold(self) -> float:
        return RESET_THRESHOLD_CHAOS if self.chaos else RESET_THRESHOLD

    def resize(self, width: int, height: int, cell_size: int | None = None) -> None:
        """Rebuild the column array, keeping in-flight drops of surviving columns."""
        self.width = max(0, int(width))
        self.height = max(0, int(height))
        if cell_size is not None:
            self.cell_size = max(1, int(cell_size))

        columns = max(1, self.width // self.cell_size)
        have = self.columns
        if have < columns:
            fresh = self.rng.random(columns - have) * self.height
            self.drops = np.concatenate([self.drops, fresh])
        else:
            self.drops = self.drops[:columns].copy()

    def advance(self) -> Strikes:
        """Step one frame and return what to draw for it."""
        n = self.columns
        cell = self.cell_size
        idx = self.rng.integers(0, len(LETTERS), n)
        xs = np.arange(n, dtype=np.float64) * cell
        ys = np.floor(self.drops)

        if self.chaos:
            self.drops += cell * (CHAOS_SPEED_MIN + self.rng.random(n) * CHAOS_SPEED_SPAN)
        else:
            self.drops += cell

        reset = (self.drops > self.height) & (self.rng.random(n) > self.reset_threshold)
        self.drops[reset] = 0.0

        jitter_x = None
        if self.chaos:
            jitter_x = xs + self.rng.random(n) * cell - cell / 2

        return Strikes(x=xs, y=ys, glyphs=[LETTERS[i] for i in idx], jitter_x=jitter_x)
