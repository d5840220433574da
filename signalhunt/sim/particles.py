"""
particles.py: glyph explosion particles in flat numpy slot arrays.

Slots are reused: a particle that expires frees its slot for the next spawn.
The arena doubles in size when a burst needs more free slots than exist.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

GLYPHS = "01∆Ω¥$%#@&*/≠≡πψ§{}[]<>+-;"

BATCH_SIZE = 60
TOUCH_BATCH_FACTOR = 0.5

DRAG = 0.995            # horizontal velocity multiplier per update
GRAVITY = 0.035         # added to vy per update
FRAME_MS = 16.0         # velocities are px per 16 ms
MAX_STEP_MS = 40.0      # clamp so a stalled frame doesn't teleport particles

LIFE_MIN_MS = 600.0
LIFE_SPAN_MS = 250.0
DIST_MIN = 60.0
DIST_SPAN = 140.0
SPIN_MAX = 0.08         # rad per update, centred on zero


@dataclass
class ParticleView:
    x: float
    y: float
    rotation: float
    size: float
    glyph: str
    alpha: float        # 1 at birth, 0 at end of life


class ParticleSystem:
    """
    Usage:
        ps = ParticleSystem()
        ps.spawn(x, y)          # burst at a point
        ps.advance(dt_ms)       # physics step
        for p in ps.live(): ... # draw
    """

    def __init__(self, capacity: int = 256, touch: bool = False,
                 rng: np.random.Generator | None = None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.touch = touch
        self.running = False
        self._alloc(max(1, capacity))

    def _alloc(self, capacity: int) -> None:
        self.x = np.zeros(capacity, dtype=np.float64)
        self.y = np.zeros(capacity, dtype=np.float64)
        self.vx = np.zeros(capacity, dtype=np.float64)
        self.vy = np.zeros(capacity, dtype=np.float64)
        self.rotation = np.zeros(capacity, dtype=np.float64)
        self.angular = np.zeros(capacity, dtype=np.float64)
        self.age = np.zeros(capacity, dtype=np.float64)
        self.life = np.zeros(capacity, dtype=np.float64)
        self.size = np.zeros(capacity, dtype=np.float64)
        self.glyph = np.zeros(capacity, dtype=np.int32)
        self.alive = np.zeros(capacity, dtype=bool)

    def _grow(self, capacity: int) -> None:
        old = {name: getattr(self, name) for name in (
            "x", "y", "vx", "vy", "rotation", "angular", "age", "life", "size", "glyph", "alive")}
        n = old["alive"].shape[0]
        self._alloc(capacity)
        for name, arr in old.items():
            getattr(self, name)[:n] = arr

    @property
    def capacity(self) -> int:
        return int(self.alive.shape[0])

    @property
    def count(self) -> int:
        return int(np.count_nonzero(self.alive))

    @property
    def batch_size(self) -> int:
        if self.touch:
            return int(round(BATCH_SIZE * TOUCH_BATCH_FACTOR))
        return BATCH_SIZE

    def spawn(self, cx: float, cy: float, count: int | None = None) -> np.ndarray:
        """Burst `count` particles (default: batch size) at (cx, cy). Returns the slot indices."""
        n = self.batch_size if count is None else int(count)
        if n <= 0:
            return np.zeros(0, dtype=np.intp)

        free = np.flatnonzero(~self.alive)
        if free.shape[0] < n:
            need = self.count + n
            cap = self.capacity
            while cap < need:
                cap *= 2
            self._grow(cap)
            free = np.flatnonzero(~self.alive)
        slots = free[:n]

        rng = self.rng
        angles = rng.random(n) * 2 * np.pi
        dist = DIST_MIN + rng.random(n) * DIST_SPAN
        speed = (dist / 24) * (0.6 + rng.random(n) * 0.8)

        self.x[slots] = cx
        self.y[slots] = cy
        self.vx[slots] = np.cos(angles) * speed
        self.vy[slots] = np.sin(angles) * speed
        self.age[slots] = 0.0
        self.life[slots] = LIFE_MIN_MS + rng.random(n) * LIFE_SPAN_MS
        if self.touch:
            self.size[slots] = 12 + rng.random(n) * 6
        else:
            self.size[slots] = 16 + rng.random(n) * 8
        self.glyph[slots] = rng.integers(0, len(GLYPHS), n)
        self.rotation[slots] = rng.random(n) * 2 * np.pi
        self.angular[slots] = (rng.random(n) - 0.5) * SPIN_MAX
        self.alive[slots] = True

        self.running = True
        return slots

    def advance(self, dt_ms: float) -> None:
        dt = min(MAX_STEP_MS, max(0.0, float(dt_ms)))
        alive = self.alive
        self.age[alive] += dt

        expired = alive & (self.age >= self.life)
        self.alive[expired] = False

        live = self.alive
        step = dt / FRAME_MS
        self.vx[live] *= DRAG
        self.vy[live] += GRAVITY
        self.x[live] += self.vx[live] * step
        self.y[live] += self.vy[live] * step
        self.rotation[live] += self.angular[live]

        if not live.any():
            self.running = False

    def alpha(self) -> np.ndarray:
        """Opacity of every live particle, in slot order."""
        idx = np.flatnonzero(self.alive)
        return np.clip(1.0 - self.age[idx] / self.life[idx], 0.0, 1.0)

    def live(self) -> Iterator[ParticleView]:
        idx = np.flatnonzero(self.alive)
        alphas = self.alpha()
        for k, i in enumerate(idx):
            yield ParticleView(
                x=float(self.x[i]), y=float(self.y[i]),
                rotation=float(self.rotation[i]), size=float(self.size[i]),
                glyph=GLYPHS[int(self.glyph[i])], alpha=float(alphas[k]),
            )

    def clear(self) -> None:
        self.alive[:] = False
        self.running = False
