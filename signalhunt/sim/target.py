from __future__ import annotations
import math
import random
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .schedule import Scheduler

PADDING = 10                      # px kept clear on every side
REACTION_MULTIPLIER = 1.5         # mouse/trackpad input lag allowance
REACTION_MULTIPLIER_TOUCH = 1.0
RELOCATE_SCHEDULE = "relocate"


@dataclass
class Target:
    # top-left corner; the target is drawn as a circle inscribed in its box
    x: float
    y: float
    size: int
    visible: bool = False

    @property
    def center(self) -> Tuple[float, float]:
        half = self.size / 2
        return self.x + half, self.y + half

    def distance_to(self, px: float, py: float) -> float:
        cx, cy = self.center
        return math.hypot(px - cx, py - cy)

    def contains(self, px: float, py: float) -> bool:
        return self.distance_to(px, py) <= self.size / 2


def _clamped_axis(u: float, extent: float, size: float, pad: float) -> float:
    pos = u * (extent - size - pad * 2) + pad
    hi = max(pad, extent - size - pad)
    return min(max(pos, pad), hi)


class TargetController:
    """Owns the single target: where it is and how often it moves."""

    def __init__(self, scheduler: Scheduler, viewport: Tuple[int, int], size: int,
                 touch: bool = False, rng: random.Random | None = None,
                 on_tick: Optional[Callable[[], None]] = None):
        self.scheduler = scheduler
        self.viewport = viewport
        self.rng = rng or random.Random()
        self.reaction_multiplier = REACTION_MULTIPLIER_TOUCH if touch else REACTION_MULTIPLIER
        self.on_tick = on_tick or self.relocate
        self.target = Target(x=PADDING, y=PADDING, size=size)
        self.relocations = 0

    def set_viewport(self, w: int, h: int) -> None:
        self.viewport = (w, h)

    def set_size(self, size: int) -> None:
        self.target.size = int(size)

    def relocate(self) -> Tuple[float, float]:
        w, h = self.viewport
        size = self.target.size
        self.target.x = _clamped_axis(self.rng.random(), w, size, PADDING)
        self.target.y = _clamped_axis(self.rng.random(), h, size, PADDING)
        self.relocations += 1
        return self.target.x, self.target.y

    def interval_ms(self, delay_ms: float) -> float:
        return delay_ms * self.reaction_multiplier

    def start_relocating(self, delay_ms: float) -> None:
        # Scheduler.every replaces any running relocation schedule
        self.relocate()
        self.scheduler.every(RELOCATE_SCHEDULE, self.interval_ms(delay_ms), self.on_tick)

    def stop_relocating(self) -> None:
        self.scheduler.cancel(RELOCATE_SCHEDULE)

    @property
    def relocating(self) -> bool:
        return self.scheduler.active(RELOCATE_SCHEDULE)
