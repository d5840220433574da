from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List

TEXT_LIFE_MS = 850
TEXT_RISE_PX = 35
COMBO_RISE_PX = 40
SHAKE_MS = 150

HIT_TEXT = "SIGNAL_DESTROYED"
MISS_TEXT = "TRACE_LOST"


class TextKind(Enum):
    Hit = 1
    Miss = 2
    Combo = 3


@dataclass
class FloatingText:
    text: str
    x: float
    y: float
    kind: TextKind
    age_ms: float = 0.0
    life_ms: float = TEXT_LIFE_MS

    @property
    def progress(self) -> float:
        return min(1.0, self.age_ms / self.life_ms)

    @property
    def alpha(self) -> float:
        return 1.0 - self.progress

    @property
    def offset_y(self) -> float:
        rise = COMBO_RISE_PX if self.kind == TextKind.Combo else TEXT_RISE_PX
        return -rise * self.progress


class FeedbackLayer:
    """Transient floating labels and screen shake."""

    def __init__(self) -> None:
        self.texts: List[FloatingText] = []
        self.shake_ms: float = 0.0

    def hit(self, x: float, y: float) -> None:
        self.texts.append(FloatingText(HIT_TEXT, x, y, TextKind.Hit))

    def miss(self, x: float, y: float) -> None:
        self.texts.append(FloatingText(MISS_TEXT, x, y, TextKind.Miss))

    def combo(self, combo: int, x: float, y: float) -> None:
        if combo < 2:
            return
        # one banner at a time
        self.texts = [t for t in self.texts if t.kind != TextKind.Combo]
        self.texts.append(FloatingText(f"COMBO x{combo}", x, y, TextKind.Combo))

    def shake(self) -> None:
        self.shake_ms = SHAKE_MS

    @property
    def shaking(self) -> bool:
        return self.shake_ms > 0

    def advance(self, dt_ms: float) -> None:
        self.shake_ms = max(0.0, self.shake_ms - dt_ms)
        for t in self.texts:
            t.age_ms += dt_ms
        self.texts = [t for t in self.texts if t.age_ms < t.life_ms]

    def clear(self) -> None:
        self.texts.clear()
        self.shake_ms = 0.0
