from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List


class PointerAction(Enum):
    Down = 1
    Up = 2


@dataclass
class PointerEvent:
    action: PointerAction
    x: float
    y: float
    # engine clock (ms) when the event was pulled from the queue
    t_ms: float
    touch: bool = False


@dataclass
class FrameData:
    timestamp: float
    # pointer presses/releases since the previous frame, in screen coords
    pointer_events: List[PointerEvent] = field(default_factory=list)
