from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple


@dataclass
class EngineConfig:
    screen_size: Tuple[int, int]
    fps: int = 60
    # constrained (touch) devices get smaller glyphs and fewer particles
    touch: bool = False
    storage_path: Optional[Path] = None
    difficulty: Optional[str] = None
    debug: bool = False
