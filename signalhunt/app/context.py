from __future__ import annotations
from dataclasses import dataclass
import pygame
from typing import Tuple
from signalhunt.api.config import EngineConfig


@dataclass
class Context:
    """What a game can see of the engine. The loop refreshes `screen` and `screen_size` on resize."""
    screen: pygame.Surface
    clock: pygame.time.Clock
    cfg: EngineConfig
    screen_size: Tuple[int, int]
