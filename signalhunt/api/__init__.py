from .game_base import Game
from .frame_data import FrameData, PointerEvent, PointerAction
from .config import EngineConfig

__all__ = ["Game", "FrameData", "PointerEvent", "PointerAction", "EngineConfig"]
