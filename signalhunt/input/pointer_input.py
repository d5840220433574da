from __future__ import annotations
import pygame
from typing import List, Optional, Tuple

from signalhunt.api.config import EngineConfig
from signalhunt.api.frame_data import PointerAction, PointerEvent

_PRIMARY_BUTTON = 1


class PointerInput:
    """
    Collects presses and releases from mouse and touch into PointerEvents:
    - Only the primary mouse button counts; wheel and other buttons are ignored.
    - Touch coordinates arrive normalised (0..1) and are scaled to the window.
    - Events that carry no usable position fall back to the window centre.
    """

    def __init__(self, cfg: EngineConfig):
        self.touch = cfg.touch
        self._pending: List[PointerEvent] = []
        # a finger also generates synthetic mouse events; keep only the finger's
        self._finger_down = False

    def _center(self, screen_size: Tuple[int, int]) -> Tuple[float, float]:
        w, h = screen_size
        return w / 2, h / 2

    def _mouse_pos(self, event: pygame.event.Event, screen_size: Tuple[int, int]) -> Tuple[float, float]:
        pos: Optional[Tuple[int, int]] = getattr(event, "pos", None)
        if not pos:
            return self._center(screen_size)
        return float(pos[0]), float(pos[1])

    def _finger_pos(self, event: pygame.event.Event, screen_size: Tuple[int, int]) -> Tuple[float, float]:
        x = getattr(event, "x", None)
        y = getattr(event, "y", None)
        if x is None or y is None:
            return self._center(screen_size)
        w, h = screen_size
        return float(x) * w, float(y) * h

    def handle_pygame_event(self, event: pygame.event.Event, screen_size: Tuple[int, int], now_ms: float) -> None:
        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            if getattr(event, "button", _PRIMARY_BUTTON) != _PRIMARY_BUTTON:
                return
            if getattr(event, "touch", False) or self._finger_down:
                return
            action = PointerAction.Down if event.type == pygame.MOUSEBUTTONDOWN else PointerAction.Up
            x, y = self._mouse_pos(event, screen_size)
            self._pending.append(PointerEvent(action, x, y, now_ms))

        elif event.type in (pygame.FINGERDOWN, pygame.FINGERUP):
            down = event.type == pygame.FINGERDOWN
            self._finger_down = down
            action = PointerAction.Down if down else PointerAction.Up
            x, y = self._finger_pos(event, screen_size)
            self._pending.append(PointerEvent(action, x, y, now_ms, touch=True))

        # don't leave a press dangling when the window loses focus
        elif event.type == pygame.WINDOWFOCUSLOST:
            self._finger_down = False

    def drain(self) -> List[PointerEvent]:
        """Return and forget the events gathered since the last call."""
        out, self._pending = self._pending, []
        return out
