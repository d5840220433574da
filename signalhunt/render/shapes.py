from __future__ import annotations
import math
from functools import lru_cache
from typing import Tuple

import pygame

Color = Tuple[int, int, int]


@lru_cache(maxsize=64)
def get_font(size: int, mono: bool = False) -> pygame.font.Font:
    if mono:
        return pygame.font.SysFont("monospace", size)
    return pygame.font.SysFont(None, size)


def draw_text(surface: pygame.Surface, text: str, pos: Tuple[int, int], color=(230, 230, 230), size=24,
              alpha: float = 1.0, center: bool = False, mono: bool = False) -> pygame.Rect:
    img = get_font(size, mono).render(text, True, color)
    if alpha < 1.0:
        img.set_alpha(int(255 * max(0.0, alpha)))
    rect = img.get_rect(center=pos) if center else img.get_rect(topleft=pos)
    surface.blit(img, rect)
    return rect


@lru_cache(maxsize=512)
def _glyph(ch: str, size: int, color: Color) -> pygame.Surface:
    return get_font(size, mono=True).render(ch, True, color)


def draw_glyph(surface: pygame.Surface, ch: str, center: Tuple[float, float], size: int, color: Color,
               angle: float = 0.0, alpha: float = 1.0, glow: Color | None = None) -> None:
    """Draw one character rotated (radians) about its own centre, with an optional soft halo."""
    a = int(255 * max(0.0, min(1.0, alpha)))
    if a <= 0:
        return
    deg = -math.degrees(angle)
    if glow is not None:
        halo = pygame.transform.rotozoom(_glyph(ch, size, glow), deg, 1.35)
        halo.set_alpha(a // 3)
        surface.blit(halo, halo.get_rect(center=(int(center[0]), int(center[1]))))
    img = pygame.transform.rotate(_glyph(ch, size, color), deg)
    img.set_alpha(a)
    surface.blit(img, img.get_rect(center=(int(center[0]), int(center[1]))))


def draw_button(surface: pygame.Surface, rect: pygame.Rect, text: str, color=(0, 255, 255),
                active: bool = False, size: int = 26) -> None:
    if active:
        fill = pygame.Surface(rect.size, pygame.SRCALPHA)
        fill.fill((*color, 60))
        surface.blit(fill, rect.topleft)
    pygame.draw.rect(surface, color, rect, width=2, border_radius=8)
    draw_text(surface, text, rect.center, color, size=size, center=True, mono=True)
