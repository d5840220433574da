from __future__ import annotations
import sys
import time
import pygame

from signalhunt.api.config import EngineConfig
from signalhunt.api.frame_data import FrameData
from signalhunt.app.context import Context
from signalhunt.app.loader import load_game
from signalhunt.input.pointer_input import PointerInput

BACKGROUND_FILL = (0, 0, 0)


def run_game(game_id: str, cfg: EngineConfig) -> int:
    """Open the window, run `game_id` until it is closed. Returns a process exit code."""
    # load game first so a broken plugin fails before a window appears
    manifest, game = load_game(game_id)

    pygame.init()
    pygame.display.set_caption(f"{manifest.get('name', game_id)}")
    try:
        screen = pygame.display.set_mode(cfg.screen_size, pygame.RESIZABLE)
    except pygame.error as e:
        print(f"ERROR: could not open a display surface: {e}", file=sys.stderr)
        pygame.quit()
        return 1
    clock = pygame.time.Clock()

    screen_size = screen.get_size()
    ctx = Context(
        screen=screen,
        clock=clock,
        cfg=cfg,
        screen_size=screen_size,
    )
    pointer = PointerInput(cfg)

    game.on_load(ctx, manifest)

    running = True
    try:
        while running:
            dt = clock.tick(cfg.fps)
            now_ms = pygame.time.get_ticks()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                    continue
                if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                    continue
                if event.type == pygame.VIDEORESIZE:
                    ctx.screen = pygame.display.get_surface()
                    ctx.screen_size = ctx.screen.get_size()
                    game.on_resize(ctx.screen_size)
                    continue
                pointer.handle_pygame_event(event, ctx.screen_size, now_ms)
                game.on_event(event)

            frame_data = FrameData(timestamp=time.time(),
                                   pointer_events=pointer.drain())

            ctx.screen.fill(BACKGROUND_FILL)
            game.on_update(dt, frame_data)
            game.on_draw(ctx.screen)
            pygame.display.flip()

    finally:
        game.on_unload()
        pygame.quit()
    return 0
