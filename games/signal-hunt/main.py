from __future__ import annotations
import random
import pygame
from typing import Dict, List, Optional, Tuple

from signalhunt.api import Game, FrameData, PointerEvent, PointerAction
from signalhunt.app.context import Context
from signalhunt.render.shapes import draw_button, draw_glyph, draw_text, get_font
from signalhunt.sim import Phase, RoundController, RoundSettings
from signalhunt.sim.feedback import TextKind
from signalhunt.sim.highscores import format_entry
from signalhunt.storage import JsonFileStore

from .const import *

DIFFICULTY_KEYS = {pygame.K_1: "easy", pygame.K_2: "normal", pygame.K_3: "hard", pygame.K_4: "chaos"}


def _row(center_x: int, y: int, count: int, w: int = BUTTON_W, h: int = BUTTON_H) -> List[pygame.Rect]:
    total = count * w + (count - 1) * BUTTON_GAP
    left = center_x - total // 2
    return [pygame.Rect(left + i * (w + BUTTON_GAP), y, w, h) for i in range(count)]


class SignalHunt(Game):
    def on_load(self, ctx: Context, manifest):
        self.ctx = ctx
        self.manifest = manifest

        settings = RoundSettings.from_options(manifest.get("options", {}))
        if ctx.cfg.difficulty:
            settings.difficulty = ctx.cfg.difficulty.lower()

        self.store = JsonFileStore(ctx.cfg.storage_path)
        self.round = RoundController(self.store, ctx.screen_size, settings, touch=ctx.cfg.touch)
        self.difficulties: List[str] = list(settings.profiles)

        self.entering_initials = False
        self.save_offered = True
        self.swallow_up = False

        self._rain_cache: Dict[Tuple[str, Tuple[int, int, int]], pygame.Surface] = {}
        self._rain: Optional[pygame.Surface] = None
        self._fade: Optional[pygame.Surface] = None
        self._layout()

    # ------------- layout -------------
    def _layout(self):
        w, h = self.ctx.screen_size
        cx = w // 2
        n = len(self.difficulties)
        self.difficulty_rects = dict(zip(self.difficulties, _row(cx, h // 2 - BUTTON_H, n)))
        self.start_rect = _row(cx, h // 2 + BUTTON_H, 1)[0]
        self.pause_rect = pygame.Rect(w - PAUSE_BTN_W - 16, 16, PAUSE_BTN_W, PAUSE_BTN_H)
        self.resume_rect, self.quit_rect = _row(cx, h // 2, 2)
        self.replay_rect, self.return_rect, self.save_rect = _row(cx, int(h * 0.36), 3)

    def _ensure_surfaces(self, size: Tuple[int, int]):
        if self._rain is None or self._rain.get_size() != size:
            old = self._rain
            self._rain = pygame.Surface(size)
            self._rain.fill((0, 0, 0))
            if old is not None:
                self._rain.blit(old, (0, 0))
            self._fade = pygame.Surface(size, pygame.SRCALPHA)

    # ------------- input -------------
    def _handle_pointer(self, e: PointerEvent):
        phase = self.round.phase
        down = e.action == PointerAction.Down
        if down:
            self.swallow_up = False
        elif self.swallow_up:
            # release of the press that started or resumed the round
            self.swallow_up = False
            return

        if phase == Phase.Idle:
            if not down:
                return
            for name, rect in self.difficulty_rects.items():
                if rect.collidepoint(e.x, e.y):
                    self.round.select_difficulty(name)
                    return
            if self.start_rect.collidepoint(e.x, e.y):
                self._start()
                self.swallow_up = True

        elif phase == Phase.Active:
            if self.pause_rect.collidepoint(e.x, e.y):
                if down:
                    self.round.pause()
                return
            if down:
                self.round.pointer_down(e.x, e.y, e.t_ms)
            else:
                self.round.pointer_up(e.x, e.y, e.t_ms)

        elif phase == Phase.Paused:
            if not down:
                return
            if self.resume_rect.collidepoint(e.x, e.y) or self.pause_rect.collidepoint(e.x, e.y):
                self.swallow_up = self.round.resume()
            elif self.quit_rect.collidepoint(e.x, e.y):
                self.round.quit_to_menu()

        elif phase == Phase.Ended:
            if not down:
                return
            if self.replay_rect.collidepoint(e.x, e.y):
                self._start()
                self.swallow_up = True
            elif self.return_rect.collidepoint(e.x, e.y):
                self._close_prompt()
                self.round.quit_to_menu()
            elif self.save_offered and self.save_rect.collidepoint(e.x, e.y):
                self._open_prompt()

    def _start(self):
        self._close_prompt()
        self.save_offered = True
        self.round.start()

    def _open_prompt(self):
        self.save_offered = False
        self.entering_initials = True
        pygame.key.start_text_input()

    def _close_prompt(self):
        if self.entering_initials:
            pygame.key.stop_text_input()
        self.entering_initials = False

    def _cycle_difficulty(self, step: int):
        i = self.difficulties.index(self.round.state.difficulty)
        self.round.select_difficulty(self.difficulties[(i + step) % len(self.difficulties)])

    def on_event(self, event: pygame.event.Event) -> None:
        phase = self.round.phase

        if self.entering_initials and phase == Phase.Ended:
            if event.type == pygame.TEXTINPUT:
                self.round.prompt.type(event.text)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_BACKSPACE:
                    self.round.prompt.backspace()
                elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                    if self.round.submit_initials():
                        self._close_prompt()
            return

        if event.type != pygame.KEYDOWN:
            return

        if phase == Phase.Idle:
            if event.key in DIFFICULTY_KEYS and DIFFICULTY_KEYS[event.key] in self.difficulties:
                self.round.select_difficulty(DIFFICULTY_KEYS[event.key])
            elif event.key == pygame.K_LEFT:
                self._cycle_difficulty(-1)
            elif event.key == pygame.K_RIGHT:
                self._cycle_difficulty(1)
            elif event.key in (pygame.K_SPACE, pygame.K_RETURN):
                self._start()
        elif phase in (Phase.Active, Phase.Paused):
            if event.key == pygame.K_p:
                self.round.toggle_pause()
            elif event.key == pygame.K_q and phase == Phase.Paused:
                self.round.quit_to_menu()
        elif phase == Phase.Ended:
            if event.key in (pygame.K_SPACE, pygame.K_RETURN):
                self._start()
            elif event.key == pygame.K_m:
                self.round.quit_to_menu()
            elif event.key == pygame.K_s and self.save_offered:
                self._open_prompt()

    def on_resize(self, screen_size: Tuple[int, int]) -> None:
        self.round.resize(*screen_size)
        self._layout()

    # ------------- loop hooks -------------
    def on_update(self, dt_ms: float, frame: FrameData) -> None:
        for e in frame.pointer_events:
            self._handle_pointer(e)
        self.round.advance(dt_ms)

    def on_draw(self, surface: pygame.Surface) -> None:
        size = surface.get_size()
        self._ensure_surfaces(size)
        self._draw_rain()

        offset = (0, 0)
        if self.round.feedback.shaking:
            offset = (random.randint(-SHAKE_PX, SHAKE_PX), random.randint(-SHAKE_PX, SHAKE_PX))
        surface.blit(self._rain, offset)

        self._draw_target(surface, offset)
        self._draw_particles(surface)
        self._draw_feedback(surface)

        phase = self.round.phase
        if phase == Phase.Idle:
            self._draw_start_screen(surface)
        elif phase == Phase.Active:
            self._draw_hud(surface)
            draw_button(surface, self.pause_rect, "PAUSE", size=22)
        elif phase == Phase.Paused:
            self._draw_hud(surface)
            self._draw_pause_overlay(surface)
        elif phase == Phase.Ended:
            self._draw_end_screen(surface)

    # ------------- drawing -------------
    def _rain_glyph(self, ch: str, color: Tuple[int, int, int]) -> pygame.Surface:
        key = (ch, color)
        img = self._rain_cache.get(key)
        if img is None:
            img = get_font(self.round.background.cell_size, mono=True).render(ch, True, color)
            img.set_alpha(int(255 * RAIN_ALPHA))
            self._rain_cache[key] = img
        return img

    def _draw_rain(self):
        strikes = self.round.strikes
        if strikes is None:
            return  # paused: keep the last frame
        bg = self.round.background
        self._fade.fill((0, 0, 0, int(round(255 * bg.fade_alpha))))
        self._rain.blit(self._fade, (0, 0))

        color = RAIN_COLOR_CHAOS if bg.chaos else RAIN_COLOR
        for i, ch in enumerate(strikes.glyphs):
            img = self._rain_glyph(ch, color)
            y = int(strikes.y[i])
            self._rain.blit(img, (int(strikes.x[i]), y))
            if strikes.jitter_x is not None:
                self._rain.blit(img, (int(strikes.jitter_x[i]), y))

    def _draw_target(self, surface: pygame.Surface, offset: Tuple[int, int]):
        t = self.round.target
        if not t.visible or self.round.phase not in (Phase.Active, Phase.Paused):
            return
        cx, cy = t.center
        center = (int(cx) + offset[0], int(cy) + offset[1])
        r = max(2, t.size // 2)
        pygame.draw.circle(surface, TARGET_COLOR, center, r, width=3)
        pygame.draw.circle(surface, TARGET_COLOR, center, max(1, r // 4))

    def _draw_particles(self, surface: pygame.Surface):
        for p in self.round.particles.live():
            draw_glyph(surface, p.glyph, (p.x, p.y), int(p.size), PARTICLE_COLOR,
                       angle=p.rotation, alpha=p.alpha, glow=PARTICLE_GLOW)

    def _draw_feedback(self, surface: pygame.Surface):
        colors = {TextKind.Hit: HIT_TEXT_COLOR, TextKind.Miss: MISS_TEXT_COLOR, TextKind.Combo: COMBO_TEXT_COLOR}
        for t in self.round.feedback.texts:
            size = 40 if t.kind == TextKind.Combo else 24
            draw_text(surface, t.text, (int(t.x), int(t.y + t.offset_y)), colors[t.kind],
                      size=size, alpha=t.alpha, center=True, mono=True)

    def _draw_hud(self, surface: pygame.Surface):
        s = self.round.state
        draw_text(surface, f"Score: {s.score}", (20, 16), HUD_COLOR, size=30, mono=True)
        draw_text(surface, f"{s.time_left}", (self.ctx.screen_size[0] // 2, 34), HUD_COLOR,
                  size=40, center=True, mono=True)
        if s.combo >= 2:
            draw_text(surface, f"Combo x{s.combo}", (20, 50), COMBO_TEXT_COLOR, size=22, mono=True)
        if self.ctx.cfg.debug:
            fps = self.ctx.clock.get_fps()
            draw_text(surface, f"{fps:.0f} fps | {self.round.particles.count} particles",
                      (20, self.ctx.screen_size[1] - 28), DEBUG_COLOR, size=20)

    def _dim(self, surface: pygame.Surface):
        shade = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        shade.fill((0, 0, 0, OVERLAY_ALPHA))
        surface.blit(shade, (0, 0))

    def _draw_start_screen(self, surface: pygame.Surface):
        w, h = self.ctx.screen_size
        title = self.manifest.get("name", "Signal Hunt").upper()
        draw_text(surface, title, (w // 2, h // 2 - 3 * BUTTON_H), TITLE_COLOR, size=56, center=True, mono=True)
        draw_text(surface, "Pick a difficulty (1-4), then start", (w // 2, h // 2 - 2 * BUTTON_H + 10),
                  (200, 200, 200), size=22, center=True)
        current = self.round.state.difficulty
        for name, rect in self.difficulty_rects.items():
            color = RAIN_COLOR_CHAOS if self.round.settings.profiles[name].chaos else HUD_COLOR
            draw_button(surface, rect, name.upper(), color=color, active=(name == current))
        draw_button(surface, self.start_rect, "START", color=TITLE_COLOR)

    def _draw_pause_overlay(self, surface: pygame.Surface):
        w, h = self.ctx.screen_size
        self._dim(surface)
        draw_text(surface, "PAUSED", (w // 2, h // 2 - 60), HUD_COLOR, size=56, center=True, mono=True)
        draw_button(surface, self.resume_rect, "RESUME")
        draw_button(surface, self.quit_rect, "QUIT")

    def _draw_end_screen(self, surface: pygame.Surface):
        w, h = self.ctx.screen_size
        stats = self.round.stats
        self._dim(surface)
        draw_text(surface, "GAME OVER!", (w // 2, int(h * 0.12)), GAME_OVER_COLOR, size=60, center=True, mono=True)
        lines = [f"Score: {stats.score}", f"Misses: {stats.misses}", f"Max Combo: {stats.max_combo}"]
        for i, line in enumerate(lines):
            draw_text(surface, line, (w // 2, int(h * 0.2) + i * 26), HUD_COLOR, size=26, center=True, mono=True)

        draw_button(surface, self.replay_rect, "REPLAY")
        draw_button(surface, self.return_rect, "RETURN")
        if self.save_offered:
            draw_button(surface, self.save_rect, "SAVE SCORE", size=22)

        y = self.replay_rect.bottom + 24
        if self.entering_initials:
            y = self._draw_initials_prompt(surface, y)
        self._draw_high_scores(surface, y)

    def _draw_initials_prompt(self, surface: pygame.Surface, y: int) -> int:
        w, _ = self.ctx.screen_size
        prompt = self.round.prompt
        draw_text(surface, "Enter your initials:", (w // 2, y), HUD_COLOR, size=24, center=True, mono=True)
        box = pygame.Rect(0, 0, 120, 48)
        box.center = (w // 2, y + 40)
        pygame.draw.rect(surface, HUD_COLOR, box, width=2, border_radius=8)
        draw_text(surface, prompt.text, box.center, HUD_COLOR, size=34, center=True, mono=True)
        if prompt.warning:
            draw_text(surface, prompt.warning, (w // 2, box.bottom + 20), WARNING_COLOR, size=24, center=True, mono=True)
        return box.bottom + 48

    def _draw_high_scores(self, surface: pygame.Surface, y: int):
        w, _ = self.ctx.screen_size
        draw_text(surface, "HIGH SCORES", (w // 2, y), HUD_COLOR, size=26, center=True, mono=True)
        entries = self.round.high_scores()[:SCORES_SHOWN]
        if not entries:
            draw_text(surface, "No scores yet.", (w // 2, y + 28), HUD_COLOR, size=22, center=True, mono=True)
            return
        for i, entry in enumerate(entries):
            draw_text(surface, format_entry(i + 1, entry), (w // 2, y + 28 + i * 22), HUD_COLOR,
                      size=22, center=True, mono=True)

    def on_unload(self) -> None:
        self._close_prompt()


def get_game():
    return SignalHunt()
