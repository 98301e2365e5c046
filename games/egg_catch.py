from __future__ import annotations
import pygame
from . import BaseGame, back_to_menu, register_game
from systems.collision import object_rect, paddle_rect
from systems.scoring import encouragement_message, format_score, tier_badge
from systems.simulation import GameState

BACKGROUND = (255, 246, 225)
PRIMARY = (249, 178, 15)
ACCENT = (139, 94, 60)
TEXT_PRIMARY = (44, 24, 16)
TEXT_SECONDARY = (107, 68, 35)
MISS_RED = (214, 60, 48)
EGG_WHITE = (252, 250, 242)
EGG_SHADE = (222, 214, 196)

LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)
RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)
START_KEYS = (pygame.K_SPACE, pygame.K_RETURN)

@register_game("egg_catch")
class EggCatchGame(BaseGame):
    def __init__(self, screen: pygame.Surface, cfg, sounds, progress=None, rng=None):
        super().__init__(screen, cfg, sounds, progress, rng)
        self.game_cfg = cfg.game
        # HUD
        self.hud_font = pygame.font.SysFont("arial", 24)
        self.title_font = pygame.font.SysFont("arial", 30, bold=True)
        self.big_font = pygame.font.SysFont("arial", 48, bold=True)
        self.body_font = pygame.font.SysFont("arial", 20)
        self.hud_height = 70

    @property
    def origin(self) -> tuple[int, int]:
        # Playfield is centred horizontally below the HUD
        return (int(self.cfg.width // 2 - self.game_cfg.playfield_width // 2), self.hud_height)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        state = self.engine.state
        if state is GameState.READY:
            if event.key in START_KEYS:
                self.engine.start()
            elif event.key in (pygame.K_ESCAPE, pygame.K_m):
                back_to_menu()
        elif state is GameState.PLAYING:
            if event.key in LEFT_KEYS:
                self.engine.move_left()
            elif event.key in RIGHT_KEYS:
                self.engine.move_right()
            elif event.key == pygame.K_ESCAPE:
                self.engine.quit()
        else:
            if event.key in (pygame.K_r, *START_KEYS):
                self.engine.play_again()
            elif event.key in (pygame.K_ESCAPE, pygame.K_m):
                self.engine.reset()
                back_to_menu()

    def draw(self) -> None:
        self.screen.fill(BACKGROUND)
        self.draw_playfield()
        self.draw_eggs()
        self.draw_pan()
        self.draw_hud()
        if self.snapshot.state is GameState.READY:
            self.draw_ready_prompt()
        elif self.snapshot.state is GameState.GAME_OVER:
            self.draw_game_over_overlay()

    def draw_playfield(self) -> None:
        ox, oy = self.origin
        rect = pygame.Rect(ox, oy, int(self.game_cfg.playfield_width), int(self.game_cfg.playfield_height))
        pygame.draw.rect(self.screen, (250, 238, 208), rect, border_radius=12)
        pygame.draw.rect(self.screen, ACCENT, rect, width=2, border_radius=12)
        # Dashed line where eggs are decided
        line_y = oy + int(self.game_cfg.resolution_line)
        for x in range(rect.x + 6, rect.right - 6, 16):
            pygame.draw.line(self.screen, (230, 210, 170), (x, line_y), (x + 8, line_y), 1)

    def draw_eggs(self) -> None:
        size = self.game_cfg.object_visual_size
        for _, x, y in self.snapshot.objects:
            body = object_rect(x, y, size, self.origin)
            body.width = int(size * 0.78)
            body.centerx = int(self.origin[0] + x)
            pygame.draw.ellipse(self.screen, EGG_SHADE, body.move(2, 2))
            pygame.draw.ellipse(self.screen, EGG_WHITE, body)
            pygame.draw.ellipse(self.screen, EGG_SHADE, body, width=1)

    def draw_pan(self) -> None:
        cfg = self.game_cfg
        center_x = cfg.playfield_width / 2 + self.snapshot.paddle_offset
        pan = paddle_rect(center_x, cfg.playfield_height - 8, cfg.paddle_width, 18, self.origin)
        handle = pygame.Rect(0, 0, int(cfg.paddle_width * 0.45), 8)
        handle.midleft = (pan.right - 4, pan.centery)
        pygame.draw.rect(self.screen, ACCENT, handle, border_radius=4)
        pygame.draw.ellipse(self.screen, (60, 60, 66), pan)
        pygame.draw.ellipse(self.screen, (95, 95, 104), pan.inflate(-10, -8))

    def draw_hud(self) -> None:
        title = self.title_font.render("Catch the Eggs!", True, TEXT_PRIMARY)
        self.screen.blit(title, (20, 20))
        score = self.hud_font.render(f"★ {self.snapshot.score}", True, PRIMARY)
        missed = self.hud_font.render(
            f"✕ {self.snapshot.missed}/{self.snapshot.max_missed}", True, MISS_RED
        )
        right = self.cfg.width - 20
        self.screen.blit(score, (right - score.get_width(), 10))
        self.screen.blit(missed, (right - missed.get_width(), 10 + score.get_height()))

    def _blit_centered(self, surf: pygame.Surface, y: int) -> int:
        self.screen.blit(surf, (self.cfg.width // 2 - surf.get_width() // 2, y))
        return y + surf.get_height()

    def draw_ready_prompt(self) -> None:
        y = self.cfg.height // 2 - 60
        y = self._blit_centered(self.title_font.render("Ready to catch some eggs?", True, TEXT_PRIMARY), y) + 12
        lines = [
            "Use Left/Right to move your pan.",
            f"Don't let {self.game_cfg.max_missed} eggs fall!",
            "Press Space to start",
        ]
        for line in lines:
            y = self._blit_centered(self.body_font.render(line, True, TEXT_SECONDARY), y) + 6

    def draw_game_over_overlay(self) -> None:
        overlay = pygame.Surface(self.cfg.screen_size, pygame.SRCALPHA)
        overlay.fill((255, 246, 225, 220))
        self.screen.blit(overlay, (0, 0))

        outcome = self.snapshot.outcome
        score = outcome.score if outcome else self.snapshot.score
        y = self.cfg.height // 2 - 170
        if outcome:
            y = self._blit_centered(self.big_font.render(tier_badge(outcome.tier), True, PRIMARY), y) + 8
        y = self._blit_centered(self.big_font.render("Game Over!", True, TEXT_PRIMARY), y) + 16
        y = self._blit_centered(self.body_font.render("Focus Points Earned", True, TEXT_SECONDARY), y) + 4
        y = self._blit_centered(self.big_font.render(format_score(score), True, PRIMARY), y) + 16
        y = self._blit_centered(self.body_font.render(encouragement_message(score), True, TEXT_SECONDARY), y) + 30
        self._blit_centered(self.body_font.render("R: Play Again    M: Back to Menu", True, ACCENT), y)
