from __future__ import annotations
import logging
import sys
import pygame
from async_helper import run_async, stop_async_loop
from database import DatabaseManager
from games import GAME_REGISTRY
from logging_config import setup_logging
from progress import make_store
from settings import Settings, ensure_directories, init_pygame_window
from systems.sound_manager import SoundManager

logger = logging.getLogger("catchgame.app")

MENU_OPTIONS = ["egg_catch", "quit"]
MENU_LABELS = {"egg_catch": "Catch The Eggs", "quit": "Quit"}

class ArcadeApp:
    def __init__(self):
        ensure_directories()
        self.cfg = Settings()
        setup_logging(self.cfg.log_level)
        pygame.init()
        try:
            pygame.mixer.init()
        except pygame.error as e:
            logger.warning("audio disabled: %s", e)
        self.screen = init_pygame_window(self.cfg)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("arial", 28)
        self.sounds = SoundManager()
        if pygame.mixer.get_init():
            self.sounds.load_defaults()
        self.state = "menu"
        self.menu_index = 0
        self.active_game = None
        self.menu_button_rects: list[tuple[str, pygame.Rect]] = []
        self.db: DatabaseManager | None = None
        self._init_database()
        self.progress = make_store(self.db)
        logger.info("progress store: %s", type(self.progress).__name__)

    def _init_database(self) -> None:
        """Connect on the background loop that later serves the remote store."""
        if not self.cfg.db.is_configured:
            return
        self.db = DatabaseManager(self.cfg.db)
        run_async(self.db.connect())

    def cleanup(self):
        """Clean up resources before exit."""
        if self.active_game:
            self.active_game.stop()
        if self.db:
            run_async(self.db.disconnect())
            stop_async_loop()
        pygame.quit()

    def run(self) -> None:
        try:
            while True:
                dt = self.clock.tick(self.cfg.fps) / 1000.0
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        return
                    self.handle_event(event)
                self.update(dt)
                self.draw()
                pygame.display.flip()
        finally:
            self.cleanup()

    def handle_event(self, event: pygame.event.Event) -> None:
        if self.state == "menu":
            self.handle_menu_event(event)
        elif self.state == "game" and self.active_game:
            # From games: request to go back to menu
            if event.type == pygame.USEREVENT and getattr(event, "action", None) == "back_to_menu":
                self.active_game.stop()
                self.active_game = None
                self.state = "menu"
                return
            self.active_game.handle_event(event)

    def handle_menu_event(self, event: pygame.event.Event) -> None:
        if not self.menu_button_rects:
            self.build_menu_buttons()

        if event.type == pygame.MOUSEMOTION:
            for idx, (option, rect) in enumerate(self.menu_button_rects):
                if rect.collidepoint(*event.pos):
                    self.menu_index = idx
                    break
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            for option, rect in self.menu_button_rects:
                if rect.collidepoint(*event.pos):
                    self.choose(option)
                    break
        elif event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_UP, pygame.K_w):
                self.menu_index = (self.menu_index - 1) % len(MENU_OPTIONS)
            elif event.key in (pygame.K_DOWN, pygame.K_s):
                self.menu_index = (self.menu_index + 1) % len(MENU_OPTIONS)
            elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
                self.choose(MENU_OPTIONS[self.menu_index])

    def choose(self, option: str) -> None:
        if option == "quit":
            pygame.event.post(pygame.event.Event(pygame.QUIT))
        else:
            self.start_game(option)

    def start_game(self, key: str) -> None:
        GameClass = GAME_REGISTRY[key]
        self.active_game = GameClass(self.screen, self.cfg, self.sounds, self.progress)
        self.active_game.start()
        self.state = "game"

    def update(self, dt: float) -> None:
        if self.state == "game" and self.active_game:
            self.active_game.update(dt)

    def draw(self) -> None:
        if self.state == "menu":
            self.draw_menu()
        elif self.state == "game" and self.active_game:
            self.active_game.draw()

    def draw_menu(self) -> None:
        self.screen.fill(self.cfg.bg_color)
        title = self.font.render(self.cfg.title, True, (44, 24, 16))
        self.screen.blit(title, (self.cfg.width // 2 - title.get_width() // 2, 100))

        # Rebuild each frame to adapt to window size/font metrics
        self.build_menu_buttons()
        for idx, (option, rect) in enumerate(self.menu_button_rects):
            text_surf = self.font.render(MENU_LABELS[option], True, (255, 255, 255))
            selected = idx == self.menu_index
            fill_color = (249, 178, 15) if selected else (200, 150, 40)
            border_color = (139, 94, 60)
            pygame.draw.rect(self.screen, fill_color, rect, border_radius=16)
            pygame.draw.rect(self.screen, border_color, rect, width=2, border_radius=16)
            text_x = rect.x + (rect.width - text_surf.get_width()) // 2
            text_y = rect.y + (rect.height - text_surf.get_height()) // 2
            self.screen.blit(text_surf, (text_x, text_y))

    def build_menu_buttons(self) -> None:
        # Compute and cache menu button rects for mouse hit-testing
        self.menu_button_rects.clear()
        base_y = 240
        spacing = 72
        padding_y = 14
        button_width = 300
        for idx, option in enumerate(MENU_OPTIONS):
            th = self.font.get_height()
            btn_h = th + padding_y * 2
            x = self.cfg.width // 2 - button_width // 2
            y = base_y + idx * spacing
            self.menu_button_rects.append((option, pygame.Rect(x, y, button_width, btn_h)))

def main() -> None:
    ArcadeApp().run()

if __name__ == "__main__":
    main()
    sys.exit(0)
