from __future__ import annotations
from typing import Callable, Dict, Optional, Type
import pygame
from settings import Settings
from systems.engine import CatchEngine, GameSnapshot
from systems.sound_manager import SoundManager

class BaseGame:
    """Pygame front end around one engine instance.

    Subclasses turn key presses into engine calls and draw ``self.snapshot``,
    which the engine refreshes once per frame.
    """
    name: str = "base"

    def __init__(self, screen: pygame.Surface, cfg: Settings, sounds: SoundManager,
                 progress=None, rng=None):
        self.screen = screen
        self.cfg = cfg
        self.sounds = sounds
        self.progress = progress
        self.active = False
        self.engine = CatchEngine(cfg.game, feedback=sounds, progress=progress, rng=rng)
        self.snapshot: GameSnapshot = self.engine.snapshot()
        self._unsubscribe: Optional[Callable[[], None]] = self.engine.subscribe(self._on_snapshot)

    def _on_snapshot(self, snapshot: GameSnapshot) -> None:
        self.snapshot = snapshot

    def start(self) -> None:
        self.active = True
        self.reset()

    def stop(self) -> None:
        # Leaving mid-game discards the session without a report
        self.active = False
        self.engine.reset()
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

    def reset(self) -> None:
        self.engine.reset()
        self.snapshot = self.engine.snapshot()

    def handle_event(self, event: pygame.event.Event) -> None:
        ...

    def update(self, dt: float) -> None:
        # The app loop measures seconds, the engine clock runs in milliseconds
        self.engine.update(dt * 1000.0)

    def draw(self) -> None:
        ...

GAME_REGISTRY: Dict[str, Type[BaseGame]] = {}

def register_game(key: str) -> Callable[[Type[BaseGame]], Type[BaseGame]]:
    def wrapper(cls: Type[BaseGame]) -> Type[BaseGame]:
        GAME_REGISTRY[key] = cls
        cls.name = key
        return cls
    return wrapper

def back_to_menu() -> None:
    """Ask the app loop to leave the running game."""
    pygame.event.post(pygame.event.Event(pygame.USEREVENT, {"action": "back_to_menu"}))

# Auto-import game modules to populate the registry on package import.
from . import egg_catch  # noqa: F401
