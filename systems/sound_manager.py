from __future__ import annotations
import logging
from typing import Dict
import pygame
from settings import SOUND_DIR
from systems.feedback import FeedbackEvent, FeedbackKind

logger = logging.getLogger("catchgame.sound")

EVENT_SOUNDS = {
    FeedbackKind.CATCH: "egg_catch",
    FeedbackKind.MISS: "egg_miss",
    FeedbackKind.START: "game_start",
}
TIER_SOUNDS = {"high": "win", "medium": "win", "low": "game_over"}

class SoundManager:
    """Plays game feedback through pygame.mixer.

    Missing files are skipped and mixer errors are logged, so ``notify``
    never raises into the game loop.
    """

    def __init__(self):
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self.music_loaded = False

    def load_sound(self, key: str, filename: str) -> None:
        path = SOUND_DIR / filename
        if not path.exists():
            return
        try:
            self.sounds[key] = pygame.mixer.Sound(path.as_posix())
        except pygame.error as e:
            logger.warning("could not load sound %s: %s", filename, e)

    def load_defaults(self) -> None:
        for key in (*EVENT_SOUNDS.values(), *TIER_SOUNDS.values()):
            self.load_sound(key, f"{key}.wav")
        self.load_music("bg_music.mp3")

    def play(self, key: str) -> None:
        sound = self.sounds.get(key)
        if sound:
            sound.play()

    def load_music(self, filename: str) -> None:
        path = SOUND_DIR / filename
        if not path.exists():
            return
        try:
            pygame.mixer.music.load(path.as_posix())
            self.music_loaded = True
        except pygame.error as e:
            logger.warning("could not load music %s: %s", filename, e)

    def play_music(self, loops: int = -1) -> None:
        if self.music_loaded:
            pygame.mixer.music.play(loops=loops)

    def stop_music(self) -> None:
        if self.music_loaded:
            pygame.mixer.music.stop()

    def notify(self, event: FeedbackEvent) -> None:
        try:
            if event.kind is FeedbackKind.END:
                self.stop_music()
                self.play(TIER_SOUNDS.get(event.tier, "game_over"))
                return
            self.play(EVENT_SOUNDS[event.kind])
            if event.kind is FeedbackKind.START:
                self.play_music()
        except pygame.error as e:
            logger.warning("feedback for %s failed: %s", event.kind.value, e)
