from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict
import os
from dotenv import load_dotenv
import pygame

from systems.errors import InvalidConfiguration
from systems.rules import available_profiles, get_rules

BASE_DIR = Path(__file__).resolve().parent
ASSET_DIR = BASE_DIR / "assets"
IMAGE_DIR = ASSET_DIR / "images"
SOUND_DIR = ASSET_DIR / "sounds"
DATA_DIR = BASE_DIR / "data"

# Load environment variables from .env file
load_dotenv(BASE_DIR / ".env")

@dataclass
class DatabaseConfig:
    """Database connection configuration for Neon (or any Postgres)."""
    host: str = os.getenv("DB_HOST", "")
    port: int = int(os.getenv("DB_PORT", "5432"))
    database: str = os.getenv("DB_NAME", "")
    user: str = os.getenv("DB_USER", "")
    password: str = os.getenv("DB_PASSWORD", "")
    # For Neon, you can also use a full connection string
    connection_string: str = os.getenv("DATABASE_URL", "")

    @property
    def is_configured(self) -> bool:
        """Check if database is configured (either via connection string or individual params)."""
        return bool(self.connection_string or (self.host and self.database and self.user))

@dataclass(frozen=True)
class GameConfig:
    """Construction-time constants of one catch game engine.

    Distances are playfield units (pixels on screen), speeds are units per
    simulation tick. ``score_tiers`` maps a minimum score to a feedback tier.
    """
    playfield_width: float = 390
    playfield_height: float = 500
    paddle_width: float = 80
    object_visual_size: float = 30
    max_missed: int = 3
    simulation_interval_ms: int = 16
    spawn_interval_ms: int = 1500
    min_speed: float = 2.0
    max_speed: float = 4.0
    move_step: float = 30
    score_tiers: Dict[int, str] = field(default_factory=lambda: {0: "low", 6: "medium", 11: "high"})
    margin_px: float = 50
    resolution_band_px: float = 50

    def __post_init__(self):
        self.validate()

    @classmethod
    def from_profile(cls, profile: str = "phone", **overrides) -> "GameConfig":
        if profile not in available_profiles():
            raise InvalidConfiguration(f"unknown layout profile {profile!r}")
        data = get_rules(profile).data
        data["score_tiers"] = dict(data["score_tiers"])
        data.update(overrides)
        return cls(**data)

    @property
    def resolution_line(self) -> float:
        return self.playfield_height - self.resolution_band_px

    def validate(self) -> None:
        positive = {
            "playfield_width": self.playfield_width,
            "playfield_height": self.playfield_height,
            "paddle_width": self.paddle_width,
            "object_visual_size": self.object_visual_size,
            "max_missed": self.max_missed,
            "simulation_interval_ms": self.simulation_interval_ms,
            "spawn_interval_ms": self.spawn_interval_ms,
            "min_speed": self.min_speed,
            "max_speed": self.max_speed,
            "move_step": self.move_step,
        }
        for name, value in positive.items():
            if value <= 0:
                raise InvalidConfiguration(f"{name} must be positive, got {value!r}")
        if self.min_speed > self.max_speed:
            raise InvalidConfiguration(
                f"min_speed ({self.min_speed}) is greater than max_speed ({self.max_speed})"
            )
        if self.margin_px < 0 or 2 * self.margin_px > self.playfield_width:
            raise InvalidConfiguration(
                f"margin_px {self.margin_px!r} does not fit a playfield {self.playfield_width} wide"
            )
        if not 0 <= self.resolution_band_px < self.playfield_height:
            raise InvalidConfiguration(
                f"resolution_band_px {self.resolution_band_px!r} must lie inside the playfield"
            )
        if not self.score_tiers:
            raise InvalidConfiguration("score_tiers must not be empty")
        if any(threshold < 0 for threshold in self.score_tiers):
            raise InvalidConfiguration("score_tiers thresholds must be non-negative")
        if 0 not in self.score_tiers:
            raise InvalidConfiguration("score_tiers needs a tier for a score of 0")

@dataclass
class Settings:
    width: int = 480
    height: int = 720
    fullscreen: bool = False
    fps: int = 60
    title: str = "Catch The Eggs"
    bg_color: tuple[int, int, int] = (255, 246, 225)
    # Allow held keys to auto-repeat KEYDOWN events (ms)
    key_repeat_delay: int = 120
    key_repeat_interval: int = 60
    profile: str = os.getenv("CATCH_PROFILE", "phone")
    log_level: str = os.getenv("CATCH_LOG_LEVEL", "INFO")

    # Database configuration
    db: DatabaseConfig = None
    game: GameConfig = None

    def __post_init__(self):
        if self.db is None:
            self.db = DatabaseConfig()
        if self.game is None:
            self.game = GameConfig.from_profile(self.profile)
        # Grow the window so the whole playfield and HUD fit
        self.width = max(self.width, int(self.game.playfield_width) + 40)
        self.height = max(self.height, int(self.game.playfield_height) + 120)

    @property
    def screen_size(self) -> tuple[int, int]:
        return (self.width, self.height)

def ensure_directories() -> None:
    for directory in (ASSET_DIR, IMAGE_DIR, SOUND_DIR, DATA_DIR):
        directory.mkdir(parents=True, exist_ok=True)

def init_pygame_window(cfg: Settings) -> pygame.Surface:
    pygame.display.set_caption(cfg.title)
    flags = pygame.FULLSCREEN if cfg.fullscreen else 0
    size = (0, 0) if cfg.fullscreen else cfg.screen_size
    screen = pygame.display.set_mode(size, flags)
    if cfg.fullscreen:
        cfg.width, cfg.height = screen.get_size()
    # Enable key repeat so holding Left/Right keeps the pan moving
    pygame.key.set_repeat(cfg.key_repeat_delay, cfg.key_repeat_interval)
    return screen
