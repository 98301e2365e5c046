from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, TYPE_CHECKING

from systems.collision import in_resolution_band, is_caught
from systems.feedback import CATCH, MISS, FeedbackService
from systems.paddle import PaddleState
from systems.spawner import FallingObject

if TYPE_CHECKING:
    from settings import GameConfig

logger = logging.getLogger("catchgame.simulation")

class GameState(str, Enum):
    READY = "ready"
    PLAYING = "playing"
    GAME_OVER = "game_over"

@dataclass
class GameSession:
    state: GameState = GameState.READY
    score: int = 0
    missed: int = 0
    # Keyed by id; dict order is insertion order, which is ascending id
    active_objects: Dict[int, FallingObject] = field(default_factory=dict)
    elapsed_ticks: int = 0
    session_id: int = 0

    def clear(self) -> None:
        self.score = 0
        self.missed = 0
        self.active_objects.clear()
        self.elapsed_ticks = 0

    def add_object(self, obj: FallingObject) -> None:
        if obj.id in self.active_objects:
            raise ValueError(f"object id {obj.id} is already active")
        self.active_objects[obj.id] = obj

@dataclass(frozen=True)
class StepResult:
    caught: int
    missed: int
    should_end: bool

def advance(session: GameSession, paddle: PaddleState, config: "GameConfig",
            feedback: Optional[FeedbackService] = None) -> StepResult:
    """Run one simulation tick over every active object.

    Objects that reach the resolution band are caught or missed exactly once
    and removed after the scan. Score and miss counters are applied once all
    objects have been processed, then ``should_end`` is evaluated.
    """
    paddle_center = paddle.center(config.playfield_width)
    resolved: list[int] = []
    caught = missed = 0

    for obj in sorted(session.active_objects.values(), key=lambda o: o.id):
        obj.y += obj.speed
        if not in_resolution_band(obj.y, config.playfield_height, config.resolution_band_px):
            continue
        resolved.append(obj.id)
        if is_caught(obj.x, paddle_center, config.paddle_width):
            caught += 1
            logger.debug("caught object %s at x=%.1f (pan %.1f)", obj.id, obj.x, paddle_center)
            if feedback is not None:
                feedback.notify(CATCH)
        else:
            missed += 1
            logger.debug("missed object %s at x=%.1f (pan %.1f)", obj.id, obj.x, paddle_center)
            if feedback is not None:
                feedback.notify(MISS)

    for obj_id in resolved:
        del session.active_objects[obj_id]

    session.score += caught
    session.missed += missed
    session.elapsed_ticks += 1
    return StepResult(caught=caught, missed=missed, should_end=session.missed >= config.max_missed)
