from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, TYPE_CHECKING

from systems.clock import Ticker
from systems.errors import AlreadyPlaying, SessionOver
from systems.feedback import START, FeedbackService, NullFeedback
from systems.paddle import PaddleState, move_left, move_right
from systems.reporter import ProgressSink, ResultReporter, SessionOutcome
from systems.simulation import GameSession, GameState, advance
from systems.spawner import ObjectSpawner

if TYPE_CHECKING:
    from settings import GameConfig

logger = logging.getLogger("catchgame.engine")

@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of the session handed to the presentation layer."""
    state: GameState
    score: int
    missed: int
    max_missed: int
    paddle_offset: float
    objects: Tuple[Tuple[int, float, float], ...]  # (id, x, y)
    elapsed_ticks: int
    outcome: Optional[SessionOutcome] = None

SnapshotListener = Callable[[GameSnapshot], None]

class CatchEngine:
    """Ready -> Playing -> GameOver state machine for the egg catching game.

    All calls are expected on one thread: the host loop forwards input
    events and frame time in order, and every tick runs to completion.
    """

    def __init__(self, config: "GameConfig", feedback: Optional[FeedbackService] = None,
                 progress: Optional[ProgressSink] = None, rng: Optional[random.Random] = None,
                 ticker: Optional[Ticker] = None):
        self.config = config
        self.feedback = feedback if feedback is not None else NullFeedback()
        self.ticker = ticker if ticker is not None else Ticker()
        self.spawner = ObjectSpawner(rng)
        self.reporter = ResultReporter(progress, self.feedback, config.score_tiers)
        self.session = GameSession()
        self.paddle = PaddleState.for_playfield(config.playfield_width, config.paddle_width)
        self.last_outcome: Optional[SessionOutcome] = None
        self._listeners: List[SnapshotListener] = []
        self._session_ids = 0

    @property
    def state(self) -> GameState:
        return self.session.state

    @property
    def is_playing(self) -> bool:
        return self.session.state is GameState.PLAYING

    # ----- lifecycle -----
    def start(self) -> None:
        if self.session.state is GameState.PLAYING:
            raise AlreadyPlaying(f"session {self.session.session_id} is already running")
        if self.session.state is GameState.GAME_OVER:
            raise SessionOver(f"session {self.session.session_id} is over; call reset() first")
        # Arm first: if the ticker refuses, the engine is still Ready
        self.ticker.arm(
            self.config.simulation_interval_ms,
            self.config.spawn_interval_ms,
            self._on_sim_tick,
            self._on_spawn_tick,
        )
        self._session_ids += 1
        self.session.session_id = self._session_ids
        self.session.clear()
        self.paddle.center_offset = 0.0
        self.last_outcome = None
        self.session.state = GameState.PLAYING
        logger.info("session %s started", self.session.session_id)
        self.feedback.notify(START)

    def quit(self) -> bool:
        """Stop a running session early, keeping the score reached so far."""
        if self.session.state is not GameState.PLAYING:
            logger.debug("quit() ignored in state %s", self.session.state.value)
            return False
        self._end_game("quit")
        return True

    def reset(self) -> None:
        # A running session is discarded without a report, like closing the game view
        self.ticker.disarm()
        if self.session.state is GameState.PLAYING:
            logger.info("session %s abandoned", self.session.session_id)
        self.session.state = GameState.READY
        self.session.clear()
        self.paddle.center_offset = 0.0
        self.last_outcome = None

    def play_again(self) -> None:
        self.reset()
        self.start()

    # ----- input -----
    def move_left(self) -> bool:
        if not self.is_playing:
            return False
        move_left(self.paddle, self.config.move_step)
        return True

    def move_right(self) -> bool:
        if not self.is_playing:
            return False
        move_right(self.paddle, self.config.move_step)
        return True

    # ----- time -----
    def update(self, dt_ms: float) -> GameSnapshot:
        """Advance the game clock by one frame and publish a snapshot."""
        if self.is_playing:
            self.ticker.advance(dt_ms)
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
        return snapshot

    def _on_sim_tick(self) -> None:
        if not self.is_playing:
            return
        result = advance(self.session, self.paddle, self.config, self.feedback)
        if result.should_end:
            self._end_game("missed_out")

    def _on_spawn_tick(self) -> None:
        if not self.is_playing:
            return
        cfg = self.config
        obj = self.spawner.spawn_one(cfg.playfield_width, cfg.margin_px, cfg.min_speed, cfg.max_speed)
        self.session.add_object(obj)

    def _end_game(self, reason: str) -> None:
        self.ticker.disarm()
        self.session.state = GameState.GAME_OVER
        session = self.session
        outcome = self.reporter.build_outcome(
            session.session_id, session.score, session.missed, session.elapsed_ticks, reason
        )
        self.last_outcome = outcome
        self.reporter.report(outcome)

    # ----- presentation -----
    def snapshot(self) -> GameSnapshot:
        session = self.session
        return GameSnapshot(
            state=session.state,
            score=session.score,
            missed=session.missed,
            max_missed=self.config.max_missed,
            paddle_offset=self.paddle.center_offset,
            objects=tuple((obj.id, obj.x, obj.y) for obj in session.active_objects.values()),
            elapsed_ticks=session.elapsed_ticks,
            outcome=self.last_outcome,
        )

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
