from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping, Optional, Protocol

from systems.feedback import FeedbackEvent, FeedbackService, NullFeedback
from systems.scoring import select_tier

logger = logging.getLogger("catchgame.reporter")

@dataclass(frozen=True)
class SessionOutcome:
    session_id: int
    score: int
    missed: int
    elapsed_ticks: int
    reason: str  # "missed_out" or "quit"
    tier: str
    ended_at: datetime = field(default_factory=datetime.now)

class ProgressSink(Protocol):
    def record_session(self, outcome: SessionOutcome) -> None:
        ...

    def add_points(self, points: int) -> None:
        ...

class ResultReporter:
    """Forwards the result of a finished session, once per session."""

    def __init__(self, progress: Optional[ProgressSink], feedback: Optional[FeedbackService],
                 tiers: Mapping[int, str]):
        self.progress = progress
        self.feedback = feedback if feedback is not None else NullFeedback()
        self.tiers = dict(tiers)
        # Session ids only grow, so the last reported id is enough for fire-once
        self._last_reported_id: Optional[int] = None

    def was_reported(self, session_id: int) -> bool:
        return self._last_reported_id is not None and session_id <= self._last_reported_id

    def build_outcome(self, session_id: int, score: int, missed: int,
                      elapsed_ticks: int, reason: str) -> SessionOutcome:
        return SessionOutcome(
            session_id=session_id,
            score=score,
            missed=missed,
            elapsed_ticks=elapsed_ticks,
            reason=reason,
            tier=select_tier(score, self.tiers),
        )

    def report(self, outcome: SessionOutcome) -> bool:
        """Send ``outcome`` to the progress store and feedback service.

        Returns False (and does nothing) when this session was already reported.
        """
        if self.was_reported(outcome.session_id):
            logger.info("session %s already reported, skipping", outcome.session_id)
            return False
        self._last_reported_id = outcome.session_id
        logger.info(
            "session %s over (%s): score=%s missed=%s tier=%s",
            outcome.session_id, outcome.reason, outcome.score, outcome.missed, outcome.tier,
        )
        if self.progress is not None:
            self.progress.record_session(outcome)
            self.progress.add_points(outcome.score)
        self.feedback.notify(FeedbackEvent.end(outcome.tier))
        return True
