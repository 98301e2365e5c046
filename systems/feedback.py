from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

class FeedbackKind(str, Enum):
    CATCH = "catch"
    MISS = "miss"
    START = "start"
    END = "end"

@dataclass(frozen=True)
class FeedbackEvent:
    kind: FeedbackKind
    tier: Optional[str] = None

    @classmethod
    def end(cls, tier: str) -> "FeedbackEvent":
        return cls(FeedbackKind.END, tier)

CATCH = FeedbackEvent(FeedbackKind.CATCH)
MISS = FeedbackEvent(FeedbackKind.MISS)
START = FeedbackEvent(FeedbackKind.START)

class FeedbackService(Protocol):
    """Receives fire-and-forget game events for sound and haptics.

    Implementations deal with their own failures; ``notify`` never raises.
    """

    def notify(self, event: FeedbackEvent) -> None:
        ...

class NullFeedback:
    def notify(self, event: FeedbackEvent) -> None:
        pass
