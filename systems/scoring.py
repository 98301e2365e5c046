from __future__ import annotations
from typing import Mapping

# (upper bound inclusive, message); the last entry covers everything above
ENCOURAGEMENT = (
    (2, "Every master was once a beginner. Keep practicing!"),
    (5, "Good focus! Your concentration is improving."),
    (10, "Excellent reflexes! You're developing great focus."),
    (15, "Outstanding performance! Your discipline is showing."),
)
TOP_MESSAGE = "Incredible mastery! You've achieved perfect focus."

TIER_BADGES = {"low": "★", "medium": "★★", "high": "★★★"}

def select_tier(score: int, tiers: Mapping[int, str]) -> str:
    """Tier of the highest threshold that ``score`` reaches."""
    if score < 0:
        raise ValueError(f"score must be non-negative, got {score}")
    reached = [threshold for threshold in tiers if threshold <= score]
    if not reached:
        raise ValueError(f"no tier covers a score of {score}")
    return tiers[max(reached)]

def encouragement_message(score: int) -> str:
    for upper, message in ENCOURAGEMENT:
        if score <= upper:
            return message
    return TOP_MESSAGE

def tier_badge(tier: str) -> str:
    return TIER_BADGES.get(tier, "☆")

FORMAT_SUFFIX = {0: " pts", 1: " pt"}

def format_score(score: int) -> str:
    return f"{score}{FORMAT_SUFFIX.get(score, ' pts')}"
