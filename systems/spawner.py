from __future__ import annotations
import itertools
import random
from dataclasses import dataclass
from typing import Optional

@dataclass
class FallingObject:
    """An egg in flight. ``y`` grows downwards from 0 at the top."""
    id: int
    x: float
    y: float
    speed: float

class ObjectSpawner:
    """
    Creates falling objects at random horizontal positions and speeds.

    Notes
    - The random source is injected so a seeded ``random.Random`` replays
      the same sequence of eggs.
    - Ids come from a counter, so ascending id is creation order.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self._ids = itertools.count(1)

    def spawn_one(self, playfield_width: float, margin_px: float,
                  min_speed: float, max_speed: float) -> FallingObject:
        """
        Build a new object at the top of the playfield.

        Parameters
        ----------
        playfield_width : float
            Width of the playfield the object falls through
        margin_px : float
            Horizontal distance kept free on both sides
        min_speed, max_speed : float
            Bounds for the fall speed, in units per simulation tick

        Returns
        -------
        FallingObject
            Object with ``y == 0``; the caller adds it to the session
        """
        x = self.rng.uniform(margin_px, playfield_width - margin_px)
        speed = self.rng.uniform(min_speed, max_speed)
        return FallingObject(id=next(self._ids), x=x, y=0.0, speed=speed)
