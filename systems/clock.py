from __future__ import annotations
from typing import Callable, Optional

from systems.errors import AlreadyArmed, InvalidConfiguration, NotArmed

TickCallback = Callable[[], None]

class Ticker:
    """Two independent periodic callbacks driven by the host frame clock.

    The host loop feeds elapsed milliseconds into ``advance`` (``Clock.tick``
    returns exactly that). Every due callback fires in timestamp order, the
    simulation callback first when both fall on the same millisecond. Nothing
    fires once ``disarm`` has been called, including the rest of an
    ``advance`` that was in progress when a callback disarmed the ticker. A callback
    that re-arms the ticker also ends that ``advance``: the new schedule starts
    counting from the next frame.
    """

    def __init__(self):
        self.now_ms: float = 0.0
        self._sim_interval: float = 0.0
        self._spawn_interval: float = 0.0
        self._next_sim_at: float = 0.0
        self._next_spawn_at: float = 0.0
        self._on_sim: Optional[TickCallback] = None
        self._on_spawn: Optional[TickCallback] = None
        self._armed = False
        # Bumped by every arm(), so an advance() knows when a callback re-armed
        self._generation = 0

    @property
    def armed(self) -> bool:
        return self._armed

    def arm(self, simulation_interval_ms: float, spawn_interval_ms: float,
            on_sim_tick: TickCallback, on_spawn_tick: TickCallback) -> None:
        if self._armed:
            raise AlreadyArmed("ticker is already armed")
        if simulation_interval_ms <= 0 or spawn_interval_ms <= 0:
            raise InvalidConfiguration(
                f"tick intervals must be positive, got {simulation_interval_ms!r} and {spawn_interval_ms!r}"
            )
        self.now_ms = 0.0
        self._sim_interval = simulation_interval_ms
        self._spawn_interval = spawn_interval_ms
        # Like a repeating timer, the first callback fires one interval after arming
        self._next_sim_at = simulation_interval_ms
        self._next_spawn_at = spawn_interval_ms
        self._on_sim = on_sim_tick
        self._on_spawn = on_spawn_tick
        self._generation += 1
        self._armed = True

    def disarm(self) -> None:
        if not self._armed:
            return
        self._armed = False
        self._on_sim = None
        self._on_spawn = None

    def advance(self, dt_ms: float) -> int:
        """Move the clock forward by ``dt_ms`` and fire what came due.

        Returns the number of callbacks fired.
        """
        if not self._armed:
            raise NotArmed("advance() called on a disarmed ticker")
        if dt_ms < 0:
            raise ValueError(f"dt_ms must be non-negative, got {dt_ms!r}")
        target = self.now_ms + dt_ms
        generation = self._generation
        fired = 0
        while self._armed and self._generation == generation:
            if self._next_sim_at <= self._next_spawn_at:
                due, callback = self._next_sim_at, self._on_sim
                if due > target:
                    break
                self._next_sim_at += self._sim_interval
            else:
                due, callback = self._next_spawn_at, self._on_spawn
                if due > target:
                    break
                self._next_spawn_at += self._spawn_interval
            self.now_ms = due
            callback()
            fired += 1
        if self._armed and self._generation == generation:
            self.now_ms = target
        return fired
