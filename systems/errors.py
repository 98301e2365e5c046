from __future__ import annotations


class CatchGameError(Exception):
    """Base class for every error raised by the catch game engine."""


class InvalidConfiguration(CatchGameError):
    """A construction-time value is out of range."""


class TickerError(CatchGameError):
    pass


class AlreadyArmed(TickerError):
    pass


class NotArmed(TickerError):
    pass


class GameStateError(CatchGameError):
    """A lifecycle call was made from a state that does not accept it."""


class AlreadyPlaying(GameStateError):
    pass


class SessionOver(GameStateError):
    """start() on a finished session; reset() must come first."""
