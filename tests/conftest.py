import os
import sys
import pytest

# Ensure the repository root (flat layout) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
REPO_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from settings import GameConfig
from systems.engine import CatchEngine


class RecordingFeedback:
    def __init__(self):
        self.events = []

    def notify(self, event):
        self.events.append(event)

    def kinds(self):
        return [e.kind.value for e in self.events]


class RecordingStore:
    def __init__(self):
        self.sessions = []
        self.points = []

    def record_session(self, outcome):
        self.sessions.append(outcome)

    def add_points(self, points):
        self.points.append(points)


class ScriptedRandom:
    """Returns queued values from uniform(), ignoring the bounds."""

    def __init__(self, values):
        self.values = list(values)

    def uniform(self, a, b):
        return self.values.pop(0)


@pytest.fixture()
def config():
    # Fixed speed of 50 units/tick: a new egg resolves on its 9th tick
    return GameConfig(
        playfield_width=400,
        playfield_height=500,
        paddle_width=80,
        object_visual_size=30,
        max_missed=3,
        simulation_interval_ms=10,
        spawn_interval_ms=100,
        min_speed=50,
        max_speed=50,
        move_step=30,
        margin_px=50,
        resolution_band_px=50,
    )


@pytest.fixture()
def feedback():
    return RecordingFeedback()


@pytest.fixture()
def store():
    return RecordingStore()


@pytest.fixture()
def make_engine(config, feedback, store):
    def factory(rng=None, cfg=None):
        return CatchEngine(cfg or config, feedback=feedback, progress=store, rng=rng)
    return factory


def run_until_over(engine, step_ms=10, limit=10_000):
    for _ in range(limit):
        engine.update(step_ms)
        if not engine.is_playing:
            return
    raise AssertionError("session never ended")
