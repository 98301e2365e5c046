import random
from dataclasses import replace

import pytest

from settings import GameConfig
from systems.clock import Ticker
from systems.engine import CatchEngine
from systems.errors import AlreadyArmed, AlreadyPlaying, SessionOver
from systems.simulation import GameState
from conftest import RecordingFeedback, ScriptedRandom, run_until_over


def scripted_xs(*xs):
    # each spawn draws x, then speed
    values = []
    for x in xs:
        values.extend([x, 50.0])
    return ScriptedRandom(values)


def test_start_arms_ticker_and_notifies(make_engine, feedback):
    engine = make_engine()
    assert engine.state is GameState.READY
    engine.start()
    assert engine.state is GameState.PLAYING
    assert engine.ticker.armed
    assert feedback.kinds() == ['start']


def test_start_while_playing_is_rejected_without_side_effects(make_engine, feedback):
    engine = make_engine(rng=random.Random(1))
    engine.start()
    engine.update(250)
    before = engine.snapshot()
    with pytest.raises(AlreadyPlaying):
        engine.start()
    assert engine.snapshot() == before
    assert feedback.kinds() == ['start']


def test_start_after_game_over_needs_reset(make_engine):
    engine = make_engine()
    engine.start()
    engine.quit()
    with pytest.raises(SessionOver):
        engine.start()
    engine.reset()
    engine.start()
    assert engine.is_playing


def test_three_misses_end_the_game_and_report_once(make_engine, store, feedback):
    engine = make_engine(rng=scripted_xs(200, 200, 200, 200, 50, 50, 50))
    engine.start()
    run_until_over(engine)

    assert engine.state is GameState.GAME_OVER
    assert not engine.ticker.armed
    assert store.points == [4]
    assert len(store.sessions) == 1
    outcome = store.sessions[0]
    assert (outcome.score, outcome.missed, outcome.reason) == (4, 3, 'missed_out')
    assert outcome.tier == 'low'
    assert feedback.kinds() == ['start'] + ['catch'] * 4 + ['miss'] * 3 + ['end']
    assert feedback.events[-1].tier == 'low'


def test_nothing_happens_after_game_over(make_engine, store):
    engine = make_engine(rng=scripted_xs(50, 50, 50))
    engine.start()
    run_until_over(engine)
    frozen = engine.snapshot()
    for _ in range(50):
        engine.update(100)
    assert engine.snapshot() == frozen
    assert engine.quit() is False
    assert store.points == [0]


def test_quit_freezes_score_and_reports(make_engine, store, feedback):
    engine = make_engine(rng=scripted_xs(200, 200))
    engine.start()
    # two eggs spawn at 100 and 200 ms and land at 190 and 290 ms
    engine.update(295)
    assert engine.snapshot().score == 2
    assert engine.quit() is True
    assert engine.state is GameState.GAME_OVER
    assert store.points == [2]
    assert store.sessions[0].reason == 'quit'
    assert engine.quit() is False
    assert store.points == [2]
    assert feedback.kinds().count('end') == 1


def test_quit_outside_a_session_is_ignored(make_engine, store):
    engine = make_engine()
    assert engine.quit() is False
    assert engine.state is GameState.READY
    assert store.points == []


def test_reset_is_idempotent(make_engine):
    engine = make_engine(rng=random.Random(5))
    engine.start()
    engine.update(500)
    engine.quit()
    engine.reset()
    once = engine.snapshot()
    engine.reset()
    assert engine.snapshot() == once
    assert once.state is GameState.READY
    assert (once.score, once.missed, once.objects, once.elapsed_ticks) == (0, 0, (), 0)
    assert once.outcome is None


def test_reset_while_playing_discards_without_report(make_engine, store):
    engine = make_engine(rng=random.Random(5))
    engine.start()
    engine.update(150)
    engine.reset()
    assert engine.state is GameState.READY
    assert not engine.ticker.armed
    assert store.points == []


def test_play_again_starts_a_new_reported_session(make_engine, store):
    engine = make_engine(rng=random.Random(11))
    engine.start()
    engine.quit()
    first_id = engine.session.session_id
    engine.play_again()
    assert engine.is_playing
    assert engine.session.session_id == first_id + 1
    engine.quit()
    assert len(store.sessions) == 2
    assert store.sessions[0].session_id != store.sessions[1].session_id


def test_moves_only_apply_while_playing(make_engine):
    engine = make_engine()
    assert engine.move_left() is False
    assert engine.paddle.center_offset == 0
    engine.start()
    assert engine.move_left() is True
    assert engine.paddle.center_offset == -30
    for _ in range(20):
        engine.move_right()
    assert engine.paddle.center_offset == engine.paddle.max
    engine.quit()
    assert engine.move_left() is False
    assert engine.paddle.center_offset == engine.paddle.max


def test_paddle_is_recentred_on_start(make_engine):
    engine = make_engine()
    engine.start()
    engine.move_right()
    engine.quit()
    engine.reset()
    engine.start()
    assert engine.paddle.center_offset == 0


def test_snapshots_are_published_every_frame(make_engine):
    engine = make_engine(rng=random.Random(2))
    seen = []
    unsubscribe = engine.subscribe(seen.append)
    engine.update(16)
    engine.start()
    engine.update(16)
    assert [s.state for s in seen] == [GameState.READY, GameState.PLAYING]
    unsubscribe()
    engine.update(16)
    assert len(seen) == 2


def test_score_never_decreases_and_game_stops_at_threshold(make_engine):
    engine = make_engine(rng=random.Random(8))
    scores = []
    engine.subscribe(lambda s: scores.append((s.score, s.missed, s.state)))
    engine.start()
    step = 0
    while engine.is_playing:
        # wander the pan so some eggs are caught and some missed
        if step % 7 == 0:
            engine.move_left()
        elif step % 5 == 0:
            engine.move_right()
        engine.update(10)
        step += 1
    values = [score for score, _, _ in scores]
    assert values == sorted(values)
    for score, missed, state in scores:
        if missed >= 3:
            assert state is GameState.GAME_OVER


def play_scripted_session(seed):
    cfg = GameConfig(
        playfield_width=390, playfield_height=500, paddle_width=80,
        simulation_interval_ms=16, spawn_interval_ms=400, min_speed=10, max_speed=30,
    )
    engine = CatchEngine(cfg, rng=random.Random(seed))
    engine.start()
    frame = 0
    while engine.is_playing and frame < 20_000:
        if frame % 9 == 0:
            engine.move_left()
        if frame % 4 == 0:
            engine.move_right()
        engine.update(16)
        frame += 1
    snap = engine.snapshot()
    return snap.score, snap.missed, snap.outcome.score


def test_same_seed_and_inputs_give_same_result():
    assert play_scripted_session(1234) == play_scripted_session(1234)


def test_refused_arm_leaves_engine_ready(config, feedback, store):
    ticker = Ticker()
    ticker.arm(10, 10, lambda: None, lambda: None)
    engine = CatchEngine(config, feedback=feedback, progress=store, ticker=ticker)
    with pytest.raises(AlreadyArmed):
        engine.start()
    assert engine.state is GameState.READY
    assert engine.session.session_id == 0
    assert feedback.kinds() == []


def test_game_ending_tick_cancels_a_spawn_due_at_the_same_time(config, store):
    # eggs spawn every 90ms and land 90ms later, so each miss falls on a spawn time
    cfg = replace(config, spawn_interval_ms=90, max_missed=1)
    engine = CatchEngine(cfg, progress=store, rng=scripted_xs(50))
    engine.start()
    snapshot = engine.update(180)
    assert snapshot.state is GameState.GAME_OVER
    assert snapshot.missed == 1
    assert snapshot.elapsed_ticks == 18
    assert snapshot.objects == ()
    assert store.points == [0]


class RestartingFeedback(RecordingFeedback):
    engine = None

    def notify(self, event):
        super().notify(event)
        if event.kind.value == 'end':
            self.engine.play_again()


def test_restart_from_end_feedback_starts_on_the_next_frame(config, store):
    cfg = replace(config, spawn_interval_ms=90, max_missed=1)
    feedback = RestartingFeedback()
    engine = CatchEngine(cfg, feedback=feedback, progress=store, rng=scripted_xs(50, 50))
    feedback.engine = engine
    engine.start()
    snapshot = engine.update(180)
    assert store.points == [0]
    assert snapshot.state is GameState.PLAYING
    assert engine.session.session_id == 2
    assert snapshot.elapsed_ticks == 0
    assert snapshot.objects == ()
    snapshot = engine.update(10)
    assert snapshot.elapsed_ticks == 1
    assert feedback.kinds() == ['start', 'end', 'start']
