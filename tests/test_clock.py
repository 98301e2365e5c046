import pytest

from systems.clock import Ticker
from systems.errors import AlreadyArmed, InvalidConfiguration, NotArmed


def armed_ticker(sim=10, spawn=25):
    calls = []
    ticker = Ticker()
    ticker.arm(sim, spawn, lambda: calls.append(('sim', ticker.now_ms)),
               lambda: calls.append(('spawn', ticker.now_ms)))
    return ticker, calls


def test_callbacks_fire_in_time_order_sim_first_on_ties():
    ticker, calls = armed_ticker()
    fired = ticker.advance(50)
    assert fired == 7
    assert calls == [
        ('sim', 10), ('sim', 20), ('spawn', 25), ('sim', 30),
        ('sim', 40), ('sim', 50), ('spawn', 50),
    ]
    assert ticker.now_ms == 50


def test_partial_frames_accumulate():
    ticker, calls = armed_ticker()
    assert ticker.advance(6) == 0
    assert ticker.advance(6) == 1
    assert calls == [('sim', 10)]
    assert ticker.now_ms == 12


def test_arm_twice_is_an_error():
    ticker, _ = armed_ticker()
    with pytest.raises(AlreadyArmed):
        ticker.arm(10, 10, lambda: None, lambda: None)


def test_disarm_when_not_armed_is_noop():
    ticker = Ticker()
    ticker.disarm()
    ticker.disarm()
    assert not ticker.armed


def test_advance_unarmed_raises():
    with pytest.raises(NotArmed):
        Ticker().advance(16)


@pytest.mark.parametrize('sim,spawn', [(0, 10), (10, 0), (-5, 10)])
def test_non_positive_intervals_rejected(sim, spawn):
    with pytest.raises(InvalidConfiguration):
        Ticker().arm(sim, spawn, lambda: None, lambda: None)


def test_disarm_inside_callback_stops_remaining_ticks():
    ticker = Ticker()
    calls = []

    def on_sim():
        calls.append('sim')
        if calls.count('sim') == 2:
            ticker.disarm()

    ticker.arm(10, 15, on_sim, lambda: calls.append('spawn'))
    fired = ticker.advance(100)
    # sim@10, spawn@15, sim@20 -> disarmed, nothing after
    assert calls == ['sim', 'spawn', 'sim']
    assert fired == 3
    assert not ticker.armed
    with pytest.raises(NotArmed):
        ticker.advance(10)


def test_rearm_restarts_the_clock():
    ticker, calls = armed_ticker()
    ticker.advance(30)
    ticker.disarm()
    calls.clear()
    ticker.arm(10, 25, lambda: calls.append('sim'), lambda: calls.append('spawn'))
    ticker.advance(10)
    assert calls == ['sim']
    assert ticker.now_ms == 10


def test_rearm_inside_callback_ends_the_frame():
    ticker = Ticker()
    calls = []

    def restart():
        calls.append('restart')
        ticker.disarm()
        ticker.arm(10, 25, lambda: calls.append('sim2'), lambda: calls.append('spawn2'))

    ticker.arm(10, 25, restart, lambda: calls.append('spawn'))
    fired = ticker.advance(500)
    # the new schedule does not catch up on the rest of the old frame
    assert calls == ['restart']
    assert fired == 1
    assert ticker.armed
    assert ticker.now_ms == 0
    ticker.advance(10)
    assert calls == ['restart', 'sim2']
