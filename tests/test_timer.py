# tests/test_timer.py
import pygame as pg
import pytest

from core.timer import ManualTimer
from viz.pygame_timer import PygameTimer, TICK_EVENT


def test_manual_timer_fires_on_schedule():
    t = ManualTimer()
    hits = []
    t.start(100, lambda: hits.append(t.now_ms))
    assert t.advance_time(99) == 0
    assert t.advance_time(1) == 1
    assert t.advance_time(250) == 2
    assert hits == [100, 200, 300]


def test_manual_timer_cancel_from_callback():
    t = ManualTimer()
    hits = []
    def cb():
        hits.append(t.now_ms)
        t.cancel()
    t.start(50, cb)
    assert t.advance_time(1_000) == 1
    assert not t.active and hits == [50]


def test_manual_timer_restart_from_callback_does_not_double_fire():
    t = ManualTimer()
    hits = []
    def cb():
        hits.append(t.now_ms)
        if len(hits) == 1:
            t.start(30, cb)
    t.start(100, cb)
    t.advance_time(160)
    assert hits == [100, 130, 160]


def test_manual_timer_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        ManualTimer().start(0, lambda: None)


def test_manual_timer_fire_jumps_to_next_tick():
    t = ManualTimer()
    assert t.fire() is False
    t.start(70, lambda: None)
    assert t.fire() is True
    assert t.now_ms == 70


def test_pygame_timer_dispatches_current_generation_only():
    t = PygameTimer()
    hits = []
    t.start(10_000, lambda: hits.append(1))
    current = pg.event.Event(TICK_EVENT, gen=t.generation)
    assert t.dispatch(current) is True

    t.start(5_000, lambda: hits.append(2))
    assert t.dispatch(current) is False          # queued before the restart
    assert t.dispatch(pg.event.Event(TICK_EVENT, gen=t.generation)) is True
    assert hits == [1, 2]
    assert t.interval_ms == 5_000
    t.cancel()


def test_pygame_timer_cancel_drops_queued_ticks():
    t = PygameTimer()
    hits = []
    t.start(10_000, lambda: hits.append(1))
    queued = pg.event.Event(TICK_EVENT, gen=t.generation)
    t.cancel()
    assert not t.active
    assert t.dispatch(queued) is False
    assert hits == []


def test_pygame_timer_ignores_other_events():
    t = PygameTimer()
    t.start(10_000, lambda: None)
    assert t.dispatch(pg.event.Event(pg.KEYDOWN, key=pg.K_UP)) is False
    t.cancel()
