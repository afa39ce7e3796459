# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Tests for the phase-aligned tick scheduler.
"""

import pytest
from unittest.mock import MagicMock

from conftest import FakeClock, FakeTimer


class TestNextDelay:
    """Test delay computation against wall-clock boundaries."""

    @pytest.fixture
    def scheduler(self):
        from dialface.scheduler import TickScheduler
        clock = FakeClock()
        return TickScheduler(FakeTimer(clock), MagicMock(), clock_ms=clock.millis)

    @pytest.mark.parametrize("now_ms,expected", [
        (0, 1000),
        (1, 999),
        (250, 750),
        (999, 1),
        (1000, 1000),
        (1_700_000_123_456, 544),
    ])
    def test_delay_to_next_second(self, scheduler, now_ms, expected):
        assert scheduler.next_delay_ms(now_ms) == expected

    def test_custom_interval(self):
        from dialface.scheduler import TickScheduler
        clock = FakeClock()
        minute = TickScheduler(FakeTimer(clock), MagicMock(), interval_ms=60_000, clock_ms=clock.millis)
        assert minute.next_delay_ms(125_000) == 55_000

    def test_invalid_interval(self):
        from dialface.scheduler import TickScheduler
        clock = FakeClock()
        with pytest.raises(ValueError):
            TickScheduler(FakeTimer(clock), MagicMock(), interval_ms=0)


class TestPhaseAlignment:
    """Test that rearming never accumulates drift."""

    @pytest.fixture
    def clock(self):
        return FakeClock(ms=5_000_250)

    @pytest.fixture
    def timer(self, clock):
        return FakeTimer(clock)

    @pytest.fixture
    def on_tick(self):
        return MagicMock()

    @pytest.fixture
    def scheduler(self, timer, on_tick, clock):
        from dialface.scheduler import TickScheduler
        return TickScheduler(timer, on_tick, clock_ms=clock.millis)

    def test_start_arms_to_next_boundary(self, scheduler, timer):
        scheduler.start()

        assert timer.scheduled == [750]
        assert timer.pending_count == 1
        assert scheduler.is_armed

    def test_late_fires_do_not_drift(self, scheduler, timer, clock, on_tick):
        scheduler.start()

        lateness = [0, 330, 999, 5, 1500, 42, 0, 2750]
        for late in lateness:
            timer.fire_next(late_ms=late)
            delay = timer.scheduled[-1]
            assert delay == 1000 - (clock.ms % 1000)
            # Every rearm lands exactly on a second boundary
            assert (clock.ms + delay) % 1000 == 0
            assert timer.pending_count == 1

        assert on_tick.call_count == len(lateness)

    def test_start_is_idempotent(self, scheduler, timer):
        scheduler.start()
        scheduler.start()

        assert len(timer.scheduled) == 1
        assert timer.pending_count == 1

    def test_stop_cancels_once(self, scheduler, timer):
        scheduler.start()
        scheduler.stop()
        scheduler.stop()

        assert len(timer.cancelled) == 1
        assert timer.pending_count == 0
        assert not scheduler.is_running
        assert not scheduler.is_armed

    def test_stop_without_timer_is_noop(self, scheduler, timer):
        scheduler.stop()
        assert timer.cancelled == []

    def test_tick_that_stops_does_not_rearm(self, timer, clock):
        from dialface.scheduler import TickScheduler

        holder = {}

        def stop_on_tick():
            holder["scheduler"].stop()

        holder["scheduler"] = TickScheduler(timer, stop_on_tick, clock_ms=clock.millis)
        holder["scheduler"].start()
        timer.fire_next()

        assert timer.pending_count == 0
        assert len(timer.scheduled) == 1

    def test_update_follows_should_run(self, scheduler, timer):
        scheduler.update(True)
        assert scheduler.is_running
        scheduler.update(True)
        assert timer.pending_count == 1

        scheduler.update(False)
        assert not scheduler.is_running
        assert timer.pending_count == 0

    def test_failing_tick_still_rearms(self, timer, clock):
        from dialface.scheduler import TickScheduler

        on_tick = MagicMock(side_effect=[RuntimeError("draw failed"), None])
        scheduler = TickScheduler(timer, on_tick, clock_ms=clock.millis)
        scheduler.start()

        with pytest.raises(RuntimeError):
            timer.fire_next()

        assert scheduler.is_running
        assert scheduler.is_armed
        assert timer.pending_count == 1

        timer.fire_next()
        assert on_tick.call_count == 2
        assert timer.pending_count == 1
