"""Tests for TickClock."""

from __future__ import annotations

import pytest

from core.timer import TickClock


class TestTickClock:
    def test_sub_second_frames_accumulate(self):
        clock = TickClock()
        ticks = sum(clock.update(1 / 60) for _ in range(59))
        assert ticks == 0
        assert clock.update(2 / 60) == 1

    def test_one_tick_per_second(self):
        clock = TickClock()
        assert sum(clock.update(0.25) for _ in range(12)) == 3

    def test_long_frame_yields_several_ticks(self):
        clock = TickClock()
        assert clock.update(2.5) == 2
        assert clock.partial() == pytest.approx(0.5)

    def test_pause_and_resume(self):
        clock = TickClock()
        clock.update(0.5)
        clock.pause()
        assert not clock.running
        assert clock.update(5.0) == 0
        clock.resume()
        assert clock.update(0.5) == 1

    def test_reset_drops_partial_tick(self):
        clock = TickClock()
        clock.update(0.9)
        clock.reset()
        assert clock.update(0.2) == 0
        assert clock.partial() == pytest.approx(0.2)

    def test_non_positive_dt_ignored(self):
        clock = TickClock()
        assert clock.update(0.0) == 0
        assert clock.update(-1.0) == 0

    def test_custom_interval(self):
        clock = TickClock(interval=0.5)
        assert clock.update(1.0) == 2
