"""Tests for packages.core.tracker.accumulator."""

from __future__ import annotations

import pytest

from packages.core.tracker.accumulator import advance, format_duration
from packages.core.tracker.types import DurationSample, ProcessStatus

RUNNING = ProcessStatus.RUNNING
NOT_RUNNING = ProcessStatus.NOT_RUNNING
ABSENT = ProcessStatus.ABSENT


def _sample(t: float, status: ProcessStatus = RUNNING) -> DurationSample:
    return DurationSample(timestamp=t, status=status)


# ---------------------------------------------------------------------------
# TestAdvance
# ---------------------------------------------------------------------------

class TestAdvance:
    def test_running_credits_delta(self):
        res = advance(10.0, 5.0, False, _sample(7.5))
        assert res.duration == pytest.approx(12.5)
        assert res.instant == 7.5
        assert res.terminate is False

    def test_not_running_reanchors_without_credit(self):
        res = advance(10.0, 5.0, False, _sample(9.0, NOT_RUNNING))
        assert res.duration == 10.0
        assert res.instant == 9.0
        assert res.terminate is False

    def test_paused_reanchors_even_when_running(self):
        res = advance(3.0, 1.0, True, _sample(50.0))
        assert res.duration == 3.0
        assert res.instant == 50.0
        assert res.terminate is False

    def test_absent_terminates_and_keeps_state(self):
        res = advance(4.0, 2.0, False, _sample(3.0, ABSENT))
        assert res.duration == 4.0
        assert res.instant == 2.0
        assert res.terminate is True

    def test_absent_terminates_while_paused(self):
        assert advance(4.0, 2.0, True, _sample(3.0, ABSENT)).terminate is True

    def test_clock_going_backwards_clamps_to_zero(self):
        res = advance(4.0, 10.0, False, _sample(8.0))
        assert res.duration == 4.0
        assert res.instant == 8.0

    def test_running_sum_equals_sum_of_deltas(self):
        times = [0.0, 0.3, 0.35, 1.1, 2.0, 2.0, 4.25]
        duration, instant = 0.0, times[0]
        for t in times[1:]:
            res = advance(duration, instant, False, _sample(t))
            assert res.duration >= duration
            duration, instant = res.duration, res.instant
        assert duration == pytest.approx(times[-1] - times[0])

    def test_not_running_gap_is_not_credited_later(self):
        duration, instant = 0.0, 0.0
        duration, instant, _ = advance(duration, instant, False, _sample(1.0))
        duration, instant, _ = advance(duration, instant, False, _sample(5.0, NOT_RUNNING))
        duration, instant, _ = advance(duration, instant, False, _sample(5.5))
        assert duration == pytest.approx(1.5)


# ---------------------------------------------------------------------------
# TestPauseSemantics
# ---------------------------------------------------------------------------

class TestPauseSemantics:
    def test_long_pause_contributes_nothing(self):
        duration, instant = 0.0, 0.0
        duration, instant, _ = advance(duration, instant, False, _sample(2.0))
        # paused ticks, statuses irrelevant
        for t, status in [(3.0, RUNNING), (500.0, NOT_RUNNING), (9000.0, RUNNING)]:
            duration, instant, _ = advance(duration, instant, True, _sample(t, status))
        duration, instant, _ = advance(duration, instant, False, _sample(9000.2))
        assert duration == pytest.approx(2.2)

    def test_concrete_pause_scenario(self):
        duration, instant = 0.0, 0.0
        for t in (0.2, 0.4, 0.6, 0.8, 1.0):
            duration, instant, _ = advance(duration, instant, False, _sample(t))
        assert format_duration(duration) == "00:00:01"

        # pause at 1.0, resume at 11.0: the resume re-anchors
        duration, instant, _ = advance(duration, instant, True, _sample(11.0))
        assert format_duration(duration) == "00:00:01"

        duration, instant, _ = advance(duration, instant, False, _sample(11.2))
        assert duration == pytest.approx(1.2)
        assert format_duration(duration) == "00:00:01"


# ---------------------------------------------------------------------------
# TestFormatDuration
# ---------------------------------------------------------------------------

class TestFormatDuration:
    @pytest.mark.parametrize("seconds,expected", [
        (0, "00:00:00"),
        (0.999, "00:00:00"),
        (59.9, "00:00:59"),
        (61, "00:01:01"),
        (3599, "00:59:59"),
        (3600, "01:00:00"),
        (86399, "23:59:59"),
        (100 * 3600 + 5, "100:00:05"),
    ])
    def test_format(self, seconds, expected):
        assert format_duration(seconds) == expected

    def test_negative_renders_as_zero(self):
        assert format_duration(-5) == "00:00:00"
