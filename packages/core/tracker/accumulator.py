"""
Pure accumulation step for tracked running time.

Given the previous total, the previous anchor instant, the pause flag and a
fresh sample, compute the next total and anchor. Time is only credited for a
RUNNING sample while unpaused; everything else re-anchors.
"""

from __future__ import annotations

from typing import NamedTuple

from .types import DurationSample, ProcessStatus


class Advance(NamedTuple):
    duration: float
    instant: float
    terminate: bool


def advance(prev_duration: float, prev_instant: float, paused: bool, sample: DurationSample) -> Advance:
    if sample.status == ProcessStatus.ABSENT:
        return Advance(prev_duration, prev_instant, True)

    if paused or sample.status == ProcessStatus.NOT_RUNNING:
        # re-anchor so a later RUNNING sample does not credit this gap
        return Advance(prev_duration, sample.timestamp, False)

    delta = max(0.0, sample.timestamp - prev_instant)
    return Advance(prev_duration + delta, sample.timestamp, False)


def format_duration(seconds: float) -> str:
    """Render as HH:MM:SS, truncating to whole seconds. Hours are unbounded."""
    # epsilon absorbs float error from summing deltas like 0.2 + 0.2 + ...
    total_secs = max(0, int(seconds + 1e-6))
    hours = total_secs // 3600
    minutes = (total_secs % 3600) // 60
    secs = total_secs % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
