"""Shared fakes for tracker tests."""

from __future__ import annotations

import threading
import time
from collections import deque
from typing import Iterable

import pytest

from packages.core.tracker.probe import ProcessStatusProbe
from packages.core.tracker.types import DurationSample, ProcessStatus


class FakeClock:
    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self._lock = threading.Lock()

    def __call__(self) -> float:
        with self._lock:
            return self.now

    def set(self, t: float) -> None:
        with self._lock:
            self.now = t

    def advance(self, dt: float) -> None:
        with self._lock:
            self.now += dt


class ScriptedProbe(ProcessStatusProbe):
    """Returns queued statuses stamped with the fake clock, then `default`."""

    def __init__(self, clock, statuses: Iterable[ProcessStatus] = (), default: ProcessStatus = ProcessStatus.RUNNING) -> None:
        self._clock = clock
        self._queue = deque(statuses)
        self.default = default
        self.calls: list[int] = []

    def push(self, *statuses: ProcessStatus) -> None:
        self._queue.extend(statuses)

    def sample(self, pid: int) -> DurationSample:
        self.calls.append(pid)
        status = self._queue.popleft() if self._queue else self.default
        return DurationSample(timestamp=self._clock(), status=status)


class BlockingProbe(ProcessStatusProbe):
    """Stalls sample() for `block_pid` until `release` is set; other pids answer at once."""

    def __init__(self, clock, block_pid: int, status: ProcessStatus = ProcessStatus.RUNNING) -> None:
        self._clock = clock
        self._block_pid = block_pid
        self._status = status
        self.entered = threading.Event()
        self.release = threading.Event()

    def sample(self, pid: int) -> DurationSample:
        if pid == self._block_pid:
            self.entered.set()
            self.release.wait(5.0)
        return DurationSample(timestamp=self._clock(), status=self._status)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def probe(clock):
    return ScriptedProbe(clock)


def wait_until(predicate, timeout: float = 2.0, interval: float = 0.005) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()
