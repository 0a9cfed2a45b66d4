from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional

IDLE_PLACEHOLDER = "--:--:--"

LoopState = Literal["ACTIVE", "CANCELLING", "TERMINATED"]


class ProcessStatus(str, Enum):
    RUNNING = "RUNNING"
    NOT_RUNNING = "NOT_RUNNING"
    ABSENT = "ABSENT"  # pid no longer resolves to a live process


@dataclass(frozen=True)
class DurationSample:
    """A single probe result. `timestamp` is in seconds on the tracker clock."""
    timestamp: float
    status: ProcessStatus


@dataclass(frozen=True)
class TrackerConfig:
    sample_interval_ms: int = 200
    absent_samples_to_end: int = 1
    count_sleeping_as_running: bool = False
    join_timeout_ms: int = 2000


class CancellationHandle:
    """
    Signal used to ask a sampler loop to stop and to observe that it did.

    `cancel()` is idempotent. `acknowledge()` is called by the loop once it
    will not touch shared state again.
    """

    def __init__(self) -> None:
        self._requested = threading.Event()
        self._acknowledged = threading.Event()

    def cancel(self) -> None:
        self._requested.set()

    @property
    def cancelled(self) -> bool:
        return self._requested.is_set()

    def wait_cancelled(self, timeout: float) -> bool:
        return self._requested.wait(timeout)

    def acknowledge(self) -> None:
        self._acknowledged.set()

    @property
    def acknowledged(self) -> bool:
        return self._acknowledged.is_set()

    def wait_acknowledged(self, timeout: Optional[float] = None) -> bool:
        return self._acknowledged.wait(timeout)


@dataclass
class TrackedSession:
    """
    One tracking attempt for a single pid.

    `accumulated_duration` and `last_sample_instant` belong to the sampler
    loop. `paused` and the resume anchor are written by the controller, so
    they go through `_lock`.
    """
    session_id: int
    pid: int
    last_sample_instant: float
    accumulated_duration: float = 0.0
    ended: bool = False
    cancellation: CancellationHandle = field(default_factory=CancellationHandle)
    _paused: bool = False
    _resume_anchor: Optional[float] = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def paused(self) -> bool:
        with self._lock:
            return self._paused

    def pause(self) -> None:
        with self._lock:
            self._paused = True
            self._resume_anchor = None

    def resume(self, now: float) -> None:
        with self._lock:
            if not self._paused:
                return
            self._paused = False
            self._resume_anchor = now

    def take_pause_state(self) -> tuple[bool, Optional[float]]:
        """Return (paused, resume_anchor) atomically and consume the anchor."""
        with self._lock:
            anchor = self._resume_anchor
            self._resume_anchor = None
            return self._paused, anchor
