from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from .accumulator import format_duration
from .types import IDLE_PLACEHOLDER


@dataclass(frozen=True)
class PublishedDuration:
    session_id: Optional[int]
    seconds: float
    text: str
    ended: bool


class DurationPublisher:
    """
    Last-value slot between the sampler thread and the UI.

    Writes are tagged with a session id; a write for any session other than
    the one opened by the latest `begin()` is dropped, as is any write that
    would move the duration backwards or arrive after the session ended.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = PublishedDuration(None, 0.0, IDLE_PLACEHOLDER, False)

    def begin(self, session_id: int) -> None:
        with self._lock:
            self._value = PublishedDuration(session_id, 0.0, format_duration(0), False)

    def clear(self) -> None:
        with self._lock:
            self._value = PublishedDuration(None, 0.0, IDLE_PLACEHOLDER, False)

    def publish(self, session_id: int, seconds: float) -> bool:
        with self._lock:
            cur = self._value
            if cur.session_id != session_id or cur.ended or seconds < cur.seconds:
                return False
            self._value = PublishedDuration(session_id, seconds, format_duration(seconds), False)
            return True

    def mark_ended(self, session_id: int) -> bool:
        with self._lock:
            cur = self._value
            if cur.session_id != session_id or cur.ended:
                return False
            self._value = PublishedDuration(session_id, cur.seconds, cur.text, True)
            return True

    def snapshot(self) -> PublishedDuration:
        with self._lock:
            return self._value

    def current_text(self) -> str:
        return self.snapshot().text

    def is_ended(self) -> bool:
        return self.snapshot().ended
