from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

from .probe import ProcessStatusProbe, PsutilStatusProbe
from .publisher import DurationPublisher
from .sampler import SamplerLoop
from .types import TrackedSession, TrackerConfig

log = logging.getLogger(__name__)


class SessionController:
    """
    Owns the lifetime of at most one SamplerLoop.

    Switching to another pid cancels the current loop and waits for it to
    acknowledge before the new session is created. If the wait times out the
    old loop can still not reach the new session: every publisher write is
    tagged with its session id and stale ids are dropped.
    """

    def __init__(
        self,
        config: Optional[dict] = None,
        probe: Optional[ProcessStatusProbe] = None,
        publisher: Optional[DurationPublisher] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cfg = TrackerConfig(**(config or {}))
        self._probe = probe
        self._publisher = publisher or DurationPublisher()
        self._clock = clock
        self._lock = threading.Lock()

        self._session: Optional[TrackedSession] = None
        self._loop: Optional[SamplerLoop] = None
        # retired loops that missed the switch timeout; shutdown still waits for them
        self._stragglers: list[SamplerLoop] = []
        self._next_session_id = 0
        self._shut_down = False

        self._ended_cb: Optional[Callable[[int], None]] = None
        self._error_cb: Optional[Callable[[str], None]] = None

    def on_session_ended(self, cb: Callable[[int], None]) -> None:
        """Register a callback invoked with the pid when the tracked process disappears.

        Runs on the sampler thread.
        """
        self._ended_cb = cb

    def on_error(self, cb: Callable[[str], None]) -> None:
        self._error_cb = cb

    def update_config(self, config: dict) -> None:
        """Replace the tracker config. Takes effect for the next session."""
        with self._lock:
            self._cfg = TrackerConfig(**config)

    @property
    def publisher(self) -> DurationPublisher:
        return self._publisher

    @property
    def sampler(self) -> Optional[SamplerLoop]:
        with self._lock:
            return self._loop

    @property
    def tracked_pid(self) -> Optional[int]:
        with self._lock:
            return self._session.pid if self._session else None

    @property
    def is_paused(self) -> bool:
        with self._lock:
            if self._session is None or self._session.ended:
                return False
            return self._session.paused

    @property
    def is_active(self) -> bool:
        with self._lock:
            return self._session is not None and not self._session.ended

    def current_duration_text(self) -> str:
        return self._publisher.current_text()

    def is_session_ended(self) -> bool:
        return self._publisher.is_ended()

    def start_session(self, pid: int) -> bool:
        """Start tracking `pid`. Returns False if nothing changed."""
        with self._lock:
            if self._shut_down:
                log.warning(f"Ignoring start_session({pid}) after shutdown")
                return False
            current = self._session
            if current is not None and current.pid == pid and not current.ended:
                return False

            self._retire_locked()

            self._next_session_id += 1
            session = TrackedSession(
                session_id=self._next_session_id,
                pid=pid,
                last_sample_instant=self._clock(),
            )
            self._publisher.begin(session.session_id)

            loop = SamplerLoop(session, self._make_probe(), self._publisher, self._cfg, clock=self._clock)
            loop.on_ended(self._handle_ended)
            loop.on_error(self._handle_error)
            self._session = session
            self._loop = loop
            loop.start()

        log.info(f"Tracking pid {pid} (session {session.session_id})")
        return True

    def pause(self) -> None:
        with self._lock:
            if self._session is None or self._session.ended:
                return
            self._session.pause()
        log.info("Tracking paused")

    def resume(self) -> None:
        with self._lock:
            if self._session is None or self._session.ended:
                return
            self._session.resume(self._clock())
        log.info("Tracking resumed")

    def toggle_pause(self) -> bool:
        """Flip the pause flag and return the new value."""
        if self.is_paused:
            self.resume()
        else:
            self.pause()
        return self.is_paused

    def stop(self) -> None:
        with self._lock:
            if self._session is None:
                return
            pid = self._session.pid
            self._retire_locked()
            self._publisher.clear()
        log.info(f"Stopped tracking pid {pid}")

    def shutdown(self) -> None:
        """Cancel any sampler and block, without a timeout, until every retired loop terminates.

        Safe to call twice.
        """
        with self._lock:
            if self._shut_down:
                return
            self._shut_down = True
            self._retire_locked(wait_forever=True)
            for loop in self._stragglers:
                loop.join(None)
            self._stragglers.clear()
            self._publisher.clear()
        log.info("Session controller shut down")

    def _make_probe(self) -> ProcessStatusProbe:
        if self._probe is not None:
            return self._probe
        return PsutilStatusProbe(
            count_sleeping_as_running=self._cfg.count_sleeping_as_running,
            clock=self._clock,
        )

    def _retire_locked(self, wait_forever: bool = False) -> None:
        loop = self._loop
        self._loop = None
        self._session = None
        if loop is None:
            return
        loop.cancel()
        if wait_forever:
            loop.join(None)
        elif not loop.join(self._cfg.join_timeout_ms / 1000.0):
            self._stragglers.append(loop)
            log.warning(
                "Sampler for pid %s did not acknowledge cancellation within %d ms",
                loop.session.pid,
                self._cfg.join_timeout_ms,
            )

    def _handle_ended(self, session: TrackedSession) -> None:
        if self._ended_cb:
            self._ended_cb(session.pid)

    def _handle_error(self, msg: str) -> None:
        if self._error_cb:
            self._error_cb(msg)
