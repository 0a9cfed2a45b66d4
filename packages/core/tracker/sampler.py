"""
Background sampler for one tracked session.

State machine: ACTIVE -> CANCELLING -> TERMINATED (or ACTIVE -> TERMINATED
when the process disappears). Each tick waits on the cancellation handle, so
a cancel request wakes the loop at once and always wins over a pending tick.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

from .accumulator import advance
from .probe import ProcessStatusProbe
from .publisher import DurationPublisher
from .types import DurationSample, LoopState, ProcessStatus, TrackedSession, TrackerConfig

log = logging.getLogger(__name__)


class SamplerLoop:
    """Drives probe + accumulator for a single TrackedSession on a daemon thread."""

    def __init__(
        self,
        session: TrackedSession,
        probe: ProcessStatusProbe,
        publisher: DurationPublisher,
        config: TrackerConfig,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._session = session
        self._probe = probe
        self._publisher = publisher
        self._cfg = config
        self._clock = clock
        self._absent_streak = 0

        self._ended_cb: Optional[Callable[[TrackedSession], None]] = None
        self._error_cb: Optional[Callable[[str], None]] = None

        self._thread: Optional[threading.Thread] = None

    @property
    def session(self) -> TrackedSession:
        return self._session

    @property
    def state(self) -> LoopState:
        handle = self._session.cancellation
        if handle.acknowledged:
            return "TERMINATED"
        if handle.cancelled:
            return "CANCELLING"
        return "ACTIVE"

    def on_ended(self, cb: Callable[[TrackedSession], None]) -> None:
        self._ended_cb = cb

    def on_error(self, cb: Callable[[str], None]) -> None:
        self._error_cb = cb

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._run,
            name=f"SamplerLoop-{self._session.pid}",
            daemon=True,
        )
        self._thread.start()

    def cancel(self) -> None:
        self._session.cancellation.cancel()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the loop to acknowledge termination. Returns False on timeout."""
        handle = self._session.cancellation
        if self._thread is None:
            handle.acknowledge()
            return True
        if threading.current_thread() is self._thread:
            # called from an ended callback; the loop exits right after it returns
            return True
        return handle.wait_acknowledged(timeout)

    def tick(self) -> bool:
        """Run one sampling step. Returns True when the loop must terminate."""
        session = self._session
        if session.cancellation.cancelled:
            return True

        paused, resume_anchor = session.take_pause_state()
        if resume_anchor is not None:
            session.last_sample_instant = resume_anchor
        if paused:
            # no probing while paused, just keep the anchor fresh
            session.last_sample_instant = self._clock()
            return False

        sample = self._probe.sample(session.pid)
        if sample.status == ProcessStatus.ABSENT:
            self._absent_streak += 1
            if self._absent_streak < self._cfg.absent_samples_to_end:
                log.debug(f"pid {session.pid} absent ({self._absent_streak}/{self._cfg.absent_samples_to_end}), waiting")
                sample = DurationSample(sample.timestamp, ProcessStatus.NOT_RUNNING)
        else:
            self._absent_streak = 0

        # a pause or pause/resume during the probe: credit nothing for this interval
        paused_after, anchor_after = session.take_pause_state()
        interrupted = paused_after or anchor_after is not None
        result = advance(session.accumulated_duration, session.last_sample_instant, interrupted, sample)

        if session.cancellation.cancelled:
            return True

        if result.terminate:
            session.ended = True
            self._publisher.mark_ended(session.session_id)
            log.info(f"Tracked process {session.pid} is gone, session {session.session_id} ended")
            self._emit_ended()
            return True

        session.accumulated_duration = result.duration
        session.last_sample_instant = result.instant
        self._publisher.publish(session.session_id, result.duration)
        return False

    def _emit_ended(self) -> None:
        if self._ended_cb:
            try:
                self._ended_cb(self._session)
            except Exception:
                log.exception("Session ended callback failed")

    def _emit_error(self, msg: str) -> None:
        if self._error_cb:
            try:
                self._error_cb(msg)
            except Exception:
                log.exception("Error callback failed")

    def _run(self) -> None:
        handle = self._session.cancellation
        interval = self._cfg.sample_interval_ms / 1000.0
        try:
            while not handle.wait_cancelled(interval):
                try:
                    if self.tick():
                        break
                except Exception as e:
                    log.exception("Sampler loop error")
                    self._emit_error(str(e))
        finally:
            handle.acknowledge()
            log.debug(f"Sampler for session {self._session.session_id} terminated")
