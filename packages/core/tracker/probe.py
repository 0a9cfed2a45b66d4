"""
Process status probing backed by psutil.

Any failure to resolve or query the pid is reported as ABSENT rather than
raised, so the tracker stops crediting time instead of over-counting.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

import psutil

from .types import DurationSample, ProcessStatus

log = logging.getLogger(__name__)

_GONE_STATUSES = frozenset({psutil.STATUS_ZOMBIE, psutil.STATUS_DEAD})
_SLEEPING_STATUSES = frozenset({
    psutil.STATUS_SLEEPING,
    psutil.STATUS_DISK_SLEEP,
    psutil.STATUS_IDLE,
    psutil.STATUS_WAKING,
})


class ProcessStatusProbe(ABC):
    """Interface for querying a process's scheduling status."""

    @abstractmethod
    def sample(self, pid: int) -> DurationSample:
        """Probe `pid` once. Must not raise; unknown pids yield ABSENT."""
        ...


class PsutilStatusProbe(ProcessStatusProbe):
    """
    Probe using psutil.Process.status().

    The psutil.Process handle is cached per pid so that a pid recycled by the
    OS for a different process (different creation time) is seen as ABSENT.
    """

    def __init__(
        self,
        count_sleeping_as_running: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._count_sleeping = count_sleeping_as_running
        self._clock = clock
        self._proc: Optional[psutil.Process] = None

    def _handle(self, pid: int) -> psutil.Process:
        if self._proc is None or self._proc.pid != pid:
            self._proc = psutil.Process(pid)
        return self._proc

    def _classify(self, status: str) -> ProcessStatus:
        if status in _GONE_STATUSES:
            return ProcessStatus.ABSENT
        if status == psutil.STATUS_RUNNING:
            return ProcessStatus.RUNNING
        if self._count_sleeping and status in _SLEEPING_STATUSES:
            return ProcessStatus.RUNNING
        return ProcessStatus.NOT_RUNNING

    def sample(self, pid: int) -> DurationSample:
        try:
            proc = self._handle(pid)
            if not proc.is_running():
                self._proc = None
                status = ProcessStatus.ABSENT
            else:
                status = self._classify(proc.status())
        except psutil.NoSuchProcess:
            self._proc = None
            status = ProcessStatus.ABSENT
        except (psutil.Error, OSError) as e:
            log.debug(f"Status query for pid {pid} failed: {e}")
            self._proc = None
            status = ProcessStatus.ABSENT
        return DurationSample(timestamp=self._clock(), status=status)
