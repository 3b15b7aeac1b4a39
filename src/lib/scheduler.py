"""
Periodic rescan scheduling

Runs a callable every `interval` seconds on a chain of daemon timers until
the returned handle is cancelled. Each tick arms the next one only after it
finishes, so passes never overlap.

Usage:
    handle = rescan_schedule(lambda: decorator.messages_format(doc))
    ...
    handle.cancel()
"""

import threading
from typing import Callable, Optional

from .log import LOG


class RescanHandle:
    """
    Cancellable periodic task

    Attributes:
        task: Callable run on every tick
        interval: Seconds between the end of one tick and the next
        runs: Number of completed ticks
    """

    def __init__(self, task: Callable[[], object], interval: float) -> None:
        if interval <= 0:
            raise ValueError(f"Rescan interval must be positive, got {interval}")
        self.task = task
        self.interval = interval
        self.runs = 0
        self._lock = threading.Lock()
        self._cancelled = threading.Event()
        self._timer: Optional[threading.Timer] = None

    def start(self) -> "RescanHandle":
        """Arm the first tick; returns self for chaining"""
        self._arm()
        return self

    def _arm(self) -> None:
        with self._lock:
            if self._cancelled.is_set():
                return
            self._timer = threading.Timer(self.interval, self._tick)
            self._timer.daemon = True
            self._timer.start()

    def _tick(self) -> None:
        if self._cancelled.is_set():
            return
        try:
            self.task()
        except Exception as e:
            # A failing pass must not end the schedule
            LOG(f"Rescan pass failed: {e!r}", level=1)
        self.runs += 1
        self._arm()

    def cancel(self) -> None:
        """Stop future ticks; a tick already running completes"""
        with self._lock:
            self._cancelled.set()
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        LOG(f"Rescan cancelled after {self.runs} pass(es)", level=2)

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def __enter__(self) -> "RescanHandle":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()


def rescan_schedule(task: Callable[[], object], interval: Optional[float] = None) -> RescanHandle:
    """
    Start running task periodically

    Args:
        task: Callable to run on every tick
        interval: Seconds between ticks; defaults to the configured rescan interval

    Returns:
        Started handle; call cancel() to stop it
    """
    if interval is None:
        from ..config import appsettings
        interval = appsettings.rescanInterval_seconds()
    return RescanHandle(task, interval).start()
