"""Schedulers that trigger the crawl entry point."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

Job = Callable[[], object]


class Scheduler(Protocol):
    def start(self, job: Job) -> None: ...

    def stop(self) -> None: ...


class IntervalScheduler:
    """Run ``job`` every ``interval_seconds`` on a daemon thread.

    The job runs on the scheduler thread itself, so a slow job delays the next
    tick instead of overlapping it; ticks missed meanwhile are not replayed.
    """

    def __init__(self, interval_seconds: float, name: str = "kqxs-crawl") -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._interval = float(interval_seconds)
        self._name = name
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, job: Job) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, args=(job,), name=self._name, daemon=True)
        self._thread.start()
        logger.info("Scheduler %s started (every %ss)", self._name, self._interval)

    def _run(self, job: Job) -> None:
        while not self._stop.wait(self._interval):
            try:
                job()
            except Exception:
                logger.exception("Scheduled job %s failed", self._name)

    def stop(self) -> None:
        self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None:
            thread.join(timeout=5.0)
        logger.info("Scheduler %s stopped", self._name)
