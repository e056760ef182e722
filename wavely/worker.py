"""A fixed pool of threads processing pending jobs from a bounded queue."""

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable

from wavely.data import PendingJob

MIN_WORKERS = 5
MAX_WORKERS = 10
QUEUE_SIZE = 100

_STOP = object()
_log = logging.getLogger("wavely")


class WorkerPool:
    """Runs ``process`` for every submitted job on ``workers`` threads."""

    def __init__(self, process: Callable[[PendingJob], None],
                 workers: int = MAX_WORKERS, queue_size: int = QUEUE_SIZE) -> None:
        self._process = process
        self.workers = workers
        self._queue: queue.Queue = queue.Queue(maxsize=queue_size)
        self._threads: list[threading.Thread] = []

    def start(self) -> None:
        self._threads = [threading.Thread(target=self._run, daemon=True)
                         for _ in range(self.workers)]
        for thread in self._threads:
            thread.start()

    def submit(self, job: PendingJob) -> bool:
        """Queue ``job`` without blocking; return False when the queue is full."""
        try:
            self._queue.put_nowait(job)
        except queue.Full:
            return False
        return True

    def stop(self) -> None:
        """Let the workers finish the queued jobs, then wait for them to exit."""
        for _ in self._threads:
            self._queue.put(_STOP)
        for thread in self._threads:
            thread.join()
        self._threads = []

    def _run(self) -> None:
        for job in iter(self._queue.get, _STOP):
            try:
                self._process(job)
            except Exception:
                _log.exception("Fehler bei der Verarbeitung eines Jobs")