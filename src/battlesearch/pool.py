"""Fixed-size worker pool with round-robin dispatch."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Optional

from .errors import DispatchError, WorkerFailureError
from .evaluator import MatchReport
from .extraction import DEFAULT_TRAINING_ROUNDS
from .models import TERMINATE, FileTask, ScanStats, SearchOptions
from .output import ReportWriter
from .searcher import BattleSearcher
from .worker import Searcher, Worker

LOGGER = logging.getLogger(__name__)

SearcherFactory = Callable[[], Searcher]


class WorkerPool:
    """Owns ``options.worker_count`` workers, each with its own inbox.

    :meth:`dispatch` is meant to be called from a single producer thread; the
    round-robin cursor is not locked. :meth:`shutdown` queues ``TERMINATE``
    behind whatever each worker already holds and blocks until every worker
    thread has exited.
    """

    def __init__(
        self,
        options: SearchOptions,
        *,
        emit: Optional[Callable[[MatchReport], None]] = None,
        stats: Optional[ScanStats] = None,
        searcher_factory: Optional[SearcherFactory] = None,
        training_rounds: int = DEFAULT_TRAINING_ROUNDS,
    ) -> None:
        self.options = options
        self.stats = stats
        if emit is None:
            emit = ReportWriter().write
        # One searcher per worker: extractors are stateful and never shared.
        make_searcher = searcher_factory or (lambda: BattleSearcher(options, training_rounds))
        self.workers = [
            Worker(index, make_searcher(), emit, stats) for index in range(options.worker_count)
        ]
        self._cursor = 0
        self._shut_down = False
        for worker in self.workers:
            worker.start()
        LOGGER.debug("Started %d search worker(s)", len(self.workers))

    def __enter__(self) -> "WorkerPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self._shut_down:
            self.shutdown()

    def dispatch(self, task: FileTask) -> None:
        if self._shut_down:
            raise RuntimeError("Cannot dispatch tasks after shutdown()")
        worker = self.workers[self._cursor]
        self._cursor = (self._cursor + 1) % len(self.workers)
        try:
            worker.submit(task)
        except DispatchError as exc:
            LOGGER.error("Dropped %s: %s", task.path, exc)
            if self.stats is not None:
                self.stats.register_dropped()
            return
        if self.stats is not None:
            self.stats.register_dispatched()

    def shutdown(self) -> None:
        """Drain and stop every worker.

        Raises:
            RuntimeError: if called more than once.
            WorkerFailureError: if any worker exited abnormally.
        """
        if self._shut_down:
            raise RuntimeError("WorkerPool.shutdown() may only be called once")
        self._shut_down = True

        for worker in self.workers:
            try:
                worker.submit(TERMINATE)
            except DispatchError:
                LOGGER.debug("%s already stopped", worker.name)
        for worker in self.workers:
            worker.join()

        failures = [(worker.name, worker.failure) for worker in self.workers if worker.failure is not None]
        if failures:
            raise WorkerFailureError(failures)
        LOGGER.debug("All %d search worker(s) stopped", len(self.workers))
