"""Worker threads that consume file tasks from their own inbox."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from queue import SimpleQueue
from typing import Optional, Protocol

from .errors import BattleSearchError, DispatchError
from .evaluator import MatchReport
from .logging_utils import render_fields_block
from .models import TERMINATE, FileTask, ScanStats, Task

LOGGER = logging.getLogger(__name__)


class Searcher(Protocol):
    def check_log(self, task: FileTask) -> Optional[MatchReport]: ...


class Worker:
    """One thread with one inbox.

    The worker is *running* from :meth:`start` until it takes ``TERMINATE``
    off its inbox (or something that is not a task at all), after which it is
    *terminated* and :meth:`submit` refuses new work. Tasks are handled in the
    order they were submitted. Read failures and malformed logs are logged and
    never stop the loop; any other exception ends the thread and is kept in
    :attr:`failure` for the pool to report.
    """

    def __init__(
        self,
        index: int,
        searcher: Searcher,
        emit: Callable[[MatchReport], None],
        stats: Optional[ScanStats] = None,
    ) -> None:
        self.index = index
        self.name = f"battlesearch-worker-{index}"
        self._searcher = searcher
        self._emit = emit
        self._stats = stats
        self._inbox: SimpleQueue[Task] = SimpleQueue()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._terminated = threading.Event()
        self.failure: Optional[BaseException] = None
        self.processed = 0

    @property
    def terminated(self) -> bool:
        return self._terminated.is_set()

    def start(self) -> None:
        self._thread.start()

    def submit(self, task: Task) -> None:
        if self.terminated:
            raise DispatchError(f"{self.name} is no longer accepting tasks")
        self._inbox.put(task)

    def join(self, timeout: Optional[float] = None) -> None:
        self._thread.join(timeout)

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def _run(self) -> None:
        LOGGER.debug("%s started", self.name)
        try:
            while True:
                task = self._inbox.get()
                if task is TERMINATE:
                    break
                if not isinstance(task, FileTask):
                    LOGGER.error("%s received %r instead of a task; stopping", self.name, task)
                    break
                self._handle(task)
        except Exception as exc:  # noqa: BLE001 - surfaced by WorkerPool.shutdown()
            self.failure = exc
            LOGGER.exception("%s terminated abnormally", self.name)
        finally:
            self._terminated.set()
            LOGGER.debug("%s stopped after %d file(s)", self.name, self.processed)

    def _handle(self, task: FileTask) -> None:
        try:
            report = self._searcher.check_log(task)
        except (OSError, BattleSearchError) as exc:
            LOGGER.error(
                render_fields_block(
                    "Log Parse Failed",
                    {"Path": task.path, "Reason": exc},
                    pad_top=False,
                )
            )
            if self._stats is not None:
                self._stats.register_error(f"{task.path}: {exc}")
            return
        finally:
            self.processed += 1

        if self._stats is not None:
            self._stats.register_parsed(matched=report is not None)
        if report is not None:
            self._emit(report)
