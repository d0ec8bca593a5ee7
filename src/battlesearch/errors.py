"""Error taxonomy for battle log searches.

Only :class:`PathError` raised for a root directory and
:class:`WorkerFailureError` abort a run; everything else is local to one file
or one directory entry and is logged by whoever catches it.
"""

from __future__ import annotations


class BattleSearchError(Exception):
    """Base class for all battlesearch errors."""


class PathError(BattleSearchError):
    """Raised when a path cannot be read or turned into a context label."""


class MalformedDocumentError(BattleSearchError):
    """Raised when a battle log does not have the fields a search needs."""


class DispatchError(BattleSearchError):
    """Raised when a task is sent to a worker that no longer accepts tasks."""


class WorkerFailureError(BattleSearchError):
    """Raised by the pool when one or more workers exited abnormally."""

    def __init__(self, failures: list[tuple[str, BaseException]]) -> None:
        self.failures = failures
        names = ", ".join(name for name, _ in failures)
        super().__init__(f"{len(failures)} worker(s) failed: {names}")
