from __future__ import annotations

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

from .identity import to_id


@dataclass(frozen=True, slots=True)
class SearchOptions:
    searched_user_id: str
    wins_only: bool = False
    forfeits_only: bool = False
    worker_count: int = 2

    def __post_init__(self) -> None:
        if self.worker_count < 1:
            raise ValueError(f"worker_count must be at least 1 (got {self.worker_count})")

    @classmethod
    def for_username(
        cls,
        username: str,
        *,
        wins_only: bool = False,
        forfeits_only: bool = False,
        worker_count: int = 2,
    ) -> "SearchOptions":
        return cls(
            searched_user_id=to_id(username),
            wins_only=wins_only,
            forfeits_only=forfeits_only,
            worker_count=worker_count,
        )


@dataclass(frozen=True, slots=True)
class FileTask:
    path: Path
    context_label: str


class _Terminate:
    __slots__ = ()

    def __repr__(self) -> str:
        return "TERMINATE"


TERMINATE = _Terminate()

Task = Union[FileTask, _Terminate]


@dataclass
class ScanStats:
    """Run counters shared by the walker and every worker."""

    dispatched: int = 0
    parsed: int = 0
    matches: int = 0
    skipped_entries: int = 0
    dropped_tasks: int = 0
    errors: List[str] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def register_dispatched(self) -> None:
        with self.lock:
            self.dispatched += 1

    def register_parsed(self, *, matched: bool) -> None:
        with self.lock:
            self.parsed += 1
            if matched:
                self.matches += 1

    def register_error(self, message: str) -> None:
        with self.lock:
            self.errors.append(message)

    def register_skipped(self) -> None:
        with self.lock:
            self.skipped_entries += 1

    def register_dropped(self) -> None:
        with self.lock:
            self.dropped_tasks += 1

    def snapshot(self) -> Dict[str, Any]:
        with self.lock:
            return {
                "dispatched": self.dispatched,
                "parsed": self.parsed,
                "matches": self.matches,
                "errors": len(self.errors),
                "skipped_entries": self.skipped_entries,
                "dropped_tasks": self.dropped_tasks,
            }
