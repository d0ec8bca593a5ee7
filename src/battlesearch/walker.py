"""Recursive discovery of battle logs under one root directory.

Every file found under a root is labelled with the root's own name (normally
a date such as ``2021-03-14``) and handed to the pool as soon as it is seen.
Sibling order follows the filesystem and is not sorted.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Protocol

from .errors import PathError
from .logging_utils import render_fields_block
from .models import FileTask, ScanStats

LOGGER = logging.getLogger(__name__)


class TaskSink(Protocol):
    def dispatch(self, task: FileTask) -> None: ...


def context_label_for(root: Path) -> str:
    name = root.name
    if name in ("", ".", ".."):
        name = root.resolve().name
    if not name:
        raise PathError(f"Couldn't get filename of {root}")
    return name


def walk(root: Path, pool: TaskSink, stats: Optional[ScanStats] = None) -> None:
    """Dispatch a task for every file below ``root``.

    Raises:
        PathError: if ``root`` itself cannot be listed or labelled.
    """
    label = context_label_for(root)
    try:
        entries = os.scandir(root)
    except OSError as exc:
        raise PathError(f"Cannot read directory {root}: {exc.strerror or exc}") from exc
    with entries:
        _walk_entries(entries, label, pool, stats)


def _walk_dir(directory: Path, label: str, pool: TaskSink, stats: Optional[ScanStats]) -> None:
    try:
        entries = os.scandir(directory)
    except OSError as exc:
        _skip(directory, exc, stats)
        return
    with entries:
        _walk_entries(entries, label, pool, stats)


def _walk_entries(entries, label: str, pool: TaskSink, stats: Optional[ScanStats]) -> None:
    for entry in entries:
        path = Path(entry.path)
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            is_file = not is_dir and entry.is_file()
        except OSError as exc:
            _skip(path, exc, stats)
            continue

        if is_dir:
            _walk_dir(path, label, pool, stats)
        elif is_file:
            pool.dispatch(FileTask(path, label))
        else:
            LOGGER.debug("Skipping %s: not a regular file", path)


def _skip(path: Path, exc: OSError, stats: Optional[ScanStats]) -> None:
    LOGGER.warning(
        render_fields_block(
            "Skipping Directory Entry",
            {"Path": path, "Reason": exc.strerror or exc},
            pad_top=False,
        )
    )
    if stats is not None:
        stats.register_skipped()
