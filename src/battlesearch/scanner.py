"""Top-level orchestration of a battle log search."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Optional

from .evaluator import MatchReport
from .extraction import DEFAULT_TRAINING_ROUNDS
from .logging_utils import render_fields_block
from .models import ScanStats, SearchOptions
from .pool import WorkerPool
from .walker import walk

LOGGER = logging.getLogger(__name__)


def run_search(
    options: SearchOptions,
    roots: Iterable[Path],
    *,
    emit: Optional[Callable[[MatchReport], None]] = None,
    stats: Optional[ScanStats] = None,
    training_rounds: int = DEFAULT_TRAINING_ROUNDS,
) -> ScanStats:
    """Walk every root and wait for the workers to drain.

    The pool is shut down even when a root fails, so no worker outlives the
    call. A root failure (:class:`~battlesearch.errors.PathError`) or a worker
    failure (:class:`~battlesearch.errors.WorkerFailureError`) propagates.
    """
    stats = stats if stats is not None else ScanStats()
    roots = list(roots)
    LOGGER.debug(
        render_fields_block(
            "Battle Search Started",
            {
                "User ID": options.searched_user_id,
                "Wins only": options.wins_only,
                "Forfeits only": options.forfeits_only,
                "Workers": options.worker_count,
                "Roots": [str(root) for root in roots],
            },
            pad_top=False,
        )
    )

    pool = WorkerPool(options, emit=emit, stats=stats, training_rounds=training_rounds)
    try:
        for root in roots:
            walk(root, pool, stats)
    finally:
        pool.shutdown()
    return stats
