"""Run recaps for completed searches.

The recap is always logged as a text block; :func:`render_summary_table`
additionally draws the same counters as a rich table for ``--summary``.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .logging_utils import LogBlockBuilder
from .models import ScanStats

LOGGER = logging.getLogger(__name__)

ERROR_COLOR = "red"
WARNING_COLOR = "yellow"
SUCCESS_COLOR = "green"
DIM_COLOR = "dim"

_ROWS = (
    ("Files dispatched", "dispatched", None),
    ("Files parsed", "parsed", None),
    ("Matches reported", "matches", SUCCESS_COLOR),
    ("Parse errors", "errors", ERROR_COLOR),
    ("Skipped entries", "skipped_entries", WARNING_COLOR),
    ("Dropped tasks", "dropped_tasks", ERROR_COLOR),
)


def summarize_errors(errors: List[str], *, limit: int = 5) -> List[str]:
    """Group identical error messages and keep the most frequent ``limit``."""
    if not errors:
        return []
    counts = Counter(errors)
    lines = []
    for message, count in counts.most_common(limit):
        lines.append(message if count == 1 else f"{message} (x{count})")
    remaining = len(counts) - limit
    if remaining > 0:
        lines.append(f"... {remaining} more distinct error(s); run with --verbose for details.")
    return lines


def log_run_summary(stats: ScanStats, *, elapsed: Optional[float] = None) -> None:
    snapshot = stats.snapshot()
    builder = LogBlockBuilder("Battle Search Summary")
    fields = [(label, snapshot[key]) for label, key, _ in _ROWS]
    if elapsed is not None:
        fields.append(("Elapsed", f"{elapsed:.2f}s"))
    builder.add_fields(fields)

    with stats.lock:
        errors = list(stats.errors)
    if errors:
        builder.add_section("Errors", summarize_errors(errors))
        LOGGER.warning(builder.render())
    else:
        LOGGER.debug(builder.render())


def _colorize(value: int, color: Optional[str]) -> str:
    if value == 0 or color is None:
        color = DIM_COLOR if value == 0 else "bold"
    return f"[{color}]{value}[/{color}]"


def render_summary_table(stats: ScanStats, console: Optional[Console] = None) -> Table:
    console = console or Console(stderr=True)
    snapshot = stats.snapshot()

    table = Table(title="Battle Search Summary", show_header=True, header_style="bold cyan")
    table.add_column("Metric")
    table.add_column("Count", justify="right")
    for label, key, color in _ROWS:
        table.add_row(label, _colorize(snapshot[key], color))

    console.print(table)
    return table
