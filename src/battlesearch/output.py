from __future__ import annotations

import sys
import threading
from typing import Optional, TextIO

from .evaluator import MatchReport


class ReportWriter:
    """Writes report lines so that concurrent workers never interleave mid-line."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so pytest's capsys replacement of sys.stdout is honoured.
        return self._stream if self._stream is not None else sys.stdout

    def write(self, report: MatchReport) -> None:
        line = report.format_line() + "\n"
        with self._lock:
            self.stream.write(line)
            self.stream.flush()
