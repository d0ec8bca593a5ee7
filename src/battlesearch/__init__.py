"""Battlesearch core package.

Finds every battle a user played in a tree of Pokémon Showdown battle logs:

- **walker**: recursive discovery of log files, labelled by their root directory
- **pool** / **worker**: round-robin fan-out to worker threads with a draining shutdown
- **searcher** / **extraction** / **evaluator**: per-file parsing, filtering and reporting
- **scanner**: ties the pieces together for one run
- **cli**: the ``battlesearch`` command

The main entry point for library use is :func:`run_search`.
"""

from .errors import BattleSearchError
from .models import SearchOptions
from .scanner import run_search
from .version import __version__

__all__ = [
    "__version__",
    "BattleSearchError",
    "SearchOptions",
    "run_search",
]
