"""Search defaults from an optional YAML file and the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from .extraction import DEFAULT_TRAINING_ROUNDS
from .utils import env_bool, env_int, load_yaml_file

CONFIG_ENV = "BATTLESEARCH_CONFIG"
WORKERS_ENV = "BATTLESEARCH_WORKERS"
WINS_ONLY_ENV = "BATTLESEARCH_WINS_ONLY"
FORFEITS_ONLY_ENV = "BATTLESEARCH_FORFEITS_ONLY"
LOG_LEVEL_ENV = "BATTLESEARCH_LOG_LEVEL"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class SearchSettings:
    workers: int = 2
    wins_only: bool = False
    forfeits_only: bool = False
    training_rounds: int = DEFAULT_TRAINING_ROUNDS
    log_level: str = "INFO"

    def validate(self) -> "SearchSettings":
        if isinstance(self.workers, bool) or not isinstance(self.workers, int) or self.workers < 1:
            raise ValueError(f"'workers' must be a positive integer (got {self.workers!r})")
        if isinstance(self.training_rounds, bool) or not isinstance(self.training_rounds, int) or self.training_rounds < 0:
            raise ValueError(f"'training_rounds' must be a non-negative integer (got {self.training_rounds!r})")
        for name in ("wins_only", "forfeits_only"):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"'{name}' must be a boolean")
        if not isinstance(self.log_level, str) or self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"'log_level' must be one of {', '.join(_LOG_LEVELS)} (got {self.log_level!r})")
        return replace(self, log_level=self.log_level.upper())

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level.upper())


def _build_settings(data: dict[str, Any]) -> SearchSettings:
    known = {item.name for item in fields(SearchSettings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown search setting(s): {', '.join(unknown)}")
    return SearchSettings(**data)


def _apply_env(settings: SearchSettings) -> SearchSettings:
    updates: dict[str, Any] = {}
    workers = env_int(WORKERS_ENV)
    if workers is not None:
        updates["workers"] = workers
    wins_only = env_bool(WINS_ONLY_ENV)
    if wins_only is not None:
        updates["wins_only"] = wins_only
    forfeits_only = env_bool(FORFEITS_ONLY_ENV)
    if forfeits_only is not None:
        updates["forfeits_only"] = forfeits_only
    log_level = os.getenv(LOG_LEVEL_ENV)
    if log_level:
        updates["log_level"] = log_level.strip()
    return replace(settings, **updates) if updates else settings


def load_settings(path: Path | None = None) -> SearchSettings:
    """Resolve search defaults: environment over YAML file over built-ins.

    ``path`` falls back to ``$BATTLESEARCH_CONFIG``. The YAML document keeps
    its settings under a top-level ``search:`` mapping.
    """
    if path is None and os.getenv(CONFIG_ENV):
        path = Path(os.environ[CONFIG_ENV])

    settings = SearchSettings()
    if path is not None:
        data = load_yaml_file(path)
        section = data.get("search", {}) or {}
        if not isinstance(section, dict):
            raise ValueError("'search' must be a mapping of setting -> value")
        settings = _build_settings(section)

    return _apply_env(settings).validate()
