from __future__ import annotations

import pytest

_ENV_VARS = (
    "BATTLESEARCH_CONFIG",
    "BATTLESEARCH_WORKERS",
    "BATTLESEARCH_WINS_ONLY",
    "BATTLESEARCH_FORFEITS_ONLY",
    "BATTLESEARCH_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_battlesearch_env(monkeypatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
