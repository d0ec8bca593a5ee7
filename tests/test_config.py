from __future__ import annotations

import logging

import pytest

from battlesearch.config import SearchSettings, load_settings
from battlesearch.utils import env_int, parse_env_bool


def test_defaults_without_file_or_env() -> None:
    settings = load_settings()
    assert settings == SearchSettings()
    assert settings.workers == 2
    assert settings.log_level_value == logging.INFO


def test_yaml_file_sets_defaults(tmp_path) -> None:
    config = tmp_path / "battlesearch.yaml"
    config.write_text(
        """
search:
  workers: 6
  wins_only: true
  log_level: debug
""",
        encoding="utf-8",
    )

    settings = load_settings(config)

    assert settings.workers == 6
    assert settings.wins_only is True
    assert settings.forfeits_only is False
    assert settings.log_level == "DEBUG"


def test_config_path_from_env(tmp_path, monkeypatch) -> None:
    config = tmp_path / "battlesearch.yaml"
    config.write_text("search:\n  forfeits_only: true\n", encoding="utf-8")
    monkeypatch.setenv("BATTLESEARCH_CONFIG", str(config))

    assert load_settings().forfeits_only is True


def test_env_overrides_file(tmp_path, monkeypatch) -> None:
    config = tmp_path / "battlesearch.yaml"
    config.write_text("search:\n  workers: 6\n  wins_only: true\n", encoding="utf-8")
    monkeypatch.setenv("BATTLESEARCH_WORKERS", "3")
    monkeypatch.setenv("BATTLESEARCH_WINS_ONLY", "off")
    monkeypatch.setenv("BATTLESEARCH_LOG_LEVEL", "warning")

    settings = load_settings(config)

    assert settings.workers == 3
    assert settings.wins_only is False
    assert settings.log_level == "WARNING"


def test_env_expansion_in_yaml(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("SEARCH_LEVEL", "ERROR")
    config = tmp_path / "battlesearch.yaml"
    config.write_text("search:\n  log_level: $SEARCH_LEVEL\n", encoding="utf-8")

    assert load_settings(config).log_level == "ERROR"


@pytest.mark.parametrize(
    "body",
    [
        "search:\n  workers: 0\n",
        "search:\n  workers: many\n",
        "search:\n  wins_only: maybe\n",
        "search:\n  log_level: LOUD\n",
        "search:\n  colour: blue\n",
        "search: [1, 2]\n",
        "- just\n- a list\n",
    ],
)
def test_invalid_settings_rejected(tmp_path, body: str) -> None:
    config = tmp_path / "battlesearch.yaml"
    config.write_text(body, encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(config)


def test_invalid_worker_env_rejected(monkeypatch) -> None:
    monkeypatch.setenv("BATTLESEARCH_WORKERS", "lots")
    with pytest.raises(ValueError, match="BATTLESEARCH_WORKERS"):
        load_settings()


def test_env_helpers(monkeypatch) -> None:
    assert parse_env_bool(" Yes ") is True
    assert parse_env_bool("0") is False
    assert parse_env_bool("perhaps") is None
    monkeypatch.setenv("SOME_INT", " 12 ")
    assert env_int("SOME_INT") == 12
    assert env_int("UNSET_INT_FOR_TEST") is None
