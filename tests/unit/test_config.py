"""Tests for entries file resolution."""

from pathlib import Path

import pytest

from bujo_engine import config


def test_env_override_wins(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    target = tmp_path / "mine.json"
    monkeypatch.setenv(config.ENTRIES_FILE_ENV, str(target))
    assert config.resolve_entries_file() == target


def test_first_existing_default_is_used(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    first, second = tmp_path / "a.json", tmp_path / "b.json"
    second.write_text("[]")
    monkeypatch.delenv(config.ENTRIES_FILE_ENV, raising=False)
    monkeypatch.setattr(config, "ENTRIES_FILES", [first, second])
    assert config.resolve_entries_file() == second


def test_falls_back_to_first_default(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    first, second = tmp_path / "a.json", tmp_path / "b.json"
    monkeypatch.delenv(config.ENTRIES_FILE_ENV, raising=False)
    monkeypatch.setattr(config, "ENTRIES_FILES", [first, second])
    assert config.resolve_entries_file() == first
