"""Shared test fixtures."""

import json
from pathlib import Path
from typing import Any

import pytest

from bujo_engine.core.importer.json_reader import parse_entries
from bujo_engine.models.entry import Entry

JOURNAL_EXPORT: dict[str, Any] = {
    "entries": [
        {
            "id": 1,
            "type": "event",
            "content": "Team offsite",
            "priority": "none",
            "parentId": None,
            "createdAt": "2026-03-01T09:00:00Z",
        },
        {
            "id": 2,
            "type": "task",
            "content": "Book the venue #offsite",
            "priority": "high",
            "parentId": 1,
            "createdAt": "2026-03-01T09:05:00Z",
        },
        {
            "id": 3,
            "type": "note",
            "content": "Budget is tight",
            "priority": "",
            "parentId": 2,
            "createdAt": "2026-03-01T09:06:00Z",
        },
        {
            "id": 4,
            "type": "question",
            "content": "Who owns catering?",
            "parentId": None,
            "createdAt": "2026-03-08T10:00:00Z",
        },
        {
            "id": 5,
            "type": "done",
            "content": "Send invites",
            "priority": "low",
            "parentId": None,
            "createdAt": "2026-02-20T10:00:00Z",
        },
        {
            "id": 6,
            "type": "task",
            "content": "Renew passport",
            "priority": "medium",
            "parentId": None,
            "createdAt": "2026-02-01T10:00:00+00:00",
            "migrationCount": 2,
        },
    ]
}


@pytest.fixture
def journal_entries() -> list[Entry]:
    """A small day collection with nesting, mixed variants and priorities."""
    return parse_entries(JOURNAL_EXPORT)


@pytest.fixture
def entries_file(tmp_path: Path) -> Path:
    """The JOURNAL_EXPORT collection written to disk."""
    path = tmp_path / "entries.json"
    path.write_text(json.dumps(JOURNAL_EXPORT))
    return path
