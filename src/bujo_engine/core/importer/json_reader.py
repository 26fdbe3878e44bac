"""Parse exported entry collections into domain models."""

import json
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

from bujo_engine.models.entry import Entry, parse_priority, parse_variant

_ID_TYPES = (int, str)


def _check_type(raw: dict[str, Any], key: str, expected: tuple[type, ...]) -> Any:
    """Return raw[key] (None when absent), rejecting values of the wrong type."""
    value = raw.get(key)
    # bool is an int subclass, but never a valid id or count.
    if value is None or (isinstance(value, expected) and not isinstance(value, bool)):
        return value
    names = " or ".join(t.__name__ for t in expected)
    msg = f"Entry field {key!r} must be {names}, got {type(value).__name__}: {raw!r}"
    raise ValueError(msg)


def _parse_datetime(raw: dict[str, Any], key: str) -> datetime | None:
    value = _check_type(raw, key, (str,))
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        msg = f"Entry field {key!r} is not an ISO 8601 timestamp: {value!r}"
        raise ValueError(msg) from None
    return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=UTC)


def _parse_date(raw: dict[str, Any], key: str) -> date | None:
    value = _check_type(raw, key, (str,))
    if not value:
        return None
    try:
        return date.fromisoformat(value.split("T")[0])
    except ValueError:
        msg = f"Entry field {key!r} is not an ISO 8601 date: {value!r}"
        raise ValueError(msg) from None


def parse_entry(raw: dict[str, Any]) -> Entry:
    """Parse one raw entry dict (camelCase keys) into an Entry.

    Raises:
        UnknownVariantError: The entry's type is not a known variant.
        ValueError: A field is missing, has the wrong type, or is malformed.
    """
    if not isinstance(raw, dict):
        msg = f"Entry must be a JSON object, got {type(raw).__name__}: {raw!r}"
        raise ValueError(msg)
    for key in ("id", "type"):
        if raw.get(key) is None:
            msg = f"Entry is missing required field {key!r}: {raw!r}"
            raise ValueError(msg)

    content = raw.get("content", "")
    if not isinstance(content, str):
        msg = f"Entry field 'content' must be str, got {type(content).__name__}: {raw!r}"
        raise ValueError(msg)

    return Entry(
        id=_check_type(raw, "id", _ID_TYPES),
        variant=parse_variant(_check_type(raw, "type", (str,))),
        content=content,
        priority=parse_priority(_check_type(raw, "priority", (str,))),
        parent_id=_check_type(raw, "parentId", _ID_TYPES),
        created_at=_parse_datetime(raw, "createdAt"),
        scheduled_date=_parse_date(raw, "scheduledDate"),
        migration_count=_check_type(raw, "migrationCount", (int,)) or 0,
    )


def parse_entries(data: dict[str, Any] | list[dict[str, Any]]) -> list[Entry]:
    """Parse an exported collection, either ``{"entries": [...]}`` or a bare list.

    Returns:
        Entries in the order they appear in the export.
    """
    raw_entries = data.get("entries") if isinstance(data, dict) else data
    if not isinstance(raw_entries, list):
        msg = 'Export must be a list of entries or an object with an "entries" list'
        raise ValueError(msg)
    return [parse_entry(raw) for raw in raw_entries]


def load_entries(path: Path) -> list[Entry]:
    """Read and parse an exported collection from disk."""
    return parse_entries(json.loads(path.read_text(encoding="utf-8")))
