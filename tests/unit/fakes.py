"""Fake implementations and builders for tests."""

from dataclasses import replace
from datetime import UTC, datetime, timedelta
from typing import Any

from bujo_engine.models.entry import Entry, EntryId, Priority, Variant

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=UTC)


def make_entry(
    entry_id: int | str,
    variant: Variant = Variant.TASK,
    *,
    content: str = "",
    priority: Priority = Priority.NONE,
    parent_id: int | str | None = None,
    days_old: int | None = 0,
    migration_count: int = 0,
) -> Entry:
    """Build an Entry created ``days_old`` days before NOW."""
    created = None if days_old is None else NOW - timedelta(days=days_old)
    return Entry(
        id=entry_id,
        variant=variant,
        content=content or f"entry {entry_id}",
        priority=priority,
        parent_id=parent_id,
        created_at=created,
        migration_count=migration_count,
    )


class FakeStore:
    """In-memory fake for the external entry store.

    Holds one flat collection, applies a few commands to it, and records all
    calls for assertions.
    """

    def __init__(self, entries: list[Entry] | None = None) -> None:
        self.entries: list[Entry] = list(entries or [])
        self.calls: list[tuple[str, EntryId, dict[str, Any]]] = []
        self.fail_commands: set[str] = set()
        self.raise_commands: set[str] = set()

    def list_entries(self, scope: str) -> list[Entry]:
        """Return a copy of the collection; the scope is ignored."""
        return list(self.entries)

    def run_command(self, command: str, entry_id: EntryId, **params: Any) -> bool:
        """Record the call and apply the commands the tests rely on."""
        self.calls.append((command, entry_id, params))
        if command in self.raise_commands:
            msg = f"FakeStore: {command} exploded"
            raise RuntimeError(msg)
        if command in self.fail_commands:
            return False

        if command == "delete":
            self.entries = [e for e in self.entries if e.id != entry_id]
        elif command == "mark_done":
            self._set_variant(entry_id, Variant.DONE)
        elif command == "cancel":
            self._set_variant(entry_id, Variant.CANCELLED)
        elif command == "uncancel":
            self._set_variant(entry_id, Variant.TASK)
        return True

    def _set_variant(self, entry_id: EntryId, variant: Variant) -> None:
        self.entries = [
            replace(e, variant=variant) if e.id == entry_id else e for e in self.entries
        ]
