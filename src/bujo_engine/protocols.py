"""Protocols for the external entry store."""

from typing import Any, Protocol, runtime_checkable

from bujo_engine.models.entry import Entry, EntryId


@runtime_checkable
class EntryStoreProtocol(Protocol):
    """Protocol for the store that owns the canonical entry collection."""

    def list_entries(self, scope: str) -> list[Entry]:
        """Return the current flat collection for a scope (day, search, path...)."""
        ...

    def run_command(self, command: str, entry_id: EntryId, **params: Any) -> bool:
        """Apply a command to one entry and report success."""
        ...
