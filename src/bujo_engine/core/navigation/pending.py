"""Pending-tasks panel with snapshot damping.

The panel captures its list when it is expanded. Marking an item done,
cancelling or migrating it from the panel only changes how that item is
shown; it stays in place until the panel is collapsed and expanded again.
"""

from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime

from loguru import logger

from bujo_engine.core.attention.scoring import rank
from bujo_engine.core.tree.hierarchy import build_hierarchy
from bujo_engine.models.entry import Entry, EntryId, Variant


class PendingPanel:
    """A collapsible list of open tasks ranked by attention."""

    def __init__(self) -> None:
        self._snapshot: list[Entry] = []
        self._overrides: dict[EntryId, Variant] = {}
        self.expanded = False

    def expand(self, entries: Iterable[Entry], now: datetime) -> list[Entry]:
        """Show the panel with a fresh snapshot of the open tasks in entries."""
        collection = list(entries)
        hierarchy = build_hierarchy(collection)
        tasks = [e for e in collection if e.variant is Variant.TASK]
        self._snapshot = rank(tasks, now, hierarchy)
        self._overrides = {}
        self.expanded = True
        logger.debug("Pending panel expanded with {} tasks", len(self._snapshot))
        return self.visible

    def collapse(self) -> None:
        self._snapshot = []
        self._overrides = {}
        self.expanded = False

    def record_status(self, entry_id: EntryId, variant: Variant) -> None:
        """Reflect a status change made from this panel without removing the item."""
        if not any(e.id == entry_id for e in self._snapshot):
            msg = f"Entry {entry_id!r} is not in the pending snapshot"
            raise KeyError(msg)
        self._overrides[entry_id] = Variant(variant)

    def sync(self, entries: Iterable[Entry]) -> list[Entry]:
        """Pick up fresh data for snapshot items without adding any.

        Items missing from entries were deleted and are dropped, unless their
        status was changed from this panel: those stay until the next expand.
        """
        latest = {e.id: e for e in entries}
        kept = []
        for entry in self._snapshot:
            if entry.id in latest:
                kept.append(latest[entry.id])
            elif entry.id in self._overrides:
                kept.append(entry)
            else:
                logger.debug("Pending entry {} vanished from the store", entry.id)
        self._snapshot = kept
        return self.visible

    @property
    def visible(self) -> list[Entry]:
        if not self.expanded:
            return []
        return [
            replace(e, variant=self._overrides[e.id]) if e.id in self._overrides else e
            for e in self._snapshot
        ]

    @property
    def entry_ids(self) -> tuple[EntryId, ...]:
        return tuple(e.id for e in self.visible)
