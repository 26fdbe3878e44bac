"""Build parent/child trees from a flat entry collection."""

from collections import deque
from collections.abc import Iterable, Sequence

from loguru import logger

from bujo_engine.models.entry import Entry, EntryId, TreeNode


class Hierarchy:
    """Resolved parent links for one entry collection.

    Parent references are resolved through an id index. A reference that is
    missing, points at the entry itself, or closes a cycle is treated as
    unresolved, which makes the entry a root. Within each cycle the member
    that comes first in the input is the one cut loose.
    """

    def __init__(self, entries: Iterable[Entry]) -> None:
        self.entries: tuple[Entry, ...] = tuple(entries)
        self._by_id: dict[EntryId, Entry] = {}
        for entry in self.entries:
            self._by_id.setdefault(entry.id, entry)

        self._position = {id(entry): i for i, entry in enumerate(self.entries)}
        self._parent: dict[EntryId, EntryId | None] = {}
        for entry in self.entries:
            parent_id = entry.parent_id
            if parent_id is None or parent_id == entry.id or parent_id not in self._by_id:
                self._parent[entry.id] = None
            else:
                self._parent[entry.id] = parent_id

        self._break_cycles()

        self._children: dict[EntryId | None, list[Entry]] = {}
        for entry in self.entries:
            self._children.setdefault(self._parent[entry.id], []).append(entry)

        self.roots: list[TreeNode] = self._materialize()

    def _break_cycles(self) -> None:
        # Walk each parent chain once; a chain that revisits one of its own
        # members without reaching a root is a cycle.
        settled: set[EntryId] = set()
        for entry in self.entries:
            chain: list[EntryId] = []
            on_chain: set[EntryId] = set()
            current: EntryId | None = entry.id
            while current is not None and current not in settled:
                if current in on_chain:
                    cycle = chain[chain.index(current) :]
                    breaker = min(cycle, key=lambda i: self._position[id(self._by_id[i])])
                    logger.debug("Parent cycle {} broken at {}", cycle, breaker)
                    self._parent[breaker] = None
                    break
                chain.append(current)
                on_chain.add(current)
                current = self._parent[current]
            settled.update(chain)

    def _materialize(self) -> list[TreeNode]:
        roots: list[TreeNode] = []
        visited: set[int] = set()
        todo: deque[tuple[Entry, TreeNode | None]] = deque(
            (entry, None) for entry in self._children.get(None, [])
        )
        while todo:
            entry, parent_node = todo.popleft()
            if id(entry) in visited:
                continue
            visited.add(id(entry))

            node = TreeNode(entry=entry)
            if parent_node is None:
                roots.append(node)
            else:
                parent_node.children.append(node)

            # Duplicate ids share one child bucket; only the indexed entry owns it.
            if self._by_id[entry.id] is entry:
                for child in self._children.get(entry.id, []):
                    todo.append((child, node))

        for entry in self.entries:
            if id(entry) not in visited:
                # Only reachable with duplicate ids: keep the entry rather than drop it.
                visited.add(id(entry))
                roots.append(TreeNode(entry=entry))
        return roots

    def get(self, entry_id: EntryId) -> Entry | None:
        return self._by_id.get(entry_id)

    def parent_of(self, entry_id: EntryId) -> Entry | None:
        """Return the resolved parent entry, or None for roots and unknown ids."""
        parent_id = self._parent.get(entry_id)
        return None if parent_id is None else self._by_id[parent_id]

    def has_parent(self, entry_id: EntryId) -> bool:
        return self._parent.get(entry_id) is not None

    def children_of(self, entry_id: EntryId) -> tuple[Entry, ...]:
        if entry_id not in self._by_id:
            return ()
        return tuple(self._children.get(entry_id, ()))

    def child_count(self, entry_id: EntryId) -> int:
        return len(self.children_of(entry_id))

    def has_children(self, entry_id: EntryId) -> bool:
        return self.child_count(entry_id) > 0

    def ancestor_path(self, entry_id: EntryId) -> tuple[Entry, ...]:
        """Return the chain from the root down to the entry, inclusive."""
        path: list[Entry] = []
        current = self._by_id.get(entry_id)
        while current is not None:
            path.append(current)
            current = self.parent_of(current.id)
        path.reverse()
        return tuple(path)

    def depth(self, entry_id: EntryId) -> int:
        """Number of resolved ancestors above the entry (roots are depth 0)."""
        return max(len(self.ancestor_path(entry_id)) - 1, 0)

    def is_descendant_of(self, candidate_id: EntryId, ancestor_id: EntryId) -> bool:
        """True if ancestor_id lies strictly above candidate_id."""
        current = self._parent.get(candidate_id)
        while current is not None:
            if current == ancestor_id:
                return True
            current = self._parent[current]
        return False


def build_hierarchy(entries: Iterable[Entry]) -> Hierarchy:
    """Index a flat entry collection and resolve its parent links."""
    return Hierarchy(entries)


def build_tree(entries: Iterable[Entry]) -> list[TreeNode]:
    """Turn a flat entry collection into a list of root TreeNodes.

    Args:
        entries: Entries from one logical scope, in display order.

    Returns:
        Root nodes in input order, each holding its children in input order.
    """
    return Hierarchy(entries).roots


def flatten(nodes: Sequence[TreeNode]) -> list[Entry]:
    """Return the entries of a forest in pre-order."""
    result: list[Entry] = []
    stack = list(reversed(nodes))
    while stack:
        node = stack.pop()
        result.append(node.entry)
        stack.extend(reversed(node.children))
    return result
