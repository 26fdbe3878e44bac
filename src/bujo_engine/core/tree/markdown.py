"""Render entry trees as markdown."""

import io
from collections.abc import Sequence

from bujo_engine.models.entry import TreeNode


def render_tree_as_markdown(
    nodes: Sequence[TreeNode],
    *,
    max_depth: int | None = None,
    highlight_id: object | None = None,
) -> str:
    """Render a forest of entries as indented markdown.

    Args:
        nodes: Root nodes, as returned by build_tree.
        max_depth: Max levels below the roots to include (None = unlimited).
        highlight_id: Entry id to emphasise, e.g. the current selection.

    Returns:
        Markdown string with bullet-list hierarchy.
    """
    out = io.StringIO()
    stack: list[tuple[TreeNode, int]] = [(node, 0) for node in reversed(nodes)]
    while stack:
        node, depth = stack.pop()
        entry = node.entry
        indent = "    " * depth

        prefix = f"- {entry.symbol} "
        if entry.priority.symbol:
            prefix += f"{entry.priority.symbol} "

        lines = entry.content.split("\n") or [""]
        first = lines[0]
        if highlight_id is not None and entry.id == highlight_id:
            first = f"**{first}**"
        out.write(f"{indent}{prefix}{first}\n")
        for line in lines[1:]:
            out.write(f"{indent}  {line}\n")

        if max_depth is not None and depth >= max_depth:
            # Truncation indicator when children are cut off by max_depth
            if node.children:
                count = len(node.children)
                noun = "child" if count == 1 else "children"
                child_indent = "    " * (depth + 1)
                out.write(f"{child_indent}- ... ({count} more {noun}, id={entry.id})\n")
            continue

        stack.extend((child, depth + 1) for child in reversed(node.children))

    return out.getvalue()
