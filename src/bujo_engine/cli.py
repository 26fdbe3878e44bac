"""CLI for inspecting an exported entry collection (tree, attention, actions)."""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from bujo_engine.config import resolve_entries_file
from bujo_engine.core.actions.registry import (
    applicable_bar_actions,
    applicable_menu_actions,
    context_for,
)
from bujo_engine.core.attention.scoring import SCORED_VARIANTS, needs_attention, rank_scored
from bujo_engine.core.importer.json_reader import load_entries
from bujo_engine.core.tree.hierarchy import Hierarchy, build_hierarchy
from bujo_engine.core.tree.markdown import render_tree_as_markdown
from bujo_engine.logging_config import configure_logging
from bujo_engine.models.entry import Entry, UnknownVariantError

app = typer.Typer(help="Bullet-journal engine: inspect trees, attention and actions.")

EntriesFile = Annotated[
    Path | None,
    typer.Option("--file", "-f", help="Exported entries JSON (default: resolved location)"),
]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _load(path: Path | None) -> Hierarchy:
    """Load and index the entries file, exiting on any problem."""
    src = path or resolve_entries_file()
    if not src.exists():
        logger.error("Entries file not found: {}", src)
        raise typer.Exit(1)
    try:
        entries = load_entries(src)
    except (UnknownVariantError, ValueError, KeyError) as e:
        logger.error("Cannot read {}: {}", src, e)
        raise typer.Exit(1) from None
    logger.debug("Loaded {} entries from {}", len(entries), src)
    return build_hierarchy(entries)


def _find(hierarchy: Hierarchy, entry_id: str) -> Entry:
    """Resolve a command-line id, which may name a numeric or string id."""
    entry = hierarchy.get(entry_id)
    if entry is None and entry_id.lstrip("-").isdigit():
        entry = hierarchy.get(int(entry_id))
    if entry is None:
        typer.echo(f"Entry '{entry_id}' not found.")
        raise typer.Exit(1)
    return entry


def _parse_now(now: str | None) -> datetime:
    if not now:
        return datetime.now(UTC)
    try:
        parsed = datetime.fromisoformat(now)
    except ValueError:
        logger.error("Invalid --now value: {}", now)
        raise typer.Exit(1) from None
    return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=UTC)


@app.command()
def tree(
    file: EntriesFile = None,
    max_depth: Annotated[
        int | None,
        typer.Option("--max-depth", "-m", help="Max depth levels to render"),
    ] = None,
) -> None:
    """Render the entry hierarchy as markdown."""
    hierarchy = _load(file)
    md = render_tree_as_markdown(hierarchy.roots, max_depth=max_depth)
    typer.echo(md if md else "No entries.")


@app.command()
def attention(
    file: EntriesFile = None,
    now: Annotated[
        str | None,
        typer.Option("--now", help="Reference time (ISO 8601), default: current time"),
    ] = None,
    show_all: bool = typer.Option(False, "--all", "-a", help="Show every open item"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Show the open tasks and questions that most need attention."""
    hierarchy = _load(file)
    reference = _parse_now(now)

    if show_all:
        candidates = [e for e in hierarchy.entries if e.variant in SCORED_VARIANTS]
        ranked = rank_scored(candidates, reference, hierarchy)
        scored = [(item.entry, item.attention) for item in ranked]
        truncated, total = False, len(scored)
    else:
        cut = needs_attention(list(hierarchy.entries), reference)
        scored = [(item.entry, item.attention) for item in cut.scored]
        truncated, total = cut.truncated, cut.total

    if output_json:
        data = {
            "results": [
                {
                    "id": e.id,
                    "type": e.variant.value,
                    "content": e.content,
                    "score": s.score,
                    "indicators": sorted(i.value for i in s.indicators),
                    "daysOld": s.days_old,
                }
                for e, s in scored
            ],
            "truncated": truncated,
            "total": total,
        }
        typer.echo(json.dumps(data, indent=2))
        return

    typer.echo(f"{total} items need attention (showing {len(scored)}):\n")
    for e, s in scored:
        badges = ", ".join(sorted(i.value for i in s.indicators))
        typer.echo(f"  {e.symbol} {e.content[:80]}")
        typer.echo(f"    score={s.score}  days={s.days_old}  id={e.id}  {badges}".rstrip())
    if truncated:
        typer.echo("\n  ... use --all to show every open item")


@app.command()
def actions(
    entry_id: str = typer.Argument(..., help="Entry ID"),
    file: EntriesFile = None,
    menu: bool = typer.Option(False, "--menu", help="Full menu instead of the compact bar"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List the actions that apply to an entry, in presentation order."""
    hierarchy = _load(file)
    entry = _find(hierarchy, entry_id)
    context = context_for(entry, hierarchy)
    found = (
        applicable_menu_actions(entry, context)
        if menu
        else applicable_bar_actions(entry, context)
    )

    if output_json:
        typer.echo(json.dumps([d.action_type.value for d in found], indent=2))
        return
    for definition in found:
        typer.echo(f"  {definition.action_type.value:<16} {definition.title}")


@app.command()
def context(
    entry_id: str = typer.Argument(..., help="Entry ID"),
    file: EntriesFile = None,
) -> None:
    """Show an entry's ancestor chain, root first."""
    hierarchy = _load(file)
    entry = _find(hierarchy, entry_id)
    path = hierarchy.ancestor_path(entry.id)
    for depth, ancestor in enumerate(path):
        marker = " <" if ancestor.id == entry.id else ""
        typer.echo(f"{'    ' * depth}{ancestor.symbol} {ancestor.content}{marker}")
    if len(path) == 1:
        typer.echo("No parent context")
