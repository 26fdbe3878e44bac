"""Configuration constants for bujo-engine."""

import os
from pathlib import Path

# Environment variable naming an exported entries file. Takes precedence.
ENTRIES_FILE_ENV = "BUJO_ENTRIES_FILE"

# Exported entries file. First file found is used.
ENTRIES_FILES: list[Path] = [
    Path("~/.local/share/bujo/entries.json").expanduser(),
    Path("~/.bujo/entries.json").expanduser(),
]


def resolve_entries_file() -> Path:
    """Return the first existing entries file, or the first default location."""
    override = os.environ.get(ENTRIES_FILE_ENV)
    if override:
        return Path(override).expanduser()
    for candidate in ENTRIES_FILES:
        if candidate.is_file():
            return candidate
    return ENTRIES_FILES[0]
