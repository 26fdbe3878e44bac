"""State for cross-panel selection and view history."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from bujo_engine.models.entry import EntryId


class Panel(str, Enum):
    """Selectable regions of the interface."""

    PRIMARY = "primary"
    SECONDARY = "secondary"


# Focus moves through panels in this order.
PANEL_CYCLE: tuple[Panel, ...] = (Panel.PRIMARY, Panel.SECONDARY)


class Direction(str, Enum):
    NEXT = "next"
    PREVIOUS = "previous"


class View(str, Enum):
    """Top-level destinations."""

    TODAY = "today"
    WEEK = "week"
    OVERVIEW = "overview"
    PENDING = "pending"
    QUESTIONS = "questions"
    HABITS = "habits"
    LISTS = "lists"
    GOALS = "goals"
    SEARCH = "search"
    STATS = "stats"
    SETTINGS = "settings"


HOME_VIEW = View.TODAY


@dataclass(frozen=True)
class SelectionState:
    """Which entry is selected, and in which panel.

    At most one entry is marked selected: the one in ``selected_entry_id``,
    inside ``focused_panel``. ``cursors`` only remembers where each panel was
    left so focus can return to it.
    """

    selected_entry_id: EntryId | None = None
    focused_panel: Panel | None = None
    panel_items: Mapping[Panel, tuple[EntryId, ...]] = field(default_factory=dict)
    cursors: Mapping[Panel, EntryId] = field(default_factory=dict)

    def items(self, panel: Panel) -> tuple[EntryId, ...]:
        return self.panel_items.get(panel, ())

    def is_selected(self, panel: Panel, entry_id: EntryId) -> bool:
        return (
            self.selected_entry_id is not None
            and self.focused_panel is panel
            and self.selected_entry_id == entry_id
        )


@dataclass(frozen=True)
class InterfaceState:
    """Everything the selection and navigation machine tracks."""

    view: View = HOME_VIEW
    history: tuple[View, ...] = ()
    selection: SelectionState = field(default_factory=SelectionState)

    @property
    def can_go_back(self) -> bool:
        return bool(self.history)
