"""The process-lifetime holder of selection and navigation state."""

from collections.abc import Iterable

from loguru import logger

from bujo_engine.core.navigation import transitions
from bujo_engine.core.navigation.state import Direction, InterfaceState, Panel, View
from bujo_engine.models.entry import EntryId


class JournalSession:
    """Owns one InterfaceState and applies one transition per user input."""

    def __init__(self, state: InterfaceState | None = None) -> None:
        self._state = state or InterfaceState()

    @property
    def state(self) -> InterfaceState:
        return self._state

    def _apply(self, name: str, new_state: InterfaceState) -> InterfaceState:
        if new_state is not self._state:
            logger.debug(
                "{}: view={} selected={} panel={}",
                name,
                new_state.view.value,
                new_state.selection.selected_entry_id,
                new_state.selection.focused_panel,
            )
        self._state = new_state
        return new_state

    # --- Selection ---

    def select_entry(self, panel: Panel, entry_id: EntryId) -> InterfaceState:
        return self._apply("select_entry", transitions.select_entry(self._state, panel, entry_id))

    def clear_selection(self) -> InterfaceState:
        return self._apply("clear_selection", transitions.clear_selection(self._state))

    def cycle_focus(self) -> InterfaceState:
        return self._apply("cycle_focus", transitions.cycle_focus(self._state))

    def move_selection(self, direction: Direction) -> InterfaceState:
        return self._apply(
            "move_selection", transitions.move_selection(self._state, direction)
        )

    def refresh_panel(self, panel: Panel, entry_ids: Iterable[EntryId]) -> InterfaceState:
        return self._apply(
            "refresh_panel", transitions.refresh_panel(self._state, panel, entry_ids)
        )

    # --- Navigation ---

    def show_view(self, view: View) -> InterfaceState:
        return self._apply("show_view", transitions.show_view(self._state, view))

    def navigate_to(self, view: View) -> InterfaceState:
        return self._apply("navigate_to", transitions.navigate_to(self._state, view))

    def go_home(self) -> InterfaceState:
        return self._apply("go_home", transitions.go_home(self._state))

    def go_back(self) -> InterfaceState:
        return self._apply("go_back", transitions.go_back(self._state))

    # --- Read accessors ---

    @property
    def selected_entry_id(self) -> EntryId | None:
        return self._state.selection.selected_entry_id

    @property
    def focused_panel(self) -> Panel | None:
        return self._state.selection.focused_panel

    @property
    def view(self) -> View:
        return self._state.view

    @property
    def can_go_back(self) -> bool:
        return self._state.can_go_back

    def is_selected(self, panel: Panel, entry_id: EntryId) -> bool:
        return self._state.selection.is_selected(panel, entry_id)
