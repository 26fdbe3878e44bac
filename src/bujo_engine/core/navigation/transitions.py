"""Pure transitions over InterfaceState.

Each function takes the current state and returns the next one; nothing is
mutated, so one user input maps to exactly one replacement of the state.
"""

from collections.abc import Iterable
from dataclasses import replace

from bujo_engine.core.navigation.state import (
    HOME_VIEW,
    PANEL_CYCLE,
    Direction,
    InterfaceState,
    Panel,
    SelectionState,
    View,
)
from bujo_engine.models.entry import EntryId


def _with_selection(state: InterfaceState, selection: SelectionState) -> InterfaceState:
    return replace(state, selection=selection)


def select_entry(state: InterfaceState, panel: Panel, entry_id: EntryId) -> InterfaceState:
    """Select an entry in a panel, unmarking whatever was selected elsewhere."""
    sel = state.selection
    return _with_selection(
        state,
        replace(
            sel,
            selected_entry_id=entry_id,
            focused_panel=Panel(panel),
            cursors={**sel.cursors, Panel(panel): entry_id},
        ),
    )


def clear_selection(state: InterfaceState) -> InterfaceState:
    return _with_selection(
        state, replace(state.selection, selected_entry_id=None, focused_panel=None)
    )


def cycle_focus(state: InterfaceState) -> InterfaceState:
    """Move focus to the next panel that has items.

    The target panel's remembered item is selected again if it is still
    listed, otherwise its first item. With fewer than two populated panels
    nothing changes.
    """
    sel = state.selection
    present = [panel for panel in PANEL_CYCLE if sel.items(panel)]
    if len(present) < 2:
        return state

    if sel.focused_panel in present:
        target = present[(present.index(sel.focused_panel) + 1) % len(present)]
    else:
        target = present[0]

    items = sel.items(target)
    remembered = sel.cursors.get(target)
    entry_id = remembered if remembered in items else items[0]
    return select_entry(state, target, entry_id)


def move_selection(state: InterfaceState, direction: Direction) -> InterfaceState:
    """Move to the adjacent item of the focused panel, clamped at both ends."""
    sel = state.selection
    panel = sel.focused_panel
    if panel is None:
        panel = next((p for p in PANEL_CYCLE if sel.items(p)), None)
        if panel is None:
            return state

    items = sel.items(panel)
    if not items:
        return state

    current = items.index(sel.selected_entry_id) if sel.selected_entry_id in items else -1
    if current == -1:
        index = 0
    elif Direction(direction) is Direction.NEXT:
        index = min(current + 1, len(items) - 1)
    else:
        index = max(current - 1, 0)
    return select_entry(state, panel, items[index])


def refresh_panel(
    state: InterfaceState, panel: Panel, entry_ids: Iterable[EntryId]
) -> InterfaceState:
    """Replace a panel's items after the underlying collection changed.

    A selection survives if its id is still listed; only a vanished id
    clears it.
    """
    panel = Panel(panel)
    sel = state.selection
    items = tuple(entry_ids)
    cursors = dict(sel.cursors)
    if cursors.get(panel) not in items:
        cursors.pop(panel, None)

    selected = sel.selected_entry_id
    if sel.focused_panel is panel and selected not in items:
        selected = None

    return _with_selection(
        state,
        replace(
            sel,
            selected_entry_id=selected,
            panel_items={**sel.panel_items, panel: items},
            cursors=cursors,
        ),
    )


def _switch_view(state: InterfaceState, view: View) -> InterfaceState:
    # The primary panel belongs to the view; the secondary panel persists.
    sel = state.selection
    panel_items = {p: ids for p, ids in sel.panel_items.items() if p is not Panel.PRIMARY}
    cursors = {p: i for p, i in sel.cursors.items() if p is not Panel.PRIMARY}
    selected, focused = sel.selected_entry_id, sel.focused_panel
    if focused is Panel.PRIMARY:
        selected, focused = None, None
    return InterfaceState(
        view=view,
        history=state.history,
        selection=SelectionState(
            selected_entry_id=selected,
            focused_panel=focused,
            panel_items=panel_items,
            cursors=cursors,
        ),
    )


def show_view(state: InterfaceState, view: View) -> InterfaceState:
    """Passive switch (e.g. a sidebar click): history is left alone."""
    view = View(view)
    if view is state.view:
        return state
    return _switch_view(state, view)


def navigate_to(state: InterfaceState, view: View) -> InterfaceState:
    """Explicit "go to": remember the current view, then switch."""
    view = View(view)
    if view is state.view:
        return state
    pushed = replace(state, history=(*state.history, state.view))
    return _switch_view(pushed, view)


def go_home(state: InterfaceState) -> InterfaceState:
    """Switch to the home view and forget all history."""
    if state.view is HOME_VIEW:
        return replace(state, history=())
    return _switch_view(replace(state, history=()), HOME_VIEW)


def go_back(state: InterfaceState) -> InterfaceState:
    """Return to the most recently pushed view; no-op with empty history."""
    if not state.history:
        return state
    *rest, previous = state.history
    return _switch_view(replace(state, history=tuple(rest)), previous)
