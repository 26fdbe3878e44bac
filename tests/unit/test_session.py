"""Tests for the JournalSession state holder."""

from bujo_engine.core.navigation.session import JournalSession
from bujo_engine.core.navigation.state import HOME_VIEW, Direction, Panel, View


def test_session_applies_one_transition_per_call() -> None:
    session = JournalSession()
    session.refresh_panel(Panel.PRIMARY, ["a", "b"])
    session.refresh_panel(Panel.SECONDARY, ["x"])

    session.select_entry(Panel.PRIMARY, "a")
    session.move_selection(Direction.NEXT)
    assert session.selected_entry_id == "b"

    session.cycle_focus()
    assert session.focused_panel is Panel.SECONDARY
    assert session.is_selected(Panel.SECONDARY, "x")
    assert not session.is_selected(Panel.PRIMARY, "b")

    session.clear_selection()
    assert session.selected_entry_id is None


def test_session_history_accessors() -> None:
    session = JournalSession()
    assert not session.can_go_back

    session.navigate_to(View.WEEK)
    assert session.view is View.WEEK
    assert session.can_go_back

    session.show_view(View.STATS)
    session.go_back()
    assert session.view is HOME_VIEW
    assert not session.can_go_back


def test_session_go_home() -> None:
    session = JournalSession()
    session.navigate_to(View.WEEK)
    session.navigate_to(View.PENDING)
    state = session.go_home()
    assert state is session.state
    assert session.view is HOME_VIEW
    assert not session.can_go_back


def test_go_back_on_empty_history_keeps_state() -> None:
    session = JournalSession()
    before = session.state
    assert session.go_back() is before
