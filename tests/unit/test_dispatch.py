"""Tests for handler narrowing, action invocation and store binding."""

from unittest.mock import MagicMock

import pytest

from bujo_engine.core.actions.dispatch import (
    InapplicableActionError,
    MissingHandlerError,
    available_actions,
    bind_store_handlers,
    invoke_action,
)
from bujo_engine.core.actions.registry import ActionType, Surface, applicable_actions
from bujo_engine.models.entry import Variant
from tests.unit.fakes import FakeStore, make_entry


def test_available_actions_drops_actions_without_handlers() -> None:
    task = make_entry(1)
    handlers = {ActionType.MARK_DONE: MagicMock(), ActionType.DELETE: MagicMock()}
    actions = available_actions(task, handlers, surface=Surface.BAR)
    assert [a.action_type for a in actions] == [ActionType.MARK_DONE, ActionType.DELETE]


def test_available_actions_is_subset_of_registry_output() -> None:
    task = make_entry(1)
    handlers = {a: MagicMock() for a in ActionType}
    assert available_actions(task, handlers, surface=Surface.MENU) == applicable_actions(
        task, Surface.MENU
    )


def test_available_actions_never_adds_inapplicable_actions() -> None:
    question = make_entry(1, Variant.QUESTION)
    handlers = {ActionType.MIGRATE: MagicMock()}
    assert available_actions(question, handlers, surface=Surface.BAR) == []


def test_invoke_action_runs_handler() -> None:
    task = make_entry(1)
    handler = MagicMock(return_value="ok")
    assert invoke_action(ActionType.MARK_DONE, task, {ActionType.MARK_DONE: handler}) == "ok"
    handler.assert_called_once_with(task)


def test_invoke_inapplicable_action_raises() -> None:
    cancelled = make_entry(1, Variant.CANCELLED)
    handler = MagicMock()
    with pytest.raises(InapplicableActionError, match="cancel"):
        invoke_action(ActionType.CANCEL, cancelled, {ActionType.CANCEL: handler})
    handler.assert_not_called()


def test_invoke_without_handler_raises() -> None:
    with pytest.raises(MissingHandlerError, match="delete"):
        invoke_action(ActionType.DELETE, make_entry(1), {})


def test_store_handlers_run_command_and_refresh() -> None:
    task = make_entry(1)
    store = FakeStore([task])
    on_refresh = MagicMock()
    handlers = bind_store_handlers(store, on_refresh)

    assert invoke_action(ActionType.MARK_DONE, task, handlers) is True
    assert store.calls == [("mark_done", 1, {})]
    assert store.entries[0].variant is Variant.DONE
    on_refresh.assert_called_once_with()


def test_store_handlers_leave_parameterised_actions_to_caller() -> None:
    handlers = bind_store_handlers(FakeStore(), MagicMock())
    assert ActionType.MIGRATE not in handlers
    assert ActionType.ANSWER not in handlers
    assert ActionType.MOVE_TO_LIST not in handlers


def test_rejected_command_skips_refresh() -> None:
    task = make_entry(1)
    store = FakeStore([task])
    store.fail_commands.add("delete")
    on_refresh = MagicMock()

    assert invoke_action(ActionType.DELETE, task, bind_store_handlers(store, on_refresh)) is False
    assert store.entries == [task]
    on_refresh.assert_not_called()


def test_failing_command_is_logged_not_raised() -> None:
    task = make_entry(1)
    store = FakeStore([task])
    store.raise_commands.add("cancel")
    on_refresh = MagicMock()

    assert invoke_action(ActionType.CANCEL, task, bind_store_handlers(store, on_refresh)) is False
    on_refresh.assert_not_called()
