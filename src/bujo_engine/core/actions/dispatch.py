"""Narrow registry output to supplied handlers and invoke actions."""

from collections.abc import Callable, Mapping
from typing import Any

from loguru import logger

from bujo_engine.core.actions.registry import (
    ActionContext,
    ActionDefinition,
    ActionType,
    Surface,
    applicable_actions,
    is_applicable,
)
from bujo_engine.models.entry import Entry
from bujo_engine.protocols import EntryStoreProtocol

Handler = Callable[[Entry], Any]
Handlers = Mapping[ActionType, Handler]


class InapplicableActionError(RuntimeError):
    """An action was invoked on an entry it does not apply to."""


class MissingHandlerError(LookupError):
    """An action was invoked without a handler to carry it out."""


def available_actions(
    entry: Entry,
    handlers: Handlers,
    *,
    surface: Surface,
    context: ActionContext | None = None,
) -> list[ActionDefinition]:
    """Return the applicable actions on a surface that the caller can handle."""
    return [
        definition
        for definition in applicable_actions(entry, surface, context)
        if handlers.get(definition.action_type) is not None
    ]


def invoke_action(
    action_type: ActionType,
    entry: Entry,
    handlers: Handlers,
    context: ActionContext | None = None,
) -> Any:
    """Run the handler for an action, failing loudly on misuse.

    Raises:
        InapplicableActionError: The action's predicate rejects the entry.
        MissingHandlerError: No handler was supplied for the action.
    """
    action_type = ActionType(action_type)
    if not is_applicable(action_type, entry, context):
        msg = (
            f"Action {action_type.value!r} does not apply to "
            f"{entry.variant.value} entry {entry.id!r}"
        )
        raise InapplicableActionError(msg)
    handler = handlers.get(action_type)
    if handler is None:
        msg = f"No handler supplied for action {action_type.value!r}"
        raise MissingHandlerError(msg)
    logger.debug("Invoking {} on entry {}", action_type.value, entry.id)
    return handler(entry)


# Actions that need more than an entry id (a target date, a list, an answer
# text) are left for the caller to bind with its own parameters.
_STORE_COMMANDS: dict[ActionType, str] = {
    ActionType.MARK_DONE: "mark_done",
    ActionType.CANCEL: "cancel",
    ActionType.UNCANCEL: "uncancel",
    ActionType.CYCLE_PRIORITY: "cycle_priority",
    ActionType.CYCLE_TYPE: "cycle_type",
    ActionType.DELETE: "delete",
    ActionType.MOVE_TO_ROOT: "move_to_root",
}


def run_store_command(
    store: EntryStoreProtocol,
    command: str,
    entry: Entry,
    on_refresh: Callable[[], None],
    **params: Any,
) -> bool:
    """Issue one command to the store, then ask the caller to refresh.

    Failures are logged and reported as False so the interaction loop keeps
    running.
    """
    try:
        ok = store.run_command(command, entry.id, **params)
    except Exception:
        logger.opt(exception=True).warning("Command {} failed for entry {}", command, entry.id)
        return False
    if not ok:
        logger.warning("Store rejected {} for entry {}", command, entry.id)
        return False
    on_refresh()
    return True


def bind_store_handlers(
    store: EntryStoreProtocol,
    on_refresh: Callable[[], None],
) -> dict[ActionType, Handler]:
    """Build handlers that forward id-only actions to the store."""

    def make_handler(command: str) -> Handler:
        def handler(entry: Entry) -> bool:
            return run_store_command(store, command, entry, on_refresh)

        return handler

    return {action: make_handler(command) for action, command in _STORE_COMMANDS.items()}
