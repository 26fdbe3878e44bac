"""Which entry actions are legal for a given entry and context.

Every predicate reads only the entry's variant and the
``has_parent`` context flag. The registry and both orderings are fixed at
import time.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from bujo_engine.core.tree.hierarchy import Hierarchy
from bujo_engine.models.entry import Entry, Variant, traits_for


class ActionType(str, Enum):
    """User-invocable operations on an entry."""

    ANSWER = "answer"
    MARK_DONE = "markDone"
    CANCEL = "cancel"
    UNCANCEL = "uncancel"
    CYCLE_PRIORITY = "cyclePriority"
    CYCLE_TYPE = "cycleType"
    MIGRATE = "migrate"
    EDIT = "edit"
    DELETE = "delete"
    ADD_CHILD = "addChild"
    MOVE_TO_ROOT = "moveToRoot"
    MOVE_TO_LIST = "moveToList"
    NAVIGATE_TO_ENTRY = "navigateToEntry"


class Surface(str, Enum):
    """Where a list of actions is presented."""

    BAR = "bar"
    MENU = "menu"


@dataclass(frozen=True)
class ActionContext:
    """Facts about an entry's surroundings that some predicates need."""

    has_parent: bool = False


Predicate = Callable[[Entry, ActionContext], bool]


@dataclass(frozen=True)
class ActionDefinition:
    """One row of the action registry."""

    action_type: ActionType
    label: str
    title: str
    applies_to: Predicate
    show_in_bar: bool = True
    show_in_menu: bool = True

    def shown_in(self, surface: Surface) -> bool:
        return self.show_in_bar if surface is Surface.BAR else self.show_in_menu


_CYCLEABLE_TYPES = frozenset({Variant.TASK, Variant.NOTE, Variant.EVENT, Variant.QUESTION})


def _variant(entry: Entry) -> Variant:
    traits_for(entry.variant)
    return entry.variant


def _any_variant(entry: Entry, context: ActionContext) -> bool:
    _variant(entry)
    return True


_DEFINITIONS = (
    ActionDefinition(
        ActionType.ANSWER,
        "Answer",
        "Answer question",
        lambda entry, ctx: _variant(entry) is Variant.QUESTION,
    ),
    ActionDefinition(
        ActionType.MARK_DONE,
        "Mark done",
        "Mark as done",
        lambda entry, ctx: _variant(entry) is Variant.TASK,
    ),
    ActionDefinition(
        ActionType.CANCEL,
        "Cancel",
        "Cancel entry",
        lambda entry, ctx: _variant(entry) is not Variant.CANCELLED,
    ),
    ActionDefinition(
        ActionType.UNCANCEL,
        "Uncancel",
        "Uncancel entry",
        lambda entry, ctx: _variant(entry) is Variant.CANCELLED,
    ),
    ActionDefinition(
        ActionType.CYCLE_PRIORITY,
        "Cycle priority",
        "Cycle priority",
        _any_variant,
    ),
    ActionDefinition(
        ActionType.CYCLE_TYPE,
        "Change type",
        "Change type",
        lambda entry, ctx: _variant(entry) in _CYCLEABLE_TYPES,
    ),
    ActionDefinition(
        ActionType.MIGRATE,
        "Migrate",
        "Migrate entry",
        lambda entry, ctx: _variant(entry) is Variant.TASK,
    ),
    ActionDefinition(
        ActionType.EDIT,
        "Edit",
        "Edit entry",
        lambda entry, ctx: _variant(entry) is not Variant.CANCELLED,
    ),
    ActionDefinition(
        ActionType.DELETE,
        "Delete",
        "Delete entry",
        _any_variant,
    ),
    ActionDefinition(
        ActionType.ADD_CHILD,
        "Add child",
        "Add child entry",
        lambda entry, ctx: _variant(entry) is not Variant.QUESTION,
        show_in_bar=False,
    ),
    ActionDefinition(
        ActionType.MOVE_TO_ROOT,
        "Move to root",
        "Move to root level",
        lambda entry, ctx: _any_variant(entry, ctx) and ctx.has_parent,
        show_in_bar=False,
    ),
    ActionDefinition(
        ActionType.MOVE_TO_LIST,
        "Move to list",
        "Move to list",
        lambda entry, ctx: _variant(entry) is Variant.TASK,
    ),
    ActionDefinition(
        ActionType.NAVIGATE_TO_ENTRY,
        "Go to date",
        "Go to date",
        _any_variant,
    ),
)

ACTION_REGISTRY: MappingProxyType[ActionType, ActionDefinition] = MappingProxyType(
    {definition.action_type: definition for definition in _DEFINITIONS}
)

BAR_ACTION_ORDER: tuple[ActionType, ...] = (
    ActionType.ANSWER,
    ActionType.MARK_DONE,
    ActionType.CANCEL,
    ActionType.UNCANCEL,
    ActionType.CYCLE_PRIORITY,
    ActionType.CYCLE_TYPE,
    ActionType.MIGRATE,
    ActionType.MOVE_TO_LIST,
    ActionType.NAVIGATE_TO_ENTRY,
    ActionType.EDIT,
    ActionType.DELETE,
)

MENU_ACTION_ORDER: tuple[ActionType, ...] = (
    ActionType.ANSWER,
    ActionType.MARK_DONE,
    ActionType.CANCEL,
    ActionType.UNCANCEL,
    ActionType.MIGRATE,
    ActionType.MOVE_TO_LIST,
    ActionType.NAVIGATE_TO_ENTRY,
    ActionType.CYCLE_TYPE,
    ActionType.CYCLE_PRIORITY,
    ActionType.MOVE_TO_ROOT,
    ActionType.ADD_CHILD,
    ActionType.EDIT,
    ActionType.DELETE,
)

_ORDERS = {Surface.BAR: BAR_ACTION_ORDER, Surface.MENU: MENU_ACTION_ORDER}


def context_for(entry: Entry, hierarchy: Hierarchy) -> ActionContext:
    """Derive the action context of an entry from its hierarchy."""
    return ActionContext(has_parent=hierarchy.has_parent(entry.id))


def is_applicable(
    action_type: ActionType, entry: Entry, context: ActionContext | None = None
) -> bool:
    """Return True if the action is legal for this entry."""
    definition = ACTION_REGISTRY[ActionType(action_type)]
    return definition.applies_to(entry, context or ActionContext())


def applicable_actions(
    entry: Entry, surface: Surface, context: ActionContext | None = None
) -> list[ActionDefinition]:
    """Return the actions shown on a surface for this entry, in surface order."""
    context = context or ActionContext()
    result = []
    for action_type in _ORDERS[surface]:
        definition = ACTION_REGISTRY[action_type]
        if definition.shown_in(surface) and definition.applies_to(entry, context):
            result.append(definition)
    return result


def applicable_bar_actions(
    entry: Entry, context: ActionContext | None = None
) -> list[ActionDefinition]:
    """Actions for the compact action bar."""
    return applicable_actions(entry, Surface.BAR, context)


def applicable_menu_actions(
    entry: Entry, context: ActionContext | None = None
) -> list[ActionDefinition]:
    """Actions for the full context menu."""
    return applicable_actions(entry, Surface.MENU, context)
