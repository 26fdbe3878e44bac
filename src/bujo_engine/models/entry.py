"""Domain models for journal entries."""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

EntryId = int | str


class UnknownVariantError(ValueError):
    """Raised when an entry variant is not one of the known variants."""


class Variant(str, Enum):
    """The closed set of entry variants."""

    TASK = "task"
    NOTE = "note"
    EVENT = "event"
    DONE = "done"
    MIGRATED = "migrated"
    CANCELLED = "cancelled"
    QUESTION = "question"
    ANSWERED = "answered"
    ANSWER = "answer"
    MOVED_TO_LIST = "movedToList"


class Priority(str, Enum):
    """Entry priority levels, lowest first."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    def cycled(self) -> "Priority":
        """Return the next priority in the none -> low -> medium -> high cycle."""
        return _PRIORITY_CYCLE[self]

    @property
    def symbol(self) -> str:
        return PRIORITY_SYMBOLS[self]


class Indicator(str, Enum):
    """Qualitative reasons an entry needs attention."""

    OVERDUE = "overdue"
    PRIORITY = "priority"
    AGING = "aging"
    MIGRATED = "migrated"


_PRIORITY_CYCLE: dict[Priority, Priority] = {
    Priority.NONE: Priority.LOW,
    Priority.LOW: Priority.MEDIUM,
    Priority.MEDIUM: Priority.HIGH,
    Priority.HIGH: Priority.NONE,
}

PRIORITY_SYMBOLS: dict[Priority, str] = {
    Priority.NONE: "",
    Priority.LOW: "!",
    Priority.MEDIUM: "!!",
    Priority.HIGH: "!!!",
}


@dataclass(frozen=True)
class VariantTraits:
    """Static facts about one variant."""

    symbol: str
    toggleable: bool
    complete: bool
    cancellable: bool


# Every variant must have a row here; the test suite checks coverage.
VARIANT_TRAITS: dict[Variant, VariantTraits] = {
    Variant.TASK: VariantTraits(symbol="•", toggleable=True, complete=False, cancellable=True),
    Variant.NOTE: VariantTraits(symbol="–", toggleable=False, complete=False, cancellable=True),
    Variant.EVENT: VariantTraits(symbol="○", toggleable=False, complete=False, cancellable=True),
    Variant.DONE: VariantTraits(symbol="✓", toggleable=True, complete=True, cancellable=True),
    Variant.MIGRATED: VariantTraits(symbol="→", toggleable=False, complete=False, cancellable=True),
    Variant.CANCELLED: VariantTraits(
        symbol="✗", toggleable=False, complete=True, cancellable=False
    ),
    Variant.QUESTION: VariantTraits(symbol="?", toggleable=False, complete=False, cancellable=True),
    Variant.ANSWERED: VariantTraits(symbol="★", toggleable=False, complete=True, cancellable=True),
    Variant.ANSWER: VariantTraits(symbol="↳", toggleable=False, complete=False, cancellable=True),
    Variant.MOVED_TO_LIST: VariantTraits(
        symbol="^", toggleable=False, complete=False, cancellable=True
    ),
}

# Retype cycle; variants outside it cannot have their type changed.
_TYPE_CYCLE: dict[Variant, Variant] = {
    Variant.TASK: Variant.NOTE,
    Variant.NOTE: Variant.EVENT,
    Variant.EVENT: Variant.QUESTION,
    Variant.QUESTION: Variant.TASK,
}

_TAG_RE = re.compile(r"#(\w+)")


def traits_for(variant: Variant) -> VariantTraits:
    """Look up the traits of a variant, rejecting anything unknown."""
    if not isinstance(variant, Variant):
        msg = f"Unknown entry variant: {variant!r}"
        raise UnknownVariantError(msg)
    return VARIANT_TRAITS[variant]


def parse_variant(value: str) -> Variant:
    """Convert a raw variant token into a Variant."""
    try:
        return Variant(value)
    except ValueError:
        msg = f"Unknown entry variant: {value!r}"
        raise UnknownVariantError(msg) from None


def parse_priority(value: str | None) -> Priority:
    """Convert a raw priority token; empty or missing means none."""
    if not value:
        return Priority.NONE
    try:
        return Priority(value.lower())
    except ValueError:
        msg = f"Invalid priority {value!r}: must be none, low, medium, or high"
        raise ValueError(msg) from None


def next_cycle_type(variant: Variant) -> Variant:
    """Return the variant a cycle-type action turns this variant into."""
    traits_for(variant)
    try:
        return _TYPE_CYCLE[variant]
    except KeyError:
        msg = f"Cannot change type of {variant.value} entry"
        raise ValueError(msg) from None


def extract_tags(content: str) -> tuple[str, ...]:
    """Return the #tags in content, in order of first appearance."""
    return tuple(dict.fromkeys(_TAG_RE.findall(content)))


@dataclass(frozen=True)
class Entry:
    """A single journal entry."""

    id: EntryId
    variant: Variant
    content: str = ""
    priority: Priority = Priority.NONE
    parent_id: EntryId | None = None
    created_at: datetime | None = None
    scheduled_date: date | None = None
    migration_count: int = 0

    def __post_init__(self) -> None:
        traits_for(self.variant)
        if not isinstance(self.priority, Priority):
            msg = f"Invalid priority: {self.priority!r}"
            raise ValueError(msg)
        if self.migration_count < 0:
            msg = f"migration_count cannot be negative: {self.migration_count}"
            raise ValueError(msg)

    @property
    def symbol(self) -> str:
        return traits_for(self.variant).symbol

    @property
    def is_toggleable(self) -> bool:
        return traits_for(self.variant).toggleable

    @property
    def is_complete(self) -> bool:
        return traits_for(self.variant).complete

    @property
    def is_cancellable(self) -> bool:
        return traits_for(self.variant).cancellable


@dataclass
class TreeNode:
    """An entry with its children, as produced by the hierarchy builder."""

    entry: Entry
    children: list["TreeNode"] = field(default_factory=list)


@dataclass(frozen=True)
class AttentionScore:
    """How urgently an entry deserves review, and why."""

    score: int
    indicators: frozenset[Indicator] = frozenset()
    days_old: int = 0
