"""Attention scoring: which open entries most need the user's focus."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from bujo_engine.core.tree.hierarchy import Hierarchy, build_hierarchy
from bujo_engine.models.entry import (
    AttentionScore,
    Entry,
    Indicator,
    Priority,
    Variant,
    traits_for,
)

AGE_POINTS_PER_DAY = 1
PRIORITY_BONUS: dict[Priority, int] = {
    Priority.NONE: 0,
    Priority.LOW: 10,
    Priority.MEDIUM: 30,
    Priority.HIGH: 50,
}
CHILD_WEIGHT = 5
QUESTION_BONUS = 10
MIGRATION_BONUS = 15
URGENT_KEYWORD_BONUS = 20
PAST_SCHEDULED_BONUS = 50
PARENT_EVENT_BONUS = 5

AGING_THRESHOLD_DAYS = 3
OVERDUE_THRESHOLD_DAYS = 7

MIN_ATTENTION_SCORE = 10
MAX_ATTENTION_ITEMS = 5

URGENT_KEYWORDS = ("urgent", "asap", "blocker", "waiting", "blocked")

SCORED_VARIANTS = frozenset({Variant.TASK, Variant.QUESTION})

_SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class ScoredEntry:
    """An entry paired with the score it was ranked by."""

    entry: Entry
    attention: AttentionScore


@dataclass(frozen=True)
class AttentionCut:
    """The visible slice of a ranked attention list."""

    scored: tuple[ScoredEntry, ...]
    truncated: bool
    total: int

    @property
    def shown(self) -> tuple[Entry, ...]:
        return tuple(item.entry for item in self.scored)


def _as_aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def days_old(entry: Entry, now: datetime) -> int:
    """Whole days between the entry's creation and now (0 if unknown or future)."""
    if entry.created_at is None:
        return 0
    delta = _as_aware(now) - _as_aware(entry.created_at)
    return max(int(delta.total_seconds() // _SECONDS_PER_DAY), 0)


def _has_urgent_keyword(content: str) -> bool:
    lowered = content.lower()
    return any(keyword in lowered for keyword in URGENT_KEYWORDS)


def _resolve_hierarchy(peers: "Hierarchy | Iterable[Entry]") -> Hierarchy:
    if isinstance(peers, Hierarchy):
        return peers
    return build_hierarchy(peers)


def score(
    entry: Entry,
    now: datetime,
    peers: "Hierarchy | Iterable[Entry]" = (),
) -> AttentionScore:
    """Score one entry against a reference time.

    Only tasks and questions earn points; every other variant scores 0 with
    no indicators, so the function is safe to call on any entry.

    Args:
        entry: The entry to score.
        now: Reference time.
        peers: The collection the entry lives in (or a hierarchy built from
            it), used for the child count and the parent's variant.

    Returns:
        The score, its indicators, and the entry's age in days.
    """
    traits = traits_for(entry.variant)
    age = days_old(entry, now)
    if entry.variant not in SCORED_VARIANTS:
        return AttentionScore(score=0, indicators=frozenset(), days_old=age)

    hierarchy = _resolve_hierarchy(peers)
    total = age * AGE_POINTS_PER_DAY
    total += PRIORITY_BONUS[entry.priority]
    total += hierarchy.child_count(entry.id) * CHILD_WEIGHT
    if entry.variant is Variant.QUESTION:
        total += QUESTION_BONUS
    total += entry.migration_count * MIGRATION_BONUS
    if _has_urgent_keyword(entry.content):
        total += URGENT_KEYWORD_BONUS

    past_scheduled = (
        entry.scheduled_date is not None and entry.scheduled_date < _as_aware(now).date()
    )
    if past_scheduled:
        total += PAST_SCHEDULED_BONUS

    parent = hierarchy.parent_of(entry.id)
    if parent is not None and parent.variant is Variant.EVENT:
        total += PARENT_EVENT_BONUS

    indicators: set[Indicator] = set()
    if not traits.complete and (age > OVERDUE_THRESHOLD_DAYS or past_scheduled):
        indicators.add(Indicator.OVERDUE)
    if entry.priority in (Priority.MEDIUM, Priority.HIGH):
        indicators.add(Indicator.PRIORITY)
    if age > AGING_THRESHOLD_DAYS:
        indicators.add(Indicator.AGING)
    if entry.migration_count > 0:
        indicators.add(Indicator.MIGRATED)

    return AttentionScore(score=total, indicators=frozenset(indicators), days_old=age)


def rank_scored(
    entries: Sequence[Entry],
    now: datetime,
    peers: "Hierarchy | Iterable[Entry] | None" = None,
) -> list[ScoredEntry]:
    """Score entries once and sort them by descending score.

    Ties keep their input order. The scores travel with the entries so that
    filter_and_cap thresholds on exactly the values the order was built from.
    """
    hierarchy = _resolve_hierarchy(entries if peers is None else peers)
    scored = [ScoredEntry(entry, score(entry, now, hierarchy)) for entry in entries]
    # sorted() is stable, so equal scores stay in input order.
    return sorted(scored, key=lambda item: -item.attention.score)


def rank(
    entries: Sequence[Entry],
    now: datetime,
    peers: "Hierarchy | Iterable[Entry] | None" = None,
) -> list[Entry]:
    """Sort entries by descending score; ties keep their input order."""
    return [item.entry for item in rank_scored(entries, now, peers)]


def filter_and_cap(
    ranked: Sequence[ScoredEntry],
    min_score: int = MIN_ATTENTION_SCORE,
    max_count: int = MAX_ATTENTION_ITEMS,
) -> AttentionCut:
    """Drop low-signal entries and cap the visible list.

    Nothing is scored here; the threshold applies to the scores carried
    by ``ranked``.

    Args:
        ranked: Output of rank_scored, already in rank order.
        min_score: Entries scoring below this are excluded entirely.
        max_count: Maximum number of entries shown.

    Returns:
        The shown entries, whether anything was cut, and how many qualified.
    """
    if max_count < 0:
        msg = f"max_count cannot be negative: {max_count}"
        raise ValueError(msg)
    for item in ranked:
        if not isinstance(item, ScoredEntry):
            msg = f"filter_and_cap expects rank_scored output, got {type(item).__name__}"
            raise TypeError(msg)
    qualifying = [item for item in ranked if item.attention.score >= min_score]
    shown = tuple(qualifying[:max_count])
    return AttentionCut(
        scored=shown,
        truncated=len(qualifying) > len(shown),
        total=len(qualifying),
    )


def needs_attention(
    entries: Sequence[Entry],
    now: datetime,
    *,
    min_score: int = MIN_ATTENTION_SCORE,
    max_count: int = MAX_ATTENTION_ITEMS,
) -> AttentionCut:
    """Rank the open tasks and questions of a collection and cap the result."""
    hierarchy = build_hierarchy(entries)
    candidates = [e for e in entries if e.variant in SCORED_VARIANTS]
    return filter_and_cap(rank_scored(candidates, now, hierarchy), min_score, max_count)
