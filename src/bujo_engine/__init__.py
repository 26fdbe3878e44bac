"""Domain-state engine for a bullet-journal application."""

from loguru import logger

from bujo_engine.core.actions.registry import (
    ActionContext,
    ActionDefinition,
    ActionType,
    applicable_bar_actions,
    applicable_menu_actions,
    is_applicable,
)
from bujo_engine.core.attention.scoring import (
    AttentionCut,
    ScoredEntry,
    filter_and_cap,
    needs_attention,
    rank,
    rank_scored,
    score,
)
from bujo_engine.core.navigation.session import JournalSession
from bujo_engine.core.tree.hierarchy import Hierarchy, build_hierarchy, build_tree
from bujo_engine.models.entry import Entry, Priority, TreeNode, Variant
from bujo_engine.protocols import EntryStoreProtocol

logger.disable("bujo_engine")

__all__ = [
    "ActionContext",
    "ActionDefinition",
    "ActionType",
    "AttentionCut",
    "Entry",
    "EntryStoreProtocol",
    "Hierarchy",
    "JournalSession",
    "Priority",
    "ScoredEntry",
    "TreeNode",
    "Variant",
    "applicable_bar_actions",
    "applicable_menu_actions",
    "build_hierarchy",
    "build_tree",
    "filter_and_cap",
    "is_applicable",
    "needs_attention",
    "rank",
    "rank_scored",
    "score",
]
