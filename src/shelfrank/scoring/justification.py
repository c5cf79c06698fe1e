"""Human-readable explanations for suggested rank changes.

Each direction has its own rule table of ``(predicate, phrase)`` pairs,
evaluated in order. Triggered phrases are joined with ", "; if none trigger,
the direction's fallback phrase is used. The rules explain the move, they do
not derive the score.
"""
from __future__ import annotations

from typing import Callable, List, Sequence, Tuple

from ..models import ProductRecord


HIGH_SALES_THRESHOLD = 5
LIMITED_STOCK_THRESHOLD = 20
HIGH_VALUE_THRESHOLD = 50
LOW_SALES_THRESHOLD = 3
HIGH_INVENTORY_THRESHOLD = 50

UNCHANGED_MESSAGE = "maintains optimal position."
UPWARD_FALLBACK = "better performance"
DOWNWARD_FALLBACK = "lower priority"

JustificationRule = Tuple[Callable[[ProductRecord], bool], str]

UPWARD_RULES: Tuple[JustificationRule, ...] = (
    (lambda p: p.units_sold > HIGH_SALES_THRESHOLD, "high sales volume"),
    (lambda p: p.stock_quantity < LIMITED_STOCK_THRESHOLD, "limited stock"),
    (lambda p: p.unit_price > HIGH_VALUE_THRESHOLD, "high value"),
)

DOWNWARD_RULES: Tuple[JustificationRule, ...] = (
    (lambda p: p.units_sold < LOW_SALES_THRESHOLD, "low sales"),
    (lambda p: p.stock_quantity > HIGH_INVENTORY_THRESHOLD, "high inventory"),
)


def triggered_phrases(record: ProductRecord, rules: Sequence[JustificationRule]) -> List[str]:
    return [phrase for predicate, phrase in rules if predicate(record)]


def _positions(n: int) -> str:
    return f"{n} position" if n == 1 else f"{n} positions"


def explain_rank_change(record: ProductRecord, rank_delta: int) -> str:
    """Describe why ``record`` moved by ``rank_delta`` (positive means toward the front)."""

    if rank_delta == 0:
        return UNCHANGED_MESSAGE
    if rank_delta > 0:
        reasons = triggered_phrases(record, UPWARD_RULES) or [UPWARD_FALLBACK]
        return f"moved up {_positions(rank_delta)}: {', '.join(reasons)}."
    reasons = triggered_phrases(record, DOWNWARD_RULES) or [DOWNWARD_FALLBACK]
    return f"moved down {_positions(abs(rank_delta))}: {', '.join(reasons)}."
