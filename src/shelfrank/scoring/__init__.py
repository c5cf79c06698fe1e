"""Scoring engine: heuristic priority score, suggested ranks, and explanations."""

from .heuristic import apply_suggested_ranks, compute_scores, score
from .metrics import compute_batch_metrics
from .provider import HeuristicScoringProvider, ScoringProvider, get_provider

__all__ = [
    "apply_suggested_ranks",
    "compute_batch_metrics",
    "compute_scores",
    "get_provider",
    "HeuristicScoringProvider",
    "score",
    "ScoringProvider",
]
