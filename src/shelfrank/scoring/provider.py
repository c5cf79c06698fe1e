from __future__ import annotations

import time
from typing import Any, Dict, Iterable, Protocol

from ..errors import ConfigError
from ..models import ProductRecord, ScoredBatch
from .heuristic import score


class ScoringProvider(Protocol):
    """Anything that can turn canonical records into a scored batch."""

    def analyze(self, records: Iterable[ProductRecord]) -> ScoredBatch:
        ...


class HeuristicScoringProvider:
    """Local heuristic scorer.

    ``delay_seconds`` emulates the latency of a remote analysis service; it has
    no effect on the result.
    """

    name = "heuristic"

    def __init__(self, delay_seconds: float = 0.0) -> None:
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")
        self.delay_seconds = float(delay_seconds)

    def analyze(self, records: Iterable[ProductRecord]) -> ScoredBatch:
        if self.delay_seconds:
            time.sleep(self.delay_seconds)
        return score(records)


PROVIDERS: Dict[str, type] = {
    HeuristicScoringProvider.name: HeuristicScoringProvider,
}


def get_provider(config: Any = None) -> ScoringProvider:
    """Build the configured provider from an ``AppConfig`` (or ``None`` for defaults)."""

    if config is None:
        return HeuristicScoringProvider()
    scoring = config.scoring
    cls = PROVIDERS.get(scoring.provider)
    if cls is None:
        raise ConfigError(f"Unknown scoring provider: {scoring.provider}")
    return cls(delay_seconds=scoring.delay_seconds)
