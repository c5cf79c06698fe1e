"""Record types shared by ingestion, scoring, and export."""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Iterable, List, Optional

import pandas as pd


@dataclass(frozen=True)
class ProductRecord:
    """Canonical product record produced by the row normalizer."""

    identifier: str
    transaction_date: str
    product_name: str
    description: str = ""
    stock_quantity: int = 0
    unit_price: float = 0.0
    units_sold: int = 0
    current_rank: int = 1
    suggested_rank: Optional[int] = None


@dataclass(frozen=True)
class ScoredProduct(ProductRecord):
    score: float = 0.0
    rank_delta: int = 0
    justification: str = ""

    def to_record(self) -> ProductRecord:
        """Drop the scoring fields and return the canonical record."""
        base = {f.name: getattr(self, f.name) for f in fields(ProductRecord)}
        return ProductRecord(**base)


@dataclass(frozen=True)
class BatchMetrics:
    total_units_sold: int = 0
    total_stock: int = 0
    inventory_value: float = 0.0
    average_units_sold: float = 0.0


@dataclass(frozen=True)
class AnalysisSummary:
    total_products: int
    changes_count: int
    timestamp: str
    metrics: BatchMetrics


@dataclass(frozen=True)
class ScoredBatch:
    """Scored products in suggested order, plus the batch-level summary."""

    products: List[ScoredProduct] = field(default_factory=list)
    analysis: Optional[AnalysisSummary] = None

    def __len__(self) -> int:
        return len(self.products)

    def __iter__(self):
        return iter(self.products)


RECORD_COLUMNS: List[str] = [f.name for f in fields(ProductRecord)]
SCORED_COLUMNS: List[str] = [f.name for f in fields(ScoredProduct)]


def records_to_frame(records: Iterable[ProductRecord]) -> pd.DataFrame:
    """Return a DataFrame with one row per record and one column per field.

    Scored records keep their extra columns; plain records get the canonical
    columns only.
    """
    items = list(records)
    columns = SCORED_COLUMNS if items and all(isinstance(r, ScoredProduct) for r in items) else RECORD_COLUMNS
    rows = [{c: getattr(r, c) for c in columns} for r in items]
    return pd.DataFrame(rows, columns=columns)
