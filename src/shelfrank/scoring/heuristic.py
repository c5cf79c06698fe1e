"""Heuristic priority scoring and suggested ranking.

Pure functions: no file I/O and no logging. Given the same records in the
same order, the output is identical apart from the summary timestamp.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Iterable, List, Optional

import numpy as np
import pandas as pd

from ..models import AnalysisSummary, ProductRecord, ScoredBatch, ScoredProduct, records_to_frame
from .justification import explain_rank_change
from .metrics import compute_batch_metrics


SALES_WEIGHT = 10.0
STOCK_NUMERATOR = 100.0
PRICE_WEIGHT = 0.1


def compute_scores(frame: pd.DataFrame) -> pd.Series:
    """Return ``units*10 + 100/stock + price*0.1`` per row.

    The stock component is 0 when stock is 0, so the score is always finite.
    """

    units = pd.to_numeric(frame["units_sold"], errors="coerce").fillna(0).astype("float64")
    stock = pd.to_numeric(frame["stock_quantity"], errors="coerce").fillna(0).astype("float64")
    price = pd.to_numeric(frame["unit_price"], errors="coerce").fillna(0).astype("float64")
    with np.errstate(divide="ignore", invalid="ignore"):
        stock_component = np.where(stock > 0, STOCK_NUMERATOR / stock.where(stock > 0, 1.0), 0.0)
    return units * SALES_WEIGHT + stock_component + price * PRICE_WEIGHT


def score(records: Iterable[ProductRecord], timestamp: Optional[str] = None) -> ScoredBatch:
    """Score, rank, and explain a batch.

    Records are sorted by score descending with a stable sort, so equal scores
    keep their input order. ``suggested_rank`` is the 1-based position in that
    order and ``rank_delta = current_rank - suggested_rank``.
    """

    items: List[ProductRecord] = list(records)
    metrics = compute_batch_metrics(items)
    ts = timestamp or datetime.now(timezone.utc).isoformat()
    if not items:
        return ScoredBatch(products=[], analysis=AnalysisSummary(0, 0, ts, metrics))

    frame = records_to_frame(items)
    frame["score"] = compute_scores(frame)
    order = frame["score"].sort_values(ascending=False, kind="stable").index

    scored: List[ScoredProduct] = []
    for suggested_rank, idx in enumerate(order, start=1):
        record = items[idx]
        delta = record.current_rank - suggested_rank
        scored.append(
            ScoredProduct(
                identifier=record.identifier,
                transaction_date=record.transaction_date,
                product_name=record.product_name,
                description=record.description,
                stock_quantity=record.stock_quantity,
                unit_price=record.unit_price,
                units_sold=record.units_sold,
                current_rank=record.current_rank,
                suggested_rank=suggested_rank,
                score=float(frame.at[idx, "score"]),
                rank_delta=delta,
                justification=explain_rank_change(record, delta),
            )
        )

    changes = sum(1 for p in scored if p.rank_delta != 0)
    return ScoredBatch(products=scored, analysis=AnalysisSummary(len(scored), changes, ts, metrics))


def apply_suggested_ranks(batch: ScoredBatch | Iterable[ScoredProduct]) -> List[ProductRecord]:
    """Promote suggested ranks to current ranks and clear the suggestion.

    Returns new canonical records in suggested order; the input is untouched.
    """

    products = batch.products if isinstance(batch, ScoredBatch) else list(batch)
    applied: List[ProductRecord] = []
    for product in products:
        base = product.to_record() if isinstance(product, ScoredProduct) else product
        if product.suggested_rank is None:
            applied.append(base)
            continue
        applied.append(replace(base, current_rank=product.suggested_rank, suggested_rank=None))
    applied.sort(key=lambda r: r.current_rank)
    return applied
