import math

import pandas as pd
import pytest

from shelfrank.models import ProductRecord, ScoredBatch
from shelfrank.scoring import HeuristicScoringProvider, apply_suggested_ranks, compute_scores, get_provider, score
from shelfrank.scoring.heuristic import PRICE_WEIGHT, SALES_WEIGHT, STOCK_NUMERATOR
from shelfrank.scoring.metrics import compute_batch_metrics


def make_record(name, stock=0, price=0.0, sold=0, rank=1, ident=None):
    return ProductRecord(
        identifier=ident or f"id_{name}",
        transaction_date="2025-01-01",
        product_name=name,
        stock_quantity=stock,
        unit_price=price,
        units_sold=sold,
        current_rank=rank,
    )


def score_record(record):
    stock_component = STOCK_NUMERATOR / record.stock_quantity if record.stock_quantity > 0 else 0.0
    return record.units_sold * SALES_WEIGHT + stock_component + record.unit_price * PRICE_WEIGHT


def test_score_formula_matches_worked_example():
    a = make_record("A", stock=10, price=100, sold=5, rank=2)
    b = make_record("B", stock=100, price=10, sold=1, rank=1)
    assert score_record(a) == pytest.approx(70.0)
    assert score_record(b) == pytest.approx(12.0)

    batch = score([b, a])
    assert [p.product_name for p in batch.products] == ["A", "B"]
    first, second = batch.products
    assert first.score == pytest.approx(70.0)
    assert second.score == pytest.approx(12.0)
    assert (first.suggested_rank, first.rank_delta) == (1, 1)
    assert (second.suggested_rank, second.rank_delta) == (2, -1)


def test_zero_stock_is_guarded():
    rec = make_record("Z", stock=0, price=0, sold=0)
    batch = score([rec])
    assert batch.products[0].score == 0.0
    assert math.isfinite(batch.products[0].score)


def test_vectorized_scores_match_per_record():
    records = [make_record("A", 10, 100, 5), make_record("B", 0, 3.5, 2), make_record("C", 3, 0, 0)]
    frame = pd.DataFrame([{"units_sold": r.units_sold, "stock_quantity": r.stock_quantity, "unit_price": r.unit_price} for r in records])
    scores = compute_scores(frame)
    assert list(scores) == pytest.approx([score_record(r) for r in records])


def test_ties_keep_input_order():
    records = [make_record(n, stock=10, price=1, sold=1, rank=i) for i, n in enumerate("PQRS", start=1)]
    batch = score(records)
    assert [p.product_name for p in batch.products] == ["P", "Q", "R", "S"]
    assert all(p.rank_delta == 0 for p in batch.products)
    assert batch.analysis.changes_count == 0


def test_score_is_pure_and_deterministic():
    records = [make_record("A", 5, 20, 2, 1), make_record("B", 50, 5, 9, 2), make_record("C", 1, 80, 0, 3)]
    first = score(records, timestamp="t")
    second = score(records, timestamp="t")
    assert first == second
    assert all(r.suggested_rank is None for r in records)


def test_analysis_summary_and_metrics():
    a = make_record("A", stock=10, price=100, sold=5, rank=2)
    b = make_record("B", stock=100, price=10, sold=1, rank=1)
    batch = score([b, a], timestamp="2025-01-01T00:00:00+00:00")
    assert batch.analysis.total_products == 2
    assert batch.analysis.changes_count == 2
    assert batch.analysis.timestamp == "2025-01-01T00:00:00+00:00"
    m = batch.analysis.metrics
    assert m.total_units_sold == 6
    assert m.total_stock == 110
    assert m.inventory_value == pytest.approx(10 * 100 + 100 * 10)
    assert m.average_units_sold == pytest.approx(3.0)


def test_empty_batch():
    batch = score([])
    assert isinstance(batch, ScoredBatch)
    assert batch.products == []
    assert batch.analysis.total_products == 0
    assert compute_batch_metrics([]).average_units_sold == 0.0


def test_apply_suggested_ranks_copies_and_resets():
    a = make_record("A", stock=10, price=100, sold=5, rank=2)
    b = make_record("B", stock=100, price=10, sold=1, rank=1)
    batch = score([b, a])
    applied = apply_suggested_ranks(batch)
    by_name = {r.product_name: r for r in applied}
    assert by_name["A"].current_rank == 1
    assert by_name["B"].current_rank == 2
    assert all(r.suggested_rank is None for r in applied)
    assert all(type(r) is ProductRecord for r in applied)
    # originals untouched
    assert batch.products[0].current_rank == 2


def test_provider_wraps_score():
    records = [make_record("A", 1, 1, 1)]
    provider = HeuristicScoringProvider()
    assert provider.analyze(records).products[0].product_name == "A"
    assert isinstance(get_provider(None), HeuristicScoringProvider)
    with pytest.raises(ValueError):
        HeuristicScoringProvider(delay_seconds=-1)
