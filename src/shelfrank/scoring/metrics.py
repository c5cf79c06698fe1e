from __future__ import annotations

from typing import Iterable

from ..models import BatchMetrics, ProductRecord, records_to_frame


def compute_batch_metrics(records: Iterable[ProductRecord]) -> BatchMetrics:
    """Reduce a batch to totals and averages for display."""

    frame = records_to_frame(records)
    if frame.empty:
        return BatchMetrics()
    total_units = int(frame["units_sold"].sum())
    total_stock = int(frame["stock_quantity"].sum())
    inventory_value = float((frame["stock_quantity"] * frame["unit_price"]).sum())
    return BatchMetrics(
        total_units_sold=total_units,
        total_stock=total_stock,
        inventory_value=inventory_value,
        average_units_sold=total_units / len(frame),
    )
