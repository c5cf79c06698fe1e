"""Turn raw tabular rows into canonical product records.

Column headers are resolved through the ordered alias table in
:mod:`shelfrank.ingestion.column_aliases`; numeric cells are coerced leniently
(bad numbers become defaults, never errors). The only hard failure is a row
whose product name cannot be resolved, which rejects the whole batch.
"""
from __future__ import annotations

import uuid
from datetime import date
from typing import Iterable, List, Mapping, Optional

from ..errors import EmptyFileError, MissingRequiredFieldError
from ..models import ProductRecord
from .column_aliases import resolve_row
from .value_coercion import coerce_float, coerce_int, coerce_rank, coerce_text


def _batch_token() -> str:
    return uuid.uuid4().hex[:8]


def normalize_row(
    row: Mapping[object, object],
    position: int,
    identifier: str,
    ingestion_date: Optional[date] = None,
) -> ProductRecord:
    """Normalize a single raw row; ``position`` is its 1-based index in the batch."""

    resolved = resolve_row(row)
    name = coerce_text(resolved["product_name"])
    if not name:
        raise MissingRequiredFieldError(position, "product_name")

    today = (ingestion_date or date.today()).isoformat()
    return ProductRecord(
        identifier=identifier,
        transaction_date=coerce_text(resolved["transaction_date"], default=today),
        product_name=name,
        description=coerce_text(resolved["description"]),
        stock_quantity=coerce_int(resolved["stock_quantity"]),
        unit_price=coerce_float(resolved["unit_price"]),
        units_sold=coerce_int(resolved["units_sold"]),
        current_rank=coerce_rank(resolved["current_rank"], position),
        suggested_rank=None,
    )


def normalize(rows: Iterable[Mapping[object, object]], ingestion_date: Optional[date] = None) -> List[ProductRecord]:
    """Normalize a batch of raw rows.

    Raises:
        EmptyFileError: when ``rows`` is empty.
        MissingRequiredFieldError: naming the 1-based row number of the first
            row without a resolvable product name. Nothing is returned in that case.
    """

    batch = list(rows)
    if not batch:
        raise EmptyFileError()

    token = _batch_token()
    return [
        normalize_row(row, position, f"prod_{token}_{position}", ingestion_date)
        for position, row in enumerate(batch, start=1)
    ]
