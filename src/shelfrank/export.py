"""CSV export, template download, and the before/after comparison workbook."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pandas as pd
from openpyxl import Workbook

from .models import ProductRecord, ScoredBatch, ScoredProduct


LOGGER = logging.getLogger("shelfrank.export")

EXPORT_COLUMNS: List[str] = [
    "fecha",
    "nombre_producto",
    "descripcion",
    "stock",
    "precio_unitario",
    "cantidad_vendida",
    "orden_anterior",
    "orden_sugerido",
]

TEMPLATE_COLUMNS: List[str] = [
    "fecha",
    "nombre_producto",
    "descripcion",
    "cantidad/stock",
    "precio_unitario",
    "cantidad_unds_vendidas",
    "orden",
]

TEMPLATE_ROWS = [
    {
        "fecha": "2024-01-15",
        "nombre_producto": "Producto Ejemplo 1",
        "descripcion": "Descripción del producto",
        "cantidad/stock": 50,
        "precio_unitario": 25.99,
        "cantidad_unds_vendidas": 10,
        "orden": 1,
    },
    {
        "fecha": "2024-01-15",
        "nombre_producto": "Producto Ejemplo 2",
        "descripcion": "Otra descripción",
        "cantidad/stock": 30,
        "precio_unitario": 15.50,
        "cantidad_unds_vendidas": 5,
        "orden": 2,
    },
]

Records = Union[ScoredBatch, Iterable[ProductRecord]]


def _as_list(records: Records) -> List[ProductRecord]:
    if isinstance(records, ScoredBatch):
        return list(records.products)
    return list(records)


def export_frame(records: Records) -> pd.DataFrame:
    """Map records onto the fixed export columns.

    Unscored records keep batch order. While any record still carries its own
    ``suggested_rank`` the rows are written in ``current_rank`` order, so that
    re-importing the file (where ranks fall back to row position) reproduces
    ``orden_anterior`` instead of silently applying the suggestion.
    ``orden_sugerido`` falls back to ``orden_anterior`` for unscored records.
    """

    items = _as_list(records)
    if any(r.suggested_rank is not None for r in items):
        items = sorted(items, key=lambda r: r.current_rank)
    rows = [
        {
            "fecha": r.transaction_date,
            "nombre_producto": r.product_name,
            "descripcion": r.description,
            "stock": r.stock_quantity,
            "precio_unitario": r.unit_price,
            "cantidad_vendida": r.units_sold,
            "orden_anterior": r.current_rank,
            "orden_sugerido": r.suggested_rank if r.suggested_rank is not None else r.current_rank,
        }
        for r in items
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def _write_text(text: str, destination: Union[str, Path]) -> Path:
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def export_csv(records: Records, destination: Optional[Union[str, Path]] = None) -> str:
    """Serialize records to CSV text; also write it when ``destination`` is given."""

    frame = export_frame(records)
    text = frame.to_csv(index=False, lineterminator="\n")
    if destination is not None:
        path = _write_text(text, destination)
        LOGGER.info("Exported %d products to %s", len(frame), path)
    return text


def template_frame() -> pd.DataFrame:
    return pd.DataFrame(TEMPLATE_ROWS, columns=TEMPLATE_COLUMNS)


def write_template_csv(destination: Union[str, Path]) -> Path:
    """Write the illustrative input template; every header is an accepted alias."""

    path = _write_text(template_frame().to_csv(index=False, lineterminator="\n"), destination)
    LOGGER.info("Template written to %s", path)
    return path


def _safe_sheet_name(name: str) -> str:
    sanitized = "".join(ch if ch not in '[]:*?/\\' else '_' for ch in str(name))
    return sanitized[:31] if sanitized else "Sheet"


def _append_frame(ws, frame: pd.DataFrame) -> None:
    ws.append(list(frame.columns))
    for values in frame.itertuples(index=False, name=None):
        ws.append(list(values))


def comparison_frames(batch: ScoredBatch) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Return (suggested order, current order) views of a scored batch."""

    products: List[ScoredProduct] = list(batch.products)
    suggested = pd.DataFrame(
        [
            {
                "suggested_rank": p.suggested_rank,
                "product_name": p.product_name,
                "current_rank": p.current_rank,
                "rank_delta": p.rank_delta,
                "score": round(p.score, 2),
                "justification": p.justification,
            }
            for p in products
        ],
        columns=["suggested_rank", "product_name", "current_rank", "rank_delta", "score", "justification"],
    )
    current = pd.DataFrame(
        [
            {
                "current_rank": p.current_rank,
                "product_name": p.product_name,
                "stock_quantity": p.stock_quantity,
                "unit_price": p.unit_price,
                "units_sold": p.units_sold,
            }
            for p in sorted(products, key=lambda p: p.current_rank)
        ],
        columns=["current_rank", "product_name", "stock_quantity", "unit_price", "units_sold"],
    )
    return suggested, current


def export_comparison_workbook(batch: ScoredBatch, destination: Union[str, Path]) -> Path:
    """Write suggested order, current order, and batch metrics as three tabs."""

    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    suggested, current = comparison_frames(batch)

    wb = Workbook()
    ws = wb.active
    ws.title = _safe_sheet_name("Suggested order")
    _append_frame(ws, suggested)
    _append_frame(wb.create_sheet(_safe_sheet_name("Current order")), current)

    metrics_ws = wb.create_sheet("Metrics")
    metrics_ws.append(["metric", "value"])
    if batch.analysis is not None:
        m = batch.analysis.metrics
        metrics_ws.append(["total_products", batch.analysis.total_products])
        metrics_ws.append(["changes_count", batch.analysis.changes_count])
        metrics_ws.append(["total_units_sold", m.total_units_sold])
        metrics_ws.append(["total_stock", m.total_stock])
        metrics_ws.append(["inventory_value", round(m.inventory_value, 2)])
        metrics_ws.append(["average_units_sold", round(m.average_units_sold, 2)])
        metrics_ws.append(["timestamp", batch.analysis.timestamp])

    wb.save(path)
    LOGGER.info("Comparison workbook written to %s", path)
    return path
