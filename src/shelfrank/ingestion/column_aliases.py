from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Tuple


# Ordered (canonical field -> accepted headers). Earlier aliases win when a row
# carries more than one of them.
COLUMN_ALIASES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("transaction_date", ("fecha", "date", "fecha_venta")),
    ("product_name", ("nombre_producto", "producto", "nombre", "product", "name")),
    ("description", ("descripcion", "description", "desc")),
    ("stock_quantity", ("stock", "cantidad", "cantidad/stock", "inventory")),
    ("unit_price", ("precio_unitario", "precio", "price", "precio_unit")),
    ("units_sold", ("cantidad_unds_vendidas", "vendidas", "cantidad_vendida", "sold", "ventas")),
    ("current_rank", ("orden", "orden_actual", "posicion", "order", "position")),
)

CANONICAL_FIELDS: List[str] = [name for name, _ in COLUMN_ALIASES]


def normalize_header(header: object) -> str:
    return str(header).strip().lower()


def aliases_for(field: str) -> Tuple[str, ...]:
    for name, aliases in COLUMN_ALIASES:
        if name == field:
            return aliases
    raise KeyError(f"Unknown canonical field: {field}")


def canonical_field_for(header: object) -> Optional[str]:
    """Return the canonical field a header maps to, or None if it maps to none."""

    key = normalize_header(header)
    for name, aliases in COLUMN_ALIASES:
        if key in aliases:
            return name
    return None


def normalize_row_keys(row: Mapping[object, object]) -> Dict[str, str]:
    """Lowercase and trim keys; values become text with None mapped to "".

    If two raw headers collapse onto the same key, the first non-empty value is kept.
    """

    out: Dict[str, str] = {}
    for key, value in row.items():
        norm = normalize_header(key)
        text = "" if value is None else str(value)
        if norm not in out or (out[norm].strip() == "" and text.strip() != ""):
            out[norm] = text
    return out


def resolve_field(row: Mapping[str, str], field: str) -> Optional[str]:
    """Return the first non-empty value among the field's aliases, in priority order.

    ``row`` must already have normalized keys (see :func:`normalize_row_keys`).
    """

    for alias in aliases_for(field):
        value = row.get(alias)
        if value is None:
            continue
        text = str(value).strip()
        if text != "":
            return text
    return None


def resolve_row(row: Mapping[object, object]) -> Dict[str, Optional[str]]:
    """Resolve every canonical field of a raw row; unresolved fields map to None."""

    normalized = normalize_row_keys(row)
    return {name: resolve_field(normalized, name) for name in CANONICAL_FIELDS}
