import pytest

from shelfrank.ingestion.column_aliases import (
    CANONICAL_FIELDS,
    aliases_for,
    canonical_field_for,
    normalize_row_keys,
    resolve_field,
    resolve_row,
)


def test_alias_table_order_and_fields():
    assert CANONICAL_FIELDS == [
        "transaction_date",
        "product_name",
        "description",
        "stock_quantity",
        "unit_price",
        "units_sold",
        "current_rank",
    ]
    assert aliases_for("product_name") == ("nombre_producto", "producto", "nombre", "product", "name")
    assert aliases_for("stock_quantity") == ("stock", "cantidad", "cantidad/stock", "inventory")
    with pytest.raises(KeyError):
        aliases_for("sku")


def test_headers_are_matched_case_insensitively_after_trim():
    assert canonical_field_for("  Precio_Unitario ") == "unit_price"
    assert canonical_field_for("ORDER") == "current_rank"
    assert canonical_field_for("sku") is None


def test_first_alias_with_value_wins():
    row = normalize_row_keys({"precio": "10", "precio_unitario": "99.5"})
    assert resolve_field(row, "unit_price") == "99.5"


def test_empty_value_falls_through_to_next_alias():
    row = normalize_row_keys({"nombre_producto": "  ", "producto": "Lamp"})
    assert resolve_field(row, "product_name") == "Lamp"


def test_resolve_row_leaves_unmatched_fields_as_none():
    resolved = resolve_row({"Name": "Chair", "Ventas": "4"})
    assert resolved["product_name"] == "Chair"
    assert resolved["units_sold"] == "4"
    assert resolved["description"] is None
    assert resolved["current_rank"] is None


def test_normalize_row_keys_keeps_first_non_empty_duplicate():
    row = normalize_row_keys({"Name": "", "name ": "Desk"})
    assert row == {"name": "Desk"}
