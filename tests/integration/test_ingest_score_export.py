from datetime import date

import pytest

from shelfrank import apply_suggested_ranks, export_csv, ingest, score
from shelfrank.errors import MissingRequiredFieldError


INPUT_CSV = (
    "fecha,nombre_producto,descripcion,cantidad/stock,precio_unitario,cantidad_unds_vendidas,orden\n"
    "2025-03-01,Bolso,Cuero,100,10,1,1\n"
    "2025-03-01,Reloj,Acero,10,100,5,2\n"
    "2025-03-01,Gorra,,60,8,0,3\n"
)


def _canonical(records):
    return [
        (r.transaction_date, r.product_name, r.description, r.stock_quantity, r.unit_price, r.units_sold, r.current_rank)
        for r in records
    ]


def test_full_flow_ingest_score_export_reimport():
    day = date(2025, 3, 2)
    records = ingest(INPUT_CSV.encode("utf-8"), "ventas.csv", ingestion_date=day)
    batch = score(records)

    assert [p.product_name for p in batch.products] == ["Reloj", "Bolso", "Gorra"]
    reloj, bolso, gorra = batch.products
    assert reloj.rank_delta == 1
    assert reloj.justification == "moved up 1 position: limited stock, high value."
    assert bolso.rank_delta == -1
    assert bolso.justification == "moved down 1 position: low sales, high inventory."
    assert gorra.justification == "maintains optimal position."

    # Exporting the unscored batch and re-importing reproduces the canonical records.
    reimported = ingest(export_csv(records).encode("utf-8"), "productos_ordenados.csv", ingestion_date=day)
    assert _canonical(reimported) == _canonical(records)


def test_scored_export_reimports_without_applying_suggestion():
    day = date(2025, 3, 2)
    records = ingest(INPUT_CSV.encode("utf-8"), "ventas.csv", ingestion_date=day)
    batch = score(records)

    reimported = ingest(export_csv(batch).encode("utf-8"), "productos_ordenados.csv", ingestion_date=day)
    assert _canonical(reimported) == _canonical(records)
    assert [(r.product_name, r.current_rank) for r in reimported] == [("Bolso", 1), ("Reloj", 2), ("Gorra", 3)]


def test_applied_ranks_become_current_on_reimport():
    day = date(2025, 3, 2)
    records = ingest(INPUT_CSV.encode("utf-8"), "ventas.csv", ingestion_date=day)
    applied = apply_suggested_ranks(score(records))
    assert [(r.product_name, r.current_rank) for r in applied] == [("Reloj", 1), ("Bolso", 2), ("Gorra", 3)]

    reimported = ingest(export_csv(applied).encode("utf-8"), "productos_ordenados.csv", ingestion_date=day)
    assert _canonical(reimported) == _canonical(applied)

    # A second pass over the applied order suggests no further moves.
    assert score(applied).analysis.changes_count == 0


def test_missing_name_discards_everything():
    bad = INPUT_CSV + "2025-03-01,,sin nombre,5,5,5,4\n"
    with pytest.raises(MissingRequiredFieldError) as info:
        ingest(bad.encode("utf-8"), "ventas.csv")
    assert info.value.row_number == 4
