import math

from shelfrank.ingestion.value_coercion import (
    coerce_float,
    coerce_int,
    coerce_rank,
    coerce_text,
    parse_leading_number,
)


def test_parse_leading_number_variants():
    assert parse_leading_number("12") == 12.0
    assert parse_leading_number(" 12.75 ") == 12.75
    assert parse_leading_number("12abc") == 12.0
    assert parse_leading_number(".5") == 0.5
    assert parse_leading_number("abc") is None
    assert parse_leading_number("") is None
    assert parse_leading_number(None) is None
    assert parse_leading_number(float("nan")) is None
    assert parse_leading_number("inf") is None
    assert parse_leading_number("1e400") is None


def test_integer_fields_truncate_toward_zero():
    assert coerce_int("7.9") == 7
    assert coerce_int("0.99") == 0
    assert coerce_int("-0.5") == 0
    assert coerce_int("12abc") == 12


def test_integer_fields_ignore_exponent():
    assert coerce_int("1e3") == 1
    assert coerce_int("2.5E2") == 2
    assert coerce_int(".5", default=3) == 3
    assert coerce_float("1e3") == 1000.0


def test_unparsable_or_negative_numbers_default():
    assert coerce_int("n/a") == 0
    assert coerce_int("-3") == 0
    assert coerce_int(None, default=4) == 4
    assert coerce_float("free") == 0.0
    assert coerce_float("-2.5") == 0.0
    assert math.isclose(coerce_float("25.99"), 25.99)


def test_rank_falls_back_to_position():
    assert coerce_rank("3", position=9) == 3
    assert coerce_rank("0", position=9) == 9
    assert coerce_rank("", position=2) == 2
    assert coerce_rank("x", position=5) == 5


def test_coerce_text_trims_and_defaults():
    assert coerce_text("  hola ") == "hola"
    assert coerce_text("   ", default="d") == "d"
    assert coerce_text(None) == ""
