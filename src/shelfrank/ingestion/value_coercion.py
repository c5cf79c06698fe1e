from __future__ import annotations

import math
import re
from typing import Optional


# Leading decimal number, optionally signed, with an optional exponent.
# Trailing garbage after the number is ignored ("12abc" -> 12).
_LEADING_NUMBER_RX = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

# Integer fields read only the leading digits: "7.9" -> 7, "1e3" -> 1.
_LEADING_INT_RX = re.compile(r"^[+-]?\d+")


def parse_leading_number(value: object) -> Optional[float]:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    s = str(value).strip()
    if s == "":
        return None
    m = _LEADING_NUMBER_RX.match(s)
    if not m:
        return None
    try:
        val = float(m.group(0))
    except (ValueError, OverflowError):
        return None
    if not math.isfinite(val):
        return None
    return val


def coerce_float(value: object, default: float = 0.0) -> float:
    """Parse a non-negative number, falling back to ``default``."""

    val = parse_leading_number(value)
    if val is None or val < 0:
        return default
    return val


def coerce_int(value: object, default: int = 0) -> int:
    """Parse the leading integer digits of ``value``.

    The fraction and any exponent are ignored, so ``"7.9"`` gives 7 and
    ``"1e3"`` gives 1. Missing, unparsable, and negative values all fall back
    to ``default``.
    """

    if value is None or (isinstance(value, float) and math.isnan(value)):
        return default
    m = _LEADING_INT_RX.match(str(value).strip())
    if not m:
        return default
    val = int(m.group(0))
    if val < 0:
        return default
    return val


def coerce_rank(value: object, position: int) -> int:
    """Parse a positive rank; anything else falls back to the row ``position``."""

    rank = coerce_int(value, default=0)
    return rank if rank >= 1 else position


def coerce_text(value: object, default: str = "") -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default
