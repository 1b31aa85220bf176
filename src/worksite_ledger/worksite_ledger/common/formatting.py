"""Pure formatting and numeric-coercion helpers."""

from __future__ import annotations

import math
import numbers
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable

_NON_NUM = re.compile(r"[^0-9.-]")


def normalize_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).replace("\ufeff", "").strip()


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def to_num(value: Any, fallback: float = 0) -> float:
    if isinstance(value, bool):
        return fallback
    if isinstance(value, numbers.Real):
        return value if math.isfinite(value) else fallback
    s = _NON_NUM.sub("", normalize_text(value))
    try:
        n = float(s)
    except ValueError:
        return fallback
    return n if math.isfinite(n) else fallback


def to_money(value: Any, fallback: int = 0) -> int:
    """Whole currency units; ``"12,000.00"`` is 12000, halves round up."""
    return round_half_up(to_num(value, fallback))


def as_number(value: float):
    """Return an int for whole values so currency amounts stay integral."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def median(values: Iterable[float]) -> float:
    a = sorted(v for v in values if isinstance(v, (int, float)) and math.isfinite(v))
    if not a:
        return 0
    mid = len(a) // 2
    if len(a) % 2:
        return a[mid]
    return round_half_up((a[mid - 1] + a[mid]) / 2)


def fixed(value: float, digits: int = 0) -> str:
    """Fixed-point text with halves rounded away from zero (``2.5`` -> ``"3"``)."""
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_currency(amount: float) -> str:
    return f"{round_half_up(amount or 0):,}"


def format_currency_short(amount: float) -> str:
    amount = amount or 0
    a = abs(amount)
    if a >= 100_000_000:
        return f"{fixed(amount / 100_000_000, 1)}억"
    if a >= 10_000:
        return f"{fixed(amount / 10_000)}만"
    if a >= 1_000:
        return f"{fixed(amount / 1_000)}천"
    return f"{format_currency(amount)}원"


def format_md(md: float) -> str:
    if md is None or not math.isfinite(md):
        return "0"
    return fixed(md) if float(md).is_integer() else fixed(md, 1)
