from __future__ import annotations

import math
import numbers
import re
from datetime import date, datetime
from typing import Any, Optional

import pandas as pd
from openpyxl.utils.datetime import from_excel

from .formatting import normalize_text

_ISO_PREFIX = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")
_KOREAN_DATE = re.compile(r"(\d{2,4})년\s*(\d{1,2})월\s*(\d{1,2})일")
_SEPARATED_DATE = re.compile(r"(\d{4})[-./](\d{1,2})[-./](\d{1,2})")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_korean_date(raw: Any) -> Optional[date]:
    """Parse ISO, Korean long form (``25년1월1일(수)``) or any pandas-parseable date.

    Two-digit years are read as 20xx. Returns None when nothing matches.
    """
    s = normalize_text(raw)
    if not s:
        return None

    m = _ISO_PREFIX.match(s)
    if m:
        return _safe_date(int(m.group(1)), int(m.group(2)), int(m.group(3)))

    m = _KOREAN_DATE.search(s)
    if m:
        year = int(m.group(1))
        if year < 100:
            year += 2000
        if year >= 1900:
            parsed = _safe_date(year, int(m.group(2)), int(m.group(3)))
            if parsed:
                return parsed

    ts = pd.to_datetime(s, errors="coerce")
    if pd.isna(ts):
        return None
    return ts.date()


def parse_sheet_date(value: Any) -> Optional[date]:
    """Parse a spreadsheet cell: date objects, Excel serial numbers, or text."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        if math.isnan(value) or value <= 0:
            return None
        try:
            return from_excel(float(value)).date()
        except (ValueError, OverflowError):
            return None

    s = normalize_text(value)
    if not s:
        return None
    m = _SEPARATED_DATE.search(s)
    if m:
        return _safe_date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    return parse_korean_date(s)


def as_date(value: Any) -> date:
    """Coerce a row value (date, datetime or ISO string) read from the remote store."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_iso_date(str(value)[:10])
