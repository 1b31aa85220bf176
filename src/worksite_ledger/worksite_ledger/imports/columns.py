"""Known header aliases per import field, matched with common.matching.find_column."""

from __future__ import annotations

from typing import Optional, Sequence

from ..common.matching import find_column

SITE_COLUMNS = {
    "name": ("현장명", "현장", "name", "site"),
    "budget": ("예산", "budget", "amount"),
    "company": ("거래처", "건설사", "company", "customer"),
}

EXPENSE_COLUMNS = {
    "date": ("날짜", "일자", "date"),
    "site": ("현장", "현장_표준화", "site"),
    "worker": ("작업자", "작업자(수동입력)", "worker"),
    "category": ("항목", "카테고리", "category"),
    "description": ("내용", "설명", "description", "이용하신 가맹점명"),
    "amount": ("금액", "이용금액", "amount"),
}

PAYROLL_COLUMNS = {
    "worker": ("작업자", "worker"),
    "date": ("일자", "date"),
    "company": ("거래처", "company"),
    "site": ("현장", "site"),
    "md": ("공수", "md"),
    "gross": ("총급여", "gross"),
    "note": ("메모", "note"),
}


def map_columns(headers: Sequence[str], aliases: dict) -> dict[str, Optional[str]]:
    """Resolve each field to a header; a header is claimed by at most one field."""
    out: dict[str, Optional[str]] = {}
    taken: set[str] = set()
    for field, candidates in aliases.items():
        col = find_column([h for h in headers if h not in taken], candidates)
        out[field] = col
        if col:
            taken.add(col)
    return out
