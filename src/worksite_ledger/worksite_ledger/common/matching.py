"""Fuzzy matching of free-text spreadsheet headers and entity names.

Candidates are ranked in three tiers, first hit wins:

1. exact equality of the raw (BOM-stripped, trimmed) strings
2. equality of normalized forms (lower-cased, NFC, whitespace/underscore/zero-width removed)
3. substring containment of normalized forms, in either direction

There is no scoring; ties inside a tier resolve by input order.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar

from .formatting import normalize_text

T = TypeVar("T")

_SEPARATORS = re.compile(r"[_\s\u200b\u200c\u200d\u00a0\ufeff]+")


def normalize_key(value: Any) -> str:
    s = unicodedata.normalize("NFC", normalize_text(value)).lower()
    return _SEPARATORS.sub("", s).strip()


def find_column(headers: Sequence[str], candidates: Sequence[str]) -> Optional[str]:
    """Return the first header matching any candidate alias, or None."""
    raw = {normalize_text(c) for c in candidates}
    for h in headers:
        if normalize_text(h) in raw:
            return h

    keys = [normalize_key(c) for c in candidates]
    keys = [k for k in keys if k]
    for h in headers:
        if normalize_key(h) in keys:
            return h

    for h in headers:
        nh = normalize_key(h)
        if not nh:
            continue
        if any(nh in k or k in nh for k in keys):
            return h
    return None


def match_name(
    name: str,
    items: Iterable[T],
    *,
    key: Callable[[T], str],
    allow_partial: bool = True,
) -> Optional[T]:
    """Find the entity whose name matches ``name`` (exact → normalized → substring)."""
    items = list(items)
    target = normalize_text(name)
    if not target:
        return None

    for item in items:
        if normalize_text(key(item)) == target:
            return item

    nt = normalize_key(target)
    for item in items:
        if normalize_key(key(item)) == nt:
            return item

    if not allow_partial:
        return None
    for item in items:
        nk = normalize_key(key(item))
        if nk and (nk in nt or nt in nk):
            return item
    return None
