"""Merge remote row-change notifications into a snapshot."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.enums import ChangeType
from .snapshot import Snapshot, get_table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    table: str
    type: ChangeType
    new: Optional[Mapping[str, Any]] = None
    old: Optional[Mapping[str, Any]] = None

    @classmethod
    def from_payload(cls, table: str, payload: Mapping[str, Any]) -> "ChangeEvent":
        """Build from a ``{eventType, new, old}`` notification payload."""
        return cls(
            table=table,
            type=ChangeType(str(payload.get("eventType", "")).upper()),
            new=payload.get("new") or None,
            old=payload.get("old") or None,
        )


def apply_change(snapshot: Snapshot, event: ChangeEvent) -> Snapshot:
    """Return a new snapshot with ``event`` applied.

    INSERT appends when absent, UPDATE replaces in place or appends, DELETE
    removes when present. Unknown tables leave the snapshot unchanged.
    """
    try:
        spec = get_table(event.table)
    except ValueError:
        logger.warning("Ignoring change for unknown table %s", event.table)
        return snapshot

    items = list(getattr(snapshot, spec.attr))

    if event.type == ChangeType.DELETE:
        del_id = str((event.old or {}).get("id") or "")
        if not del_id:
            return snapshot
        kept = [i for i in items if i.id != del_id]
        if len(kept) == len(items):
            return snapshot
        return snapshot.with_collection(spec.attr, kept)

    if not event.new:
        return snapshot
    mapped = spec.from_row(event.new)
    idx = next((n for n, i in enumerate(items) if i.id == mapped.id), -1)

    if event.type == ChangeType.INSERT:
        if idx >= 0:
            return snapshot
        items.append(mapped)
    else:
        if idx >= 0:
            items[idx] = mapped
        else:
            items.append(mapped)
    return snapshot.with_collection(spec.attr, items)
