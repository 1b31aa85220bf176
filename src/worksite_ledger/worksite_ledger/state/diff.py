"""Structural diff between two snapshots, keyed by entity id.

Items are compared field by field on their persisted row form, so only
fields that are actually written to the remote table can make an item dirty.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence, Tuple

from .snapshot import TABLES, Snapshot, TableSpec


@dataclass(frozen=True)
class TableDiff:
    table: str
    inserts: Tuple[dict, ...] = ()
    updates: Tuple[dict, ...] = ()
    deletes: Tuple[str, ...] = ()
    changed_fields: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    @property
    def upserts(self) -> Tuple[dict, ...]:
        return self.inserts + self.updates

    @property
    def is_empty(self) -> bool:
        return not (self.inserts or self.updates or self.deletes)

    def counts(self) -> dict:
        return {"insert": len(self.inserts), "update": len(self.updates), "delete": len(self.deletes)}


@dataclass(frozen=True)
class SnapshotDiff:
    tables: Tuple[TableDiff, ...] = ()

    @property
    def is_empty(self) -> bool:
        return all(t.is_empty for t in self.tables)

    def for_table(self, table: str) -> TableDiff:
        for t in self.tables:
            if t.table == table:
                return t
        return TableDiff(table=table)

    def counts(self) -> dict:
        return {t.table: t.counts() for t in self.tables if not t.is_empty}


def _changed_fields(before: Mapping, after: Mapping) -> Tuple[str, ...]:
    keys = list(after.keys()) + [k for k in before.keys() if k not in after]
    return tuple(k for k in keys if before.get(k) != after.get(k))


def diff_collection(spec: TableSpec, prev: Sequence, next_: Sequence) -> TableDiff:
    prev_rows = {item.id: item.to_row() for item in prev}
    next_ids: set[str] = set()

    inserts: list[dict] = []
    updates: list[dict] = []
    changed: dict[str, Tuple[str, ...]] = {}

    for item in next_:
        if item.id in next_ids:
            continue
        next_ids.add(item.id)
        row = item.to_row()
        before = prev_rows.get(item.id)
        if before is None:
            inserts.append(row)
            continue
        fields = _changed_fields(before, row)
        if fields:
            updates.append(row)
            changed[item.id] = fields

    deletes = tuple(i for i in prev_rows if i not in next_ids)
    return TableDiff(
        table=spec.table,
        inserts=tuple(inserts),
        updates=tuple(updates),
        deletes=deletes,
        changed_fields=changed,
    )


def diff_snapshots(prev: Snapshot, next_: Snapshot) -> SnapshotDiff:
    return SnapshotDiff(
        tables=tuple(
            diff_collection(spec, getattr(prev, spec.attr), getattr(next_, spec.attr))
            for spec in TABLES
        )
    )
