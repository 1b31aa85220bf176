from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Mapping, Tuple

from ..checklists.model import ChecklistItem
from ..sites.model import Site
from ..transactions.model import Transaction
from ..worklogs.model import WorkLog
from ..workers.model import Worker


@dataclass(frozen=True)
class Snapshot:
    """전체 다섯 개 컬렉션의 한 시점 값 (불변).

    Every change produces a new Snapshot; nothing is mutated in place.
    """

    sites: Tuple[Site, ...] = ()
    workers: Tuple[Worker, ...] = ()
    work_logs: Tuple[WorkLog, ...] = ()
    transactions: Tuple[Transaction, ...] = ()
    checklists: Tuple[ChecklistItem, ...] = ()

    def with_collection(self, attr: str, items) -> "Snapshot":
        return replace(self, **{attr: tuple(items)})

    def put(self, attr: str, item) -> "Snapshot":
        """Replace the item with the same id, or append it."""
        items = list(getattr(self, attr))
        for n, existing in enumerate(items):
            if existing.id == item.id:
                items[n] = item
                return self.with_collection(attr, items)
        items.append(item)
        return self.with_collection(attr, items)

    def remove(self, attr: str, item_id: str) -> "Snapshot":
        return self.with_collection(attr, [i for i in getattr(self, attr) if i.id != item_id])

    def find(self, attr: str, item_id: str):
        return next((i for i in getattr(self, attr) if i.id == item_id), None)

    def site_by_id(self) -> dict[str, Site]:
        return {s.id: s for s in self.sites}

    def worker_by_id(self) -> dict[str, Worker]:
        return {w.id: w for w in self.workers}


EMPTY_SNAPSHOT = Snapshot()


@dataclass(frozen=True)
class TableSpec:
    """Maps one remote table to one snapshot collection."""

    table: str
    attr: str
    from_row: Callable[[Mapping[str, Any]], Any]
    columns: Tuple[str, ...]
    order_by: str
    ascending: bool = True


TABLES: Tuple[TableSpec, ...] = (
    TableSpec(
        table="sites",
        attr="sites",
        from_row=Site.from_row,
        columns=("id", "name", "budget", "company_name", "status"),
        order_by="created_at",
        ascending=True,
    ),
    TableSpec(
        table="workers",
        attr="workers",
        from_row=Worker.from_row,
        columns=("id", "name", "daily"),
        order_by="created_at",
        ascending=True,
    ),
    TableSpec(
        table="work_logs",
        attr="work_logs",
        from_row=WorkLog.from_row,
        columns=("id", "date", "site_id", "worker_id", "md", "note"),
        order_by="date",
        ascending=False,
    ),
    TableSpec(
        table="transactions",
        attr="transactions",
        from_row=Transaction.from_row,
        columns=("id", "date", "site_id", "category", "amount", "description"),
        order_by="date",
        ascending=False,
    ),
    TableSpec(
        table="checklists",
        attr="checklists",
        from_row=ChecklistItem.from_row,
        columns=("id", "type", "date", "title", "amount", "status", "memo"),
        order_by="date",
        ascending=False,
    ),
)

TABLES_BY_NAME: dict[str, TableSpec] = {t.table: t for t in TABLES}


def get_table(table: str) -> TableSpec:
    try:
        return TABLES_BY_NAME[table]
    except KeyError:
        raise ValueError(f"Unknown table: {table!r}") from None
