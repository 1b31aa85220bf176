from __future__ import annotations

import copy
from concurrent.futures import Executor, Future
from datetime import date
from typing import Any, Mapping, Optional, Sequence

import pytest

from src.worksite_ledger.worksite_ledger.core.enums import SiteStatus
from src.worksite_ledger.worksite_ledger.core.exceptions import RemoteStoreError
from src.worksite_ledger.worksite_ledger.sites.model import Site
from src.worksite_ledger.worksite_ledger.state.snapshot import Snapshot
from src.worksite_ledger.worksite_ledger.state.store import SnapshotStore
from src.worksite_ledger.worksite_ledger.transactions.model import Transaction
from src.worksite_ledger.worksite_ledger.workers.model import Worker
from src.worksite_ledger.worksite_ledger.worklogs.model import WorkLog


class InMemoryRowStore:
    """RowStore fake: one list of dict rows per table, insertion order = created_at."""

    def __init__(self, tables: Optional[dict[str, list[dict]]] = None):
        self.tables: dict[str, list[dict]] = {
            name: [] for name in ("sites", "workers", "work_logs", "transactions", "checklists")
        }
        for name, rows in (tables or {}).items():
            self.tables[name] = [dict(r) for r in rows]
        self.fail_on: set[str] = set()
        self.calls: list[tuple] = []

    def _check(self, op: str, table: str) -> None:
        if op in self.fail_on or f"{op}:{table}" in self.fail_on:
            raise RemoteStoreError(f"{op} failed", table=table)

    def select_page(self, table: str, *, order_by: str, ascending: bool, offset: int, limit: int) -> Sequence[Mapping[str, Any]]:
        self._check("select", table)
        self.calls.append(("select", table, offset, limit))
        rows = list(self.tables[table])
        if order_by != "created_at":
            rows.sort(key=lambda r: r[order_by], reverse=not ascending)
        elif not ascending:
            rows.reverse()
        return [copy.deepcopy(r) for r in rows[offset : offset + limit]]

    def upsert(self, table: str, rows: Sequence[Mapping[str, Any]]) -> None:
        self._check("upsert", table)
        self.calls.append(("upsert", table, [r["id"] for r in rows]))
        existing = self.tables[table]
        for row in rows:
            for n, r in enumerate(existing):
                if r["id"] == row["id"]:
                    existing[n] = {**r, **row}
                    break
            else:
                existing.append(dict(row))

    def delete(self, table: str, ids: Sequence[str]) -> None:
        self._check("delete", table)
        self.calls.append(("delete", table, list(ids)))
        drop = set(ids)
        self.tables[table] = [r for r in self.tables[table] if r["id"] not in drop]


class InlineExecutor(Executor):
    """Runs submitted work immediately on the calling thread."""

    def submit(self, fn, /, *args, **kwargs):
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except BaseException as e:
            future.set_exception(e)
        return future


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def remote() -> InMemoryRowStore:
    return InMemoryRowStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(remote, clock) -> SnapshotStore:
    s = SnapshotStore(remote, suppress_seconds=2.0, clock=clock, executor=InlineExecutor())
    s.load()
    return s


@pytest.fixture
def sample_snapshot() -> Snapshot:
    sites = (
        Site(id="s1", name="강남 현장", budget=10_000_000, company_name="대한건설", status=SiteStatus.ACTIVE),
        Site(id="s2", name="판교 현장", budget=5_000_000, company_name="미래건설", status=SiteStatus.SCHEDULED),
    )
    workers = (
        Worker(id="w1", name="김철수", daily=180000),
        Worker(id="w2", name="이영희", daily=150000),
    )
    logs = (
        WorkLog(id="l1", date=date(2025, 1, 10), site_id="s1", worker_id="w1", md=1.5),
        WorkLog(id="l2", date=date(2025, 1, 11), site_id="s1", worker_id="w2", md=1.0),
        WorkLog(id="l3", date=date(2025, 2, 1), site_id="s2", worker_id="w1", md=1.0, note="야간"),
    )
    txs = (
        Transaction(id="t1", date=date(2025, 1, 10), category="점심", amount=50000, description="점심(김철수)"),
        Transaction(id="t2", date=date(2025, 1, 12), category="자재", amount=200000, description="철물", site_id="s1"),
    )
    return Snapshot(sites=sites, workers=workers, work_logs=logs, transactions=txs)


@pytest.fixture
def seeded_store(store, sample_snapshot) -> SnapshotStore:
    store.submit(sample_snapshot).wait()
    return store
