from datetime import date

import pytest

from src.worksite_ledger.worksite_ledger.core.exceptions import RemoteStoreError
from src.worksite_ledger.worksite_ledger.remote.loader import fetch_all, load_snapshot

from conftest import InMemoryRowStore


def _workers(n):
    return [{"id": f"w{i}", "name": f"W{i}", "daily": 150000} for i in range(n)]


def test_fetch_all_pages_until_short_page():
    remote = InMemoryRowStore({"workers": _workers(5)})
    rows = fetch_all(remote, "workers", order_by="created_at", ascending=True, page_size=2)
    assert [r["id"] for r in rows] == [f"w{i}" for i in range(5)]
    assert [c[2] for c in remote.calls if c[0] == "select"] == [0, 2, 4]


def test_fetch_all_exact_multiple_needs_one_extra_call():
    remote = InMemoryRowStore({"workers": _workers(4)})
    rows = fetch_all(remote, "workers", order_by="created_at", ascending=True, page_size=2)
    assert len(rows) == 4
    assert len([c for c in remote.calls if c[0] == "select"]) == 3


def test_load_snapshot_orders_dated_tables_newest_first():
    remote = InMemoryRowStore(
        {
            "transactions": [
                {"id": "t1", "date": date(2025, 1, 1), "category": "점심", "amount": 10000},
                {"id": "t2", "date": date(2025, 1, 3), "category": "주유", "amount": 50000},
            ],
            "workers": _workers(2),
        }
    )
    snap = load_snapshot(remote, page_size=1000)
    assert [t.id for t in snap.transactions] == ["t2", "t1"]
    assert [w.id for w in snap.workers] == ["w0", "w1"]
    assert snap.transactions[0].description == ""


def test_malformed_row_is_a_remote_error():
    remote = InMemoryRowStore({"work_logs": [{"id": "l1", "date": "not-a-date"}]})
    with pytest.raises(RemoteStoreError):
        load_snapshot(remote)
