from datetime import date

from src.worksite_ledger.worksite_ledger.core.enums import ChangeType, NoticeLevel
from src.worksite_ledger.worksite_ledger.sites.model import Site
from src.worksite_ledger.worksite_ledger.state.realtime import ChangeEvent
from src.worksite_ledger.worksite_ledger.state.store import (
    LOAD_FAILED_MESSAGE,
    SYNC_FAILED_MESSAGE,
    SnapshotStore,
)
from src.worksite_ledger.worksite_ledger.workers.model import Worker

from conftest import InlineExecutor, InMemoryRowStore


def test_submit_publishes_immediately_and_pushes_diff(store, remote):
    before = store.version
    ticket = store.submit(lambda prev: prev.put("workers", Worker(id="w1", name="김철수")))

    assert store.snapshot.find("workers", "w1").name == "김철수"
    assert store.version == before + 1
    result = ticket.wait()
    assert result.ok
    assert [r["id"] for r in remote.tables["workers"]] == ["w1"]


def test_second_submit_only_sends_changed_rows(store, remote):
    store.submit(lambda prev: prev.put("workers", Worker(id="w1", name="A"))).wait()
    store.submit(lambda prev: prev.put("workers", Worker(id="w2", name="B"))).wait()
    remote.calls.clear()

    store.submit(lambda prev: prev.put("workers", Worker(id="w2", name="B2"))).wait()
    assert remote.calls == [("upsert", "workers", ["w2"])]


def test_delete_is_pushed(store, remote):
    store.submit(lambda prev: prev.put("workers", Worker(id="w1", name="A"))).wait()
    store.submit(lambda prev: prev.remove("workers", "w1")).wait()
    assert remote.tables["workers"] == []


def test_empty_diff_skips_remote_and_window(store, remote):
    remote.calls.clear()
    result = store.submit(lambda prev: prev).wait()
    assert result.ok
    assert result.diff.is_empty
    assert remote.calls == []
    assert not store.is_suppressed()


def test_sync_failure_keeps_local_state_and_notifies(store, remote):
    remote.fail_on.add("upsert")
    result = store.submit(lambda prev: prev.put("workers", Worker(id="w1", name="A"))).wait()

    assert not result.ok
    assert "upsert failed" in result.error
    assert store.snapshot.find("workers", "w1") is not None
    assert remote.tables["workers"] == []
    notices = store.drain_notices()
    assert [(n.message, n.level) for n in notices] == [(SYNC_FAILED_MESSAGE, NoticeLevel.ERROR)]
    assert store.drain_notices() == []


def test_failure_in_one_table_does_not_block_others(store, remote):
    remote.fail_on.add("upsert:workers")
    snap = store.snapshot.put("workers", Worker(id="w1", name="A")).put("sites", Site(id="s1", name="S"))
    result = store.submit(snap).wait()
    assert not result.ok
    assert [r["id"] for r in remote.tables["sites"]] == ["s1"]


def test_load_failure_notifies_and_keeps_loading(remote, clock):
    remote.fail_on.add("select")
    s = SnapshotStore(remote, clock=clock, executor=InlineExecutor())
    assert s.load() is False
    assert s.loading
    assert s.drain_notices()[0].message == LOAD_FAILED_MESSAGE


def test_load_reads_existing_rows(clock):
    remote = InMemoryRowStore(
        {
            "sites": [{"id": "s1", "name": "A", "budget": "1000", "company_name": None, "status": None}],
            "work_logs": [{"id": "l1", "date": "2025-01-02", "site_id": "s1", "worker_id": "w1", "md": "x", "note": None}],
        }
    )
    s = SnapshotStore(remote, clock=clock, executor=InlineExecutor())
    assert s.load()
    assert not s.loading
    site = s.snapshot.sites[0]
    assert (site.budget, site.company_name, site.status.value) == (1000, "", "active")
    log = s.snapshot.work_logs[0]
    assert (log.date, log.md, log.note) == (date(2025, 1, 2), 1.0, "")


def _remote_insert(site_id: str) -> ChangeEvent:
    return ChangeEvent(table="sites", type=ChangeType.INSERT, new={"id": site_id, "name": "remote"})


def test_remote_changes_dropped_during_window_then_applied(store, clock):
    store.submit(lambda prev: prev.put("workers", Worker(id="w1", name="A"))).wait()

    assert store.is_suppressed()
    assert store.apply_remote_change(_remote_insert("r1")) is False
    assert store.snapshot.find("sites", "r1") is None

    clock.advance(1.9)
    assert store.apply_remote_change(_remote_insert("r1")) is False

    clock.advance(0.2)
    assert store.apply_remote_change(_remote_insert("r1")) is True
    assert store.snapshot.find("sites", "r1").name == "remote"


def test_each_sync_has_its_own_window(store, clock):
    store.submit(lambda prev: prev.put("workers", Worker(id="w1", name="A"))).wait()
    clock.advance(1.5)
    store.submit(lambda prev: prev.put("workers", Worker(id="w2", name="B"))).wait()

    clock.advance(1.0)
    assert store.is_suppressed()
    clock.advance(1.1)
    assert not store.is_suppressed()


def test_window_also_opens_after_failed_sync(store, remote, clock):
    remote.fail_on.add("upsert")
    store.submit(lambda prev: prev.put("workers", Worker(id="w1", name="A"))).wait()
    assert store.is_suppressed()


def test_results_are_kept_by_version(store):
    ticket = store.submit(lambda prev: prev.put("workers", Worker(id="w1", name="A")))
    result = ticket.wait()
    assert store.result_for(ticket.version) == result
    assert store.last_result == result
