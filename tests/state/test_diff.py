from dataclasses import replace
from datetime import date

from src.worksite_ledger.worksite_ledger.state.diff import diff_collection, diff_snapshots
from src.worksite_ledger.worksite_ledger.state.snapshot import EMPTY_SNAPSHOT, get_table
from src.worksite_ledger.worksite_ledger.workers.model import Worker
from src.worksite_ledger.worksite_ledger.worklogs.model import WorkLog


def test_partition_into_inserts_updates_deletes():
    spec = get_table("workers")
    prev = [Worker(id="a", name="A"), Worker(id="b", name="B"), Worker(id="c", name="C")]
    nxt = [Worker(id="a", name="A"), Worker(id="b", name="B2"), Worker(id="d", name="D")]

    d = diff_collection(spec, prev, nxt)
    assert [r["id"] for r in d.inserts] == ["d"]
    assert [r["id"] for r in d.updates] == ["b"]
    assert d.deletes == ("c",)
    assert d.changed_fields == {"b": ("name",)}


def test_identical_snapshots_produce_empty_diff(sample_snapshot):
    assert diff_snapshots(sample_snapshot, sample_snapshot).is_empty


def test_duplicate_ids_in_next_are_collapsed():
    spec = get_table("workers")
    d = diff_collection(spec, [], [Worker(id="a", name="A"), Worker(id="a", name="A again")])
    assert len(d.inserts) == 1
    assert d.inserts[0]["name"] == "A"


def test_only_persisted_fields_count():
    spec = get_table("work_logs")
    log = WorkLog(id="l", date=date(2025, 1, 1), site_id="s", worker_id="w", md=1.0, note="")
    d = diff_collection(spec, [log], [replace(log, md=2.0)])
    assert d.changed_fields == {"l": ("md",)}


def test_snapshot_diff_counts(sample_snapshot):
    d = diff_snapshots(EMPTY_SNAPSHOT, sample_snapshot)
    counts = d.counts()
    assert counts["sites"] == {"insert": 2, "update": 0, "delete": 0}
    assert "checklists" not in counts
    assert d.for_table("work_logs").inserts
