from src.worksite_ledger.worksite_ledger.core.enums import ChangeType
from src.worksite_ledger.worksite_ledger.state.realtime import ChangeEvent, apply_change
from src.worksite_ledger.worksite_ledger.state.snapshot import EMPTY_SNAPSHOT
from src.worksite_ledger.worksite_ledger.workers.model import Worker


def test_insert_appends_once():
    ev = ChangeEvent(table="workers", type=ChangeType.INSERT, new={"id": "w1", "name": "A", "daily": 160000})
    snap = apply_change(EMPTY_SNAPSHOT, ev)
    assert snap.workers == (Worker(id="w1", name="A", daily=160000),)
    assert apply_change(snap, ev) is snap


def test_update_replaces_or_appends():
    snap = EMPTY_SNAPSHOT.put("workers", Worker(id="w1", name="A"))
    snap = apply_change(snap, ChangeEvent(table="workers", type=ChangeType.UPDATE, new={"id": "w1", "name": "B"}))
    assert [w.name for w in snap.workers] == ["B"]

    snap = apply_change(snap, ChangeEvent(table="workers", type=ChangeType.UPDATE, new={"id": "w2", "name": "C"}))
    assert [w.id for w in snap.workers] == ["w1", "w2"]


def test_delete_removes_by_old_id():
    snap = EMPTY_SNAPSHOT.put("workers", Worker(id="w1", name="A"))
    snap = apply_change(snap, ChangeEvent(table="workers", type=ChangeType.DELETE, old={"id": "w1"}))
    assert snap.workers == ()


def test_unknown_table_is_ignored():
    ev = ChangeEvent(table="payments", type=ChangeType.INSERT, new={"id": "x"})
    assert apply_change(EMPTY_SNAPSHOT, ev) is EMPTY_SNAPSHOT


def test_from_payload():
    ev = ChangeEvent.from_payload("sites", {"eventType": "delete", "old": {"id": "s1"}})
    assert ev.type == ChangeType.DELETE
    assert ev.old == {"id": "s1"}
    assert ev.new is None
