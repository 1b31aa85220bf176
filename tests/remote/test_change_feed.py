from src.worksite_ledger.worksite_ledger.core.enums import ChangeType
from src.worksite_ledger.worksite_ledger.remote.change_feed import PollingChangeFeed

from conftest import InMemoryRowStore


def test_first_poll_is_baseline_then_changes_are_reported():
    remote = InMemoryRowStore({"workers": [{"id": "w1", "name": "A", "daily": 150000}]})
    feed = PollingChangeFeed(remote)
    received = []
    feed.subscribe(received.append)

    assert feed.poll() == []

    remote.tables["workers"].append({"id": "w2", "name": "B", "daily": 150000})
    remote.tables["workers"][0] = {"id": "w1", "name": "A2", "daily": 150000}
    events = feed.poll()
    assert {(e.type, (e.new or e.old)["id"]) for e in events} == {
        (ChangeType.INSERT, "w2"),
        (ChangeType.UPDATE, "w1"),
    }
    assert received == events

    remote.tables["workers"] = [r for r in remote.tables["workers"] if r["id"] != "w1"]
    events = feed.poll()
    assert [(e.type, e.old["id"]) for e in events] == [(ChangeType.DELETE, "w1")]


def test_unsubscribe_stops_delivery():
    remote = InMemoryRowStore()
    feed = PollingChangeFeed(remote)
    received = []
    unsubscribe = feed.subscribe(received.append)
    feed.poll()
    unsubscribe()

    remote.tables["sites"].append({"id": "s1", "name": "S"})
    assert len(feed.poll()) == 1
    assert received == []


def test_feed_events_reach_the_store(store, remote, clock):
    feed = PollingChangeFeed(remote)
    feed.subscribe(store.apply_remote_change)
    feed.poll()

    remote.tables["sites"].append({"id": "s1", "name": "외부 입력"})
    feed.poll()
    assert store.snapshot.find("sites", "s1").name == "외부 입력"


def test_malformed_row_is_skipped_and_later_polls_continue():
    remote = InMemoryRowStore()
    feed = PollingChangeFeed(remote)
    received = []
    feed.subscribe(received.append)
    feed.poll()

    remote.tables["work_logs"].append({"id": "bad", "date": "not-a-date", "site_id": "s1", "worker_id": "w1", "md": 1})
    remote.tables["work_logs"].append({"id": "l1", "date": "2024-05-01", "site_id": "s1", "worker_id": "w1", "md": 1})
    events = feed.poll()
    assert [(e.type, e.new["id"]) for e in events] == [(ChangeType.INSERT, "l1")]

    remote.tables["work_logs"].append({"id": "l2", "date": "2024-05-02", "site_id": "s1", "worker_id": "w1", "md": 1})
    events = feed.poll()
    assert [(e.type, e.new["id"]) for e in events] == [(ChangeType.INSERT, "l2")]
    assert [e.new["id"] for e in received] == ["l1", "l2"]


def test_failing_subscriber_does_not_block_others():
    remote = InMemoryRowStore()
    feed = PollingChangeFeed(remote)

    def broken(event):
        raise ValueError("boom")

    received = []
    feed.subscribe(broken)
    feed.subscribe(received.append)
    feed.poll()

    remote.tables["sites"].append({"id": "s1", "name": "S"})
    feed.poll()
    assert [e.new["id"] for e in received] == ["s1"]


def test_read_failure_is_retried_on_the_next_run():
    remote = InMemoryRowStore()
    feed = PollingChangeFeed(remote)
    received = []
    feed.subscribe(received.append)
    feed.poll_safely()

    remote.fail_on.add("select")
    remote.tables["sites"].append({"id": "s1", "name": "S"})
    feed.poll_safely()
    assert received == []

    remote.fail_on.clear()
    feed.poll_safely()
    assert [e.new["id"] for e in received] == ["s1"]


def test_schedule_adds_an_interval_job():
    class RecordingScheduler:
        def __init__(self):
            self.jobs = []

        def add_job(self, **kwargs):
            self.jobs.append(kwargs)
            return kwargs

    feed = PollingChangeFeed(InMemoryRowStore())
    scheduler = RecordingScheduler()
    feed.schedule(scheduler, interval=5)

    [job] = scheduler.jobs
    assert job["trigger"] == "interval"
    assert job["seconds"] == 5
    assert job["id"] == "change_feed_poll"
    assert job["func"] == feed.poll_safely
