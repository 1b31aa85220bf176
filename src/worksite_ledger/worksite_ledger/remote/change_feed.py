"""Change notifications for a store that has no push channel of its own.

Each poll re-reads every table and compares it with the rows seen on the
previous poll; differences become ChangeEvents for the subscribers. The first
poll only records the baseline.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Mapping, Sequence

from ..core.constants import REMOTE_PAGE_SIZE
from ..core.enums import ChangeType
from ..core.exceptions import RemoteStoreError
from ..state.realtime import ChangeEvent
from ..state.snapshot import TABLES, TableSpec
from .loader import fetch_all
from .repository import ChangeFeed, RowStore

logger = logging.getLogger(__name__)


class PollingChangeFeed(ChangeFeed):
    def __init__(
        self,
        remote: RowStore,
        *,
        tables: Sequence[TableSpec] = TABLES,
        page_size: int = REMOTE_PAGE_SIZE,
    ):
        self._remote = remote
        self._tables = tuple(tables)
        self._page_size = int(page_size)
        self._seen: dict[str, dict[str, Any]] = {}
        self._subscribers: list[Callable[[ChangeEvent], Any]] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: Callable[[ChangeEvent], Any]) -> Callable[[], None]:
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _read(self, spec: TableSpec) -> dict[str, Any]:
        rows = fetch_all(
            self._remote, spec.table, order_by=spec.order_by, ascending=spec.ascending, page_size=self._page_size
        )
        seen: dict[str, Any] = {}
        for r in rows:
            try:
                seen[str(r["id"])] = (spec.from_row(r), dict(r))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed row in %s (id=%s): %s", spec.table, r.get("id"), e)
        return seen

    @staticmethod
    def _events(table: str, before: Mapping[str, Any], after: Mapping[str, Any]) -> list[ChangeEvent]:
        events: list[ChangeEvent] = []
        for row_id, (entity, row) in after.items():
            old = before.get(row_id)
            if old is None:
                events.append(ChangeEvent(table=table, type=ChangeType.INSERT, new=row))
            elif old[0] != entity:
                events.append(ChangeEvent(table=table, type=ChangeType.UPDATE, new=row, old=old[1]))
        for row_id, (_, row) in before.items():
            if row_id not in after:
                events.append(ChangeEvent(table=table, type=ChangeType.DELETE, old=row))
        return events

    def poll(self) -> list[ChangeEvent]:
        """Read all tables once and dispatch the detected changes."""
        events: list[ChangeEvent] = []
        for spec in self._tables:
            current = self._read(spec)
            previous = self._seen.get(spec.table)
            self._seen[spec.table] = current
            if previous is None:
                continue
            events.extend(self._events(spec.table, previous, current))

        with self._lock:
            subscribers = list(self._subscribers)
        for event in events:
            for cb in subscribers:
                try:
                    cb(event)
                except Exception:
                    logger.exception("Change subscriber failed on %s %s", event.type.value, event.table)
        return events

    def poll_safely(self) -> None:
        """Scheduled entry point; a failed read is logged and retried on the next run."""
        try:
            self.poll()
        except RemoteStoreError:
            logger.warning("Change feed poll failed", exc_info=True)

    def schedule(self, scheduler: Any, *, interval: float, job_id: str = "change_feed_poll") -> Any:
        """Add the poll to an APScheduler scheduler as an interval job."""
        return scheduler.add_job(
            func=self.poll_safely,
            trigger="interval",
            seconds=interval,
            id=job_id,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
