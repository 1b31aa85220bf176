"""Client-state store with optimistic publish and diff-based background sync.

The store holds one immutable :class:`Snapshot`. ``submit`` swaps in the new
value immediately and hands the (prev, next) pair to a worker thread that
pushes the per-table diff to the remote row store.

Each sync gets its own generation number and its own suppression window:
the window opens when the sync starts and closes ``suppress_seconds`` after
it finishes. While any window is open, incoming realtime events are dropped.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict, deque
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional, Union

from ..core.constants import MAX_NOTICES, REMOTE_PAGE_SIZE, SYNC_SUPPRESS_SECONDS
from ..core.enums import NoticeLevel
from ..core.exceptions import RemoteStoreError
from ..remote.loader import load_snapshot
from ..remote.repository import RowStore
from .diff import SnapshotDiff, TableDiff, diff_snapshots
from .realtime import ChangeEvent, apply_change
from .snapshot import EMPTY_SNAPSHOT, TABLES, Snapshot

logger = logging.getLogger(__name__)

Update = Union[Snapshot, Callable[[Snapshot], Snapshot]]

SYNC_FAILED_MESSAGE = "데이터 저장 실패. 다시 시도해주세요."
LOAD_FAILED_MESSAGE = "데이터 로딩 실패. 새로고침 해주세요."
_RESULT_HISTORY = 100


@dataclass(frozen=True)
class Notice:
    message: str
    level: NoticeLevel


@dataclass(frozen=True)
class SyncResult:
    """Outcome of pushing snapshot ``version`` to the remote store."""

    generation: int
    version: int
    ok: bool
    diff: SnapshotDiff
    error: Optional[str] = None


class SyncTicket:
    def __init__(self, *, generation: int, version: int, future: Future):
        self.generation = generation
        self.version = version
        self._future = future

    def done(self) -> bool:
        return self._future.done()

    def wait(self, timeout: Optional[float] = None) -> SyncResult:
        return self._future.result(timeout)


class SnapshotStore:
    def __init__(
        self,
        remote: RowStore,
        *,
        suppress_seconds: float = SYNC_SUPPRESS_SECONDS,
        page_size: int = REMOTE_PAGE_SIZE,
        clock: Callable[[], float] = time.monotonic,
        executor: Optional[Executor] = None,
    ):
        self._remote = remote
        self._suppress_seconds = float(suppress_seconds)
        self._page_size = int(page_size)
        self._clock = clock
        self._executor = executor or ThreadPoolExecutor(max_workers=4, thread_name_prefix="sync")

        self._lock = threading.RLock()
        self._snapshot: Snapshot = EMPTY_SNAPSHOT
        self._version = 0
        self._generation = 0
        self._loading = True
        # generation -> deadline (None while the sync is still in flight)
        self._windows: dict[int, Optional[float]] = {}
        self._results: "OrderedDict[int, SyncResult]" = OrderedDict()
        self._notices: deque[Notice] = deque(maxlen=MAX_NOTICES)

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def version(self) -> int:
        return self._version

    @property
    def loading(self) -> bool:
        return self._loading

    # ------------------------------------------------------------------ load

    def load(self) -> bool:
        """Replace the snapshot with a full reload from the remote store."""
        try:
            loaded = load_snapshot(self._remote, page_size=self._page_size)
        except RemoteStoreError:
            logger.exception("Data load failed")
            self.notify(LOAD_FAILED_MESSAGE, NoticeLevel.ERROR)
            return False

        with self._lock:
            self._snapshot = loaded
            self._version += 1
            self._loading = False
        return True

    # ---------------------------------------------------------------- submit

    def submit(self, update: Update) -> SyncTicket:
        """Publish a new snapshot now and sync the difference in the background."""
        with self._lock:
            prev = self._snapshot
            nxt = update(prev) if callable(update) else update
            if not isinstance(nxt, Snapshot):
                raise TypeError(f"Expected Snapshot, got {type(nxt)!r}")
            self._snapshot = nxt
            self._version += 1
            self._generation += 1
            generation = self._generation
            version = self._version

        diff = diff_snapshots(prev, nxt)
        if diff.is_empty:
            future: Future = Future()
            result = SyncResult(generation=generation, version=version, ok=True, diff=diff)
            self._record(result)
            future.set_result(result)
            return SyncTicket(generation=generation, version=version, future=future)

        with self._lock:
            self._windows[generation] = None
        future = self._executor.submit(self._sync, generation, version, diff)
        return SyncTicket(generation=generation, version=version, future=future)

    def _push_table(self, td: TableDiff) -> None:
        if td.upserts:
            self._remote.upsert(td.table, list(td.upserts))
        if td.deletes:
            self._remote.delete(td.table, list(td.deletes))
        logger.debug("Synced %s %s changed=%s", td.table, td.counts(), dict(td.changed_fields))

    def _sync(self, generation: int, version: int, diff: SnapshotDiff) -> SyncResult:
        dirty = [td for td in diff.tables if not td.is_empty]
        error: Optional[str] = None
        try:
            with ThreadPoolExecutor(max_workers=len(TABLES), thread_name_prefix=f"sync-{generation}") as pool:
                futures = [pool.submit(self._push_table, td) for td in dirty]
                for f in futures:
                    f.result()
        except Exception as e:
            logger.exception("Sync error (generation=%s)", generation)
            error = str(e) or e.__class__.__name__
            self.notify(SYNC_FAILED_MESSAGE, NoticeLevel.ERROR)
        finally:
            with self._lock:
                self._windows[generation] = self._clock() + self._suppress_seconds

        result = SyncResult(generation=generation, version=version, ok=error is None, diff=diff, error=error)
        self._record(result)
        if result.ok:
            logger.info("Sync ok (generation=%s): %s", generation, diff.counts())
        return result

    def _record(self, result: SyncResult) -> None:
        with self._lock:
            self._results[result.version] = result
            while len(self._results) > _RESULT_HISTORY:
                self._results.popitem(last=False)

    def result_for(self, version: int) -> Optional[SyncResult]:
        with self._lock:
            return self._results.get(version)

    @property
    def last_result(self) -> Optional[SyncResult]:
        with self._lock:
            if not self._results:
                return None
            return next(reversed(self._results.values()))

    # -------------------------------------------------------------- realtime

    def is_suppressed(self, now: Optional[float] = None) -> bool:
        now = self._clock() if now is None else now
        with self._lock:
            for generation, deadline in list(self._windows.items()):
                if deadline is not None and deadline <= now:
                    del self._windows[generation]
            return bool(self._windows)

    def apply_remote_change(self, event: ChangeEvent) -> bool:
        """Merge one remote change; dropped entirely while a suppression window is open."""
        if self.is_suppressed():
            logger.debug("Dropped %s on %s during sync suppression", event.type.value, event.table)
            return False
        with self._lock:
            nxt = apply_change(self._snapshot, event)
            if nxt is self._snapshot:
                return False
            self._snapshot = nxt
            self._version += 1
        return True

    # --------------------------------------------------------------- notices

    def notify(self, message: str, level: NoticeLevel = NoticeLevel.INFO) -> None:
        with self._lock:
            self._notices.append(Notice(message=message, level=level))

    def drain_notices(self) -> list[Notice]:
        with self._lock:
            out = list(self._notices)
            self._notices.clear()
            return out

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
