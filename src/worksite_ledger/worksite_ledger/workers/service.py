from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..common.formatting import to_money
from ..common.ids import new_id
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_DAILY_WAGE
from ..core.exceptions import ValidationError
from ..state.store import SnapshotStore
from .model import Worker


class WorkerService:
    def __init__(self, store: SnapshotStore):
        self._store = store

    def list_workers(self, *, search: str = "") -> list[Worker]:
        q = (search or "").strip().lower()
        workers = self._store.snapshot.workers
        if not q:
            return list(workers)
        return [w for w in workers if q in w.name.lower()]

    def get(self, worker_id: str) -> Worker:
        worker = self._store.snapshot.find("workers", worker_id)
        if not worker:
            raise ValidationError("작업자를 찾을 수 없습니다.")
        return worker

    def add_worker(self, *, name: str, daily=DEFAULT_DAILY_WAGE, worker_id: Optional[str] = None) -> Worker:
        worker = Worker(
            id=worker_id or new_id(),
            name=require_non_empty(name, "이름"),
            daily=to_money(daily, 0),
        )
        self._store.submit(lambda prev: prev.put("workers", worker))
        return worker

    def update_worker(self, worker_id: str, *, name: Optional[str] = None, daily=None) -> Worker:
        worker = self.get(worker_id)
        changes = {}
        if name is not None:
            changes["name"] = require_non_empty(name, "이름")
        if daily is not None:
            changes["daily"] = to_money(daily, 0)
        updated = replace(worker, **changes)
        self._store.submit(lambda prev: prev.put("workers", updated))
        return updated

    def delete_worker(self, worker_id: str) -> None:
        self.get(worker_id)
        self._store.submit(lambda prev: prev.remove("workers", worker_id))
