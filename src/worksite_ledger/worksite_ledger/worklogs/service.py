from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional

from ..common.ids import new_id
from ..common.validators import require_positive
from ..core.constants import RECENT_LIMIT
from ..core.exceptions import ValidationError
from ..state.store import SnapshotStore
from .model import WorkLog


class WorkLogService:
    def __init__(self, store: SnapshotStore):
        self._store = store

    def logs_for_date(self, day: date) -> list[WorkLog]:
        return [l for l in self._store.snapshot.work_logs if l.date == day]

    def get(self, log_id: str) -> WorkLog:
        log = self._store.snapshot.find("work_logs", log_id)
        if not log:
            raise ValidationError("공수 내역을 찾을 수 없습니다.")
        return log

    @staticmethod
    def _check_refs(site_id: str, worker_id: str) -> None:
        if not site_id:
            raise ValidationError("현장을 선택해주세요.")
        if not worker_id:
            raise ValidationError("작업자를 선택해주세요.")

    def add_log(
        self,
        *,
        day: date,
        site_id: str,
        worker_id: str,
        md: float = 1.0,
        note: str = "",
    ) -> WorkLog:
        self._check_refs(site_id, worker_id)
        log = WorkLog(
            id=new_id(),
            date=day,
            site_id=site_id,
            worker_id=worker_id,
            md=float(require_positive(md, "공수")),
            note=(note or "").strip(),
        )
        self._store.submit(lambda prev: prev.put("work_logs", log))
        return log

    def update_log(
        self,
        log_id: str,
        *,
        site_id: Optional[str] = None,
        worker_id: Optional[str] = None,
        md: Optional[float] = None,
        note: Optional[str] = None,
    ) -> WorkLog:
        log = self.get(log_id)
        updated = replace(
            log,
            site_id=site_id if site_id is not None else log.site_id,
            worker_id=worker_id if worker_id is not None else log.worker_id,
            md=float(require_positive(md, "공수")) if md is not None else log.md,
            note=(note or "").strip() if note is not None else log.note,
        )
        self._check_refs(updated.site_id, updated.worker_id)
        self._store.submit(lambda prev: prev.put("work_logs", updated))
        return updated

    def delete_log(self, log_id: str) -> None:
        self.get(log_id)
        self._store.submit(lambda prev: prev.remove("work_logs", log_id))

    def recent_ids(self, *, limit: int = RECENT_LIMIT) -> dict:
        """First distinct site/worker ids in collection order (for quick pickers)."""
        sites: list[str] = []
        workers: list[str] = []
        for log in self._store.snapshot.work_logs:
            if log.site_id not in sites:
                sites.append(log.site_id)
            if log.worker_id not in workers:
                workers.append(log.worker_id)
        return {"site_ids": sites[:limit], "worker_ids": workers[:limit]}
