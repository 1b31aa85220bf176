from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import NoticeLevel
from ..core.exceptions import ImportFormatError
from ..state.store import SnapshotStore
from .expenses import plan_expense_import
from .payroll import plan_payroll_import
from .readers import read_rows
from .sites import plan_site_import

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportResult:
    added: int = 0
    updated: int = 0
    skipped: int = 0
    message: str = ""
    latest_date: Optional[date] = None
    created_sites: int = 0
    created_workers: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.added or self.updated)


class ImportService:
    """Reads an uploaded file, plans the change against the current snapshot and submits it."""

    def __init__(self, store: SnapshotStore):
        self._store = store

    def _fail(self, e: ImportFormatError, kind: str, filename: str) -> None:
        logger.warning("%s import failed (%s): %s", kind, filename, e)
        self._store.notify(str(e), NoticeLevel.ERROR)

    def import_sites(self, data: bytes, filename: str) -> ImportResult:
        try:
            plan = plan_site_import(self._store.snapshot, read_rows(data, filename))
        except ImportFormatError as e:
            self._fail(e, "Site", filename)
            raise

        if plan.is_empty:
            result = ImportResult(skipped=plan.skipped, message="변경할 내용이 없습니다.")
            self._store.notify(result.message, NoticeLevel.INFO)
            return result

        self._store.submit(plan.apply)
        result = ImportResult(
            added=len(plan.new_sites),
            updated=len(plan.updated_sites),
            skipped=plan.skipped,
            created_sites=len(plan.new_sites),
            message=f"현장 {len(plan.new_sites)}개 추가, {len(plan.updated_sites)}개 업데이트 완료",
        )
        logger.info("Site import %s: added=%s updated=%s skipped=%s", filename, result.added, result.updated, result.skipped)
        self._store.notify(result.message, NoticeLevel.SUCCESS)
        return result

    def import_expenses(self, data: bytes, filename: str, *, today: Optional[date] = None) -> ImportResult:
        try:
            plan = plan_expense_import(self._store.snapshot, read_rows(data, filename), today=today)
        except ImportFormatError as e:
            self._fail(e, "Expense", filename)
            raise

        if plan.is_empty:
            e = ImportFormatError("등록할 내역이 없거나 형식이 올바르지 않습니다.")
            self._fail(e, "Expense", filename)
            raise e

        self._store.submit(plan.apply)
        result = ImportResult(
            added=len(plan.transactions),
            skipped=plan.skipped,
            created_sites=len(plan.new_sites),
            message=f"{len(plan.transactions)}건의 경비 내역이 등록되었습니다.",
        )
        logger.info("Expense import %s: added=%s skipped=%s new_sites=%s", filename, result.added, result.skipped, result.created_sites)
        self._store.notify(result.message, NoticeLevel.SUCCESS)
        return result

    def import_payroll(self, data: bytes, filename: str, *, replace_existing: bool = False) -> ImportResult:
        try:
            plan = plan_payroll_import(self._store.snapshot, read_rows(data, filename), replace_existing=replace_existing)
        except ImportFormatError as e:
            self._fail(e, "Payroll", filename)
            raise

        if plan.is_empty and not replace_existing:
            result = ImportResult(skipped=plan.skipped + plan.duplicates, message="새로 등록할 작업일지가 없습니다.")
            self._store.notify(result.message, NoticeLevel.INFO)
            return result

        self._store.submit(plan.apply)
        message = f"작업일지 {len(plan.work_logs)}건 등록"
        if plan.duplicates:
            message += f" (중복 {plan.duplicates}건 제외)"
        result = ImportResult(
            added=len(plan.work_logs),
            updated=len(plan.updated_workers) + len(plan.updated_sites),
            skipped=plan.skipped + plan.duplicates,
            latest_date=plan.latest_date,
            created_sites=len(plan.new_sites),
            created_workers=len(plan.new_workers),
            message=message,
        )
        logger.info(
            "Payroll import %s: logs=%s skipped=%s duplicates=%s workers+=%s sites+=%s latest=%s",
            filename,
            result.added,
            plan.skipped,
            plan.duplicates,
            result.created_workers,
            result.created_sites,
            result.latest_date,
        )
        self._store.notify(message, NoticeLevel.SUCCESS)
        return result
