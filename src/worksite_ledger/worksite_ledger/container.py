from __future__ import annotations

from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Optional

from .checklists.service import ChecklistService
from .core.constants import REMOTE_PAGE_SIZE, SYNC_SUPPRESS_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .imports.service import ImportService
from .payroll.service import PayrollReportService
from .remote.change_feed import PollingChangeFeed
from .remote.mysql_row_store import MySQLRowStore
from .remote.repository import RowStore
from .sites.service import SiteService
from .state.store import SnapshotStore
from .transactions.service import TransactionService
from .workers.service import WorkerService
from .worklogs.service import WorkLogService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    row_store: RowStore
    store: SnapshotStore
    change_feed: PollingChangeFeed

    site_service: SiteService
    worker_service: WorkerService
    worklog_service: WorkLogService
    transaction_service: TransactionService
    checklist_service: ChecklistService
    payroll_report_service: PayrollReportService
    import_service: ImportService


def build_services(
    row_store: RowStore,
    *,
    conn: Optional[DatabaseConnection] = None,
    suppress_seconds: float = SYNC_SUPPRESS_SECONDS,
    page_size: int = REMOTE_PAGE_SIZE,
    executor: Optional[Executor] = None,
) -> Container:
    store = SnapshotStore(row_store, suppress_seconds=suppress_seconds, page_size=page_size, executor=executor)
    change_feed = PollingChangeFeed(row_store, page_size=page_size)
    change_feed.subscribe(store.apply_remote_change)

    return Container(
        conn=conn,
        row_store=row_store,
        store=store,
        change_feed=change_feed,
        site_service=SiteService(store),
        worker_service=WorkerService(store),
        worklog_service=WorkLogService(store),
        transaction_service=TransactionService(store),
        checklist_service=ChecklistService(store),
        payroll_report_service=PayrollReportService(),
        import_service=ImportService(store),
    )


def build_container(
    *,
    db_config: dict,
    suppress_seconds: float = SYNC_SUPPRESS_SECONDS,
    page_size: int = REMOTE_PAGE_SIZE,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    return build_services(
        MySQLRowStore(conn),
        conn=conn,
        suppress_seconds=suppress_seconds,
        page_size=page_size,
    )
