from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import parse_sheet_date, today_local
from ..common.formatting import normalize_text, to_money
from ..common.ids import new_id
from ..common.matching import match_name
from ..core.constants import DEFAULT_EXPENSE_CATEGORY
from ..core.enums import SiteStatus
from ..core.exceptions import ImportFormatError
from ..sites.model import Site
from ..state.snapshot import Snapshot
from ..transactions.model import Transaction
from .columns import EXPENSE_COLUMNS, map_columns
from .readers import Row, headers_of


@dataclass(frozen=True)
class ExpenseImportPlan:
    transactions: tuple[Transaction, ...] = ()
    new_sites: tuple[Site, ...] = ()
    skipped: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.transactions

    def apply(self, prev: Snapshot) -> Snapshot:
        return prev.with_collection("sites", prev.sites + self.new_sites).with_collection(
            "transactions", prev.transactions + self.transactions
        )


def plan_expense_import(
    snapshot: Snapshot,
    rows: Sequence[Row],
    *,
    today: Optional[date] = None,
) -> ExpenseImportPlan:
    """Turn expense rows into transactions.

    Rows with a non-positive amount are skipped. A missing or unreadable date
    falls back to ``today``. Unknown site names create new active sites;
    unknown worker names leave the worker empty.
    """
    if not rows:
        raise ImportFormatError("등록할 내역이 없거나 형식이 올바르지 않습니다.")
    headers = headers_of(list(rows))
    cols = map_columns(headers, EXPENSE_COLUMNS)
    if not cols["amount"]:
        raise ImportFormatError(
            f"금액 컬럼을 찾을 수 없습니다. (감지된 헤더: {', '.join(headers)})",
            headers=headers,
        )
    today = today or today_local()

    def cell(row: Row, field: str):
        col = cols[field]
        return row.get(col) if col else None

    sites: list[Site] = list(snapshot.sites)
    new_sites: list[Site] = []
    txs: list[Transaction] = []
    skipped = 0

    for row in rows:
        amount = to_money(cell(row, "amount"), 0)
        if amount <= 0:
            skipped += 1
            continue

        category = normalize_text(cell(row, "category")) or DEFAULT_EXPENSE_CATEGORY
        description = normalize_text(cell(row, "description")) or category
        day = parse_sheet_date(cell(row, "date")) or today

        site_id = ""
        site_name = normalize_text(cell(row, "site"))
        if site_name:
            site = match_name(site_name, sites, key=lambda s: s.name)
            if site is None:
                site = Site(id=new_id(), name=site_name, budget=0, company_name="", status=SiteStatus.ACTIVE)
                sites.append(site)
                new_sites.append(site)
            site_id = site.id

        worker_id = ""
        worker_name = normalize_text(cell(row, "worker"))
        if worker_name:
            worker = match_name(worker_name, snapshot.workers, key=lambda w: w.name, allow_partial=False)
            if worker:
                worker_id = worker.id

        txs.append(
            Transaction(
                id=new_id(),
                date=day,
                category=category,
                amount=amount,
                description=description,
                site_id=site_id,
                worker_id=worker_id,
            )
        )

    return ExpenseImportPlan(transactions=tuple(txs), new_sites=tuple(new_sites), skipped=skipped)
