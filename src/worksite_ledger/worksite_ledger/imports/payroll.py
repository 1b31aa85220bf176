"""Work-log (payroll) import.

Each row names a worker, a date, a site and a man-day quantity, optionally
with the gross pay and the customer company. Workers and sites unknown to the
snapshot are created; the worker's daily rate is taken as the median of the
per-row ``gross / md`` rates found in the file.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import parse_sheet_date
from ..common.formatting import median, normalize_text, round_half_up, to_num
from ..common.ids import new_id
from ..common.matching import match_name
from ..core.constants import DAILY_RATE_ROUNDING, DEFAULT_DAILY_WAGE, UNASSIGNED_SITE_NAME
from ..core.enums import SiteStatus
from ..core.exceptions import ImportFormatError
from ..sites.model import Site
from ..state.snapshot import Snapshot
from ..workers.model import Worker
from ..worklogs.model import WorkLog
from .columns import PAYROLL_COLUMNS, map_columns
from .readers import Row, headers_of

MISSING_COLUMNS_MESSAGE = "CSV 컬럼을 확인해주세요. (작업자/일자/현장/공수)"


@dataclass(frozen=True)
class PayrollRecord:
    """One usable row after column mapping and coercion."""

    worker: str
    date: date
    site: str
    company: str
    md: float
    gross: float
    note: str


@dataclass(frozen=True)
class PayrollImportPlan:
    work_logs: tuple[WorkLog, ...] = ()
    new_workers: tuple[Worker, ...] = ()
    updated_workers: tuple[Worker, ...] = ()
    new_sites: tuple[Site, ...] = ()
    updated_sites: tuple[Site, ...] = ()
    skipped: int = 0
    duplicates: int = 0
    latest_date: Optional[date] = None
    replace_existing: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.work_logs

    def apply(self, prev: Snapshot) -> Snapshot:
        nxt = prev
        for worker in self.updated_workers + self.new_workers:
            nxt = nxt.put("workers", worker)
        for site in self.updated_sites + self.new_sites:
            nxt = nxt.put("sites", site)
        logs = self.work_logs if self.replace_existing else nxt.work_logs + self.work_logs
        return nxt.with_collection("work_logs", logs)


def normalize_rows(rows: Sequence[Row]) -> tuple[list[PayrollRecord], int]:
    """Map raw rows to records; returns (records, skipped)."""
    headers = headers_of(list(rows))
    cols = map_columns(headers, PAYROLL_COLUMNS)
    if not (cols["worker"] and cols["date"] and cols["md"]):
        raise ImportFormatError(MISSING_COLUMNS_MESSAGE, headers=headers)

    def cell(row: Row, field: str):
        col = cols[field]
        return row.get(col) if col else None

    records: list[PayrollRecord] = []
    skipped = 0
    for row in rows:
        worker = normalize_text(cell(row, "worker"))
        day = parse_sheet_date(cell(row, "date"))
        md = float(to_num(cell(row, "md"), 0))
        if not worker or day is None or md <= 0:
            skipped += 1
            continue
        records.append(
            PayrollRecord(
                worker=worker,
                date=day,
                site=normalize_text(cell(row, "site")) or UNASSIGNED_SITE_NAME,
                company=normalize_text(cell(row, "company")),
                md=md,
                gross=float(to_num(cell(row, "gross"), 0)),
                note=normalize_text(cell(row, "note")),
            )
        )
    return records, skipped


def daily_rate(gross: float, md: float) -> int:
    return round_half_up(gross / md / DAILY_RATE_ROUNDING) * DAILY_RATE_ROUNDING


def infer_daily_rates(records: Sequence[PayrollRecord]) -> dict[str, int]:
    """Median per-row daily rate per worker name (rows without pay are ignored)."""
    rates: dict[str, list[int]] = defaultdict(list)
    for r in records:
        if r.md > 0 and r.gross > 0:
            rates[r.worker].append(daily_rate(r.gross, r.md))
    return {name: int(median(values)) for name, values in rates.items()}


def most_common_company(records: Sequence[PayrollRecord]) -> dict[str, str]:
    """Most frequent non-empty company per site name; ties go to the first seen."""
    counts: dict[str, Counter] = defaultdict(Counter)
    for r in records:
        if r.company:
            counts[r.site][r.company] += 1
    return {site: c.most_common(1)[0][0] for site, c in counts.items()}


def plan_payroll_import(
    snapshot: Snapshot,
    rows: Sequence[Row],
    *,
    replace_existing: bool = False,
) -> PayrollImportPlan:
    if not rows:
        raise ImportFormatError(MISSING_COLUMNS_MESSAGE)
    records, skipped = normalize_rows(rows)
    if not records:
        raise ImportFormatError(MISSING_COLUMNS_MESSAGE, headers=headers_of(list(rows)))

    rates = infer_daily_rates(records)
    companies = most_common_company(records)

    # workers
    workers: dict[str, Worker] = {}
    new_workers: list[Worker] = []
    updated_workers: list[Worker] = []
    for name in dict.fromkeys(r.worker for r in records):
        rate = rates.get(name, 0)
        existing = match_name(name, snapshot.workers, key=lambda w: w.name, allow_partial=False)
        if existing is None:
            worker = Worker(id=new_id(), name=name, daily=rate or DEFAULT_DAILY_WAGE)
            new_workers.append(worker)
        elif rate > 0 and rate != existing.daily:
            worker = replace(existing, daily=rate)
            updated_workers.append(worker)
        else:
            worker = existing
        workers[name] = worker

    # sites
    sites: dict[str, Site] = {}
    new_sites: list[Site] = []
    updated_sites: list[Site] = []
    for name in dict.fromkeys(r.site for r in records):
        company = companies.get(name, "")
        existing = match_name(name, snapshot.sites, key=lambda s: s.name, allow_partial=False)
        if existing is None:
            site = Site(id=new_id(), name=name, budget=0, company_name=company, status=SiteStatus.ACTIVE)
            new_sites.append(site)
        elif company and company != existing.company_name:
            site = replace(existing, company_name=company)
            updated_sites.append(site)
        else:
            site = existing
        sites[name] = site

    seen = set() if replace_existing else {log.dedup_key() for log in snapshot.work_logs}
    logs: list[WorkLog] = []
    duplicates = 0
    for r in records:
        log = WorkLog(
            id=new_id(),
            date=r.date,
            site_id=sites[r.site].id,
            worker_id=workers[r.worker].id,
            md=r.md,
            note=r.note,
        )
        key = log.dedup_key()
        if key in seen:
            duplicates += 1
            continue
        seen.add(key)
        logs.append(log)

    return PayrollImportPlan(
        work_logs=tuple(logs),
        new_workers=tuple(new_workers),
        updated_workers=tuple(updated_workers),
        new_sites=tuple(new_sites),
        updated_sites=tuple(updated_sites),
        skipped=skipped,
        duplicates=duplicates,
        latest_date=max((log.date for log in logs), default=None),
        replace_existing=replace_existing,
    )
