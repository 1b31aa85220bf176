from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.formatting import as_number
from ..state.snapshot import Snapshot
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator

UNKNOWN_WORKER = "미등록"
DELETED_SITE = "삭제된 현장"
NO_COMPANY = "-"


@dataclass(frozen=True)
class PayrollRow:
    id: str
    date: date
    worker_id: str
    site_id: str
    worker_name: str
    site_name: str
    company_name: str
    md: float
    gross: float
    tax: int
    net: float
    note: str


@dataclass(frozen=True)
class PayrollTotals:
    md: float = 0
    gross: float = 0
    tax: int = 0
    net: float = 0


@dataclass(frozen=True)
class PayrollReport:
    rows: list[PayrollRow]
    totals: PayrollTotals


@dataclass(frozen=True)
class SiteProfit:
    site_id: str
    name: str
    company_name: str
    budget: int
    labor_cost: float
    labor_tax: int
    labor_net: float
    expense_cost: int
    total_cost: float
    profit: float


class PayrollReportService:
    def __init__(self, *, calculator: Optional[PayrollCalculator] = None):
        self._calculator = calculator or StandardPayrollCalculator()

    def build_payroll_report(
        self,
        snapshot: Snapshot,
        *,
        month: Optional[str] = None,
        worker_id: Optional[str] = None,
        site_id: Optional[str] = None,
        company: Optional[str] = None,
        date_desc: bool = True,
    ) -> PayrollReport:
        """Payroll rows for ``month`` (``YYYY-MM``, None = all) with totals."""
        logs = list(snapshot.work_logs)
        if month:
            logs = [l for l in logs if l.date.isoformat().startswith(month)]
        if worker_id:
            logs = [l for l in logs if l.worker_id == worker_id]
        if site_id:
            logs = [l for l in logs if l.site_id == site_id]
        if company:
            company_sites = {s.id for s in snapshot.sites if s.company_name == company}
            logs = [l for l in logs if l.site_id in company_sites]
        logs.sort(key=lambda l: l.date, reverse=date_desc)

        workers = snapshot.worker_by_id()
        sites = snapshot.site_by_id()

        rows: list[PayrollRow] = []
        md = gross = net = 0
        tax = 0
        for log in logs:
            worker = workers.get(log.worker_id)
            site = sites.get(log.site_id)
            amounts = self._calculator.calculate(worker.daily if worker else 0, log.md)
            rows.append(
                PayrollRow(
                    id=log.id,
                    date=log.date,
                    worker_id=log.worker_id,
                    site_id=log.site_id,
                    worker_name=worker.name if worker else UNKNOWN_WORKER,
                    site_name=site.name if site else DELETED_SITE,
                    company_name=(site.company_name if site else "") or NO_COMPANY,
                    md=log.md,
                    gross=amounts.gross,
                    tax=amounts.tax,
                    net=amounts.net,
                    note=log.note,
                )
            )
            md += log.md
            gross += amounts.gross
            tax += amounts.tax
            net += amounts.net

        totals = PayrollTotals(md=as_number(md), gross=as_number(gross), tax=tax, net=as_number(net))
        return PayrollReport(rows=rows, totals=totals)

    def build_site_profits(self, snapshot: Snapshot, *, search: str = "") -> list[SiteProfit]:
        workers = snapshot.worker_by_id()
        out: list[SiteProfit] = []
        for site in snapshot.sites:
            gross = net = 0
            tax = 0
            for log in snapshot.work_logs:
                if log.site_id != site.id:
                    continue
                worker = workers.get(log.worker_id)
                amounts = self._calculator.calculate(worker.daily if worker else 0, log.md)
                gross += amounts.gross
                tax += amounts.tax
                net += amounts.net
            expense = sum(t.amount for t in snapshot.transactions if t.site_id == site.id)
            total = gross + expense
            out.append(
                SiteProfit(
                    site_id=site.id,
                    name=site.name,
                    company_name=site.company_name,
                    budget=site.budget,
                    labor_cost=as_number(gross),
                    labor_tax=tax,
                    labor_net=as_number(net),
                    expense_cost=expense,
                    total_cost=as_number(total),
                    profit=as_number(site.budget - total),
                )
            )

        q = (search or "").strip().lower()
        if q:
            out = [p for p in out if q in p.name.lower()]
        return out
