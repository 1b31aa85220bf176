"""Workbook exports (payroll status, per-site profit, expense upload template)."""

from __future__ import annotations

import io
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

import pandas as pd

from ..common.datetime_utils import today_local
from ..payroll.service import PayrollReport, SiteProfit

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

PAYROLL_SHEET = "출력현황"
PAYROLL_HEADERS = ["작업자", "일자", "거래처", "현장", "공수", "총급여", "세금(3.3%)", "실수령액", "메모"]

PROFIT_SHEET = "수익보고서"
PROFIT_HEADERS = ["거래처", "현장명", "예산", "노무비(총급여)", "세금(3.3%)", "실지급액", "경비(지출)", "순수익"]

TEMPLATE_SHEET = "경비지출"
TEMPLATE_HEADERS = ["날짜", "현장", "작업자", "항목", "내용", "금액"]
TEMPLATE_FILENAME = "경비지출_업로드_양식.xlsx"

TOTAL_LABEL = "합계"


@dataclass(frozen=True)
class Workbook:
    content: bytes
    filename: str
    mimetype: str = XLSX_MIMETYPE


def _to_xlsx(df: pd.DataFrame, sheet_name: str) -> bytes:
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
    return output.getvalue()


def payroll_workbook(report: PayrollReport, *, month: Optional[str] = None) -> Workbook:
    """Tax column is written as a negative amount; the last row holds the totals."""
    data = [
        [r.worker_name, r.date.isoformat(), r.company_name, r.site_name, r.md, r.gross, -r.tax, r.net, r.note]
        for r in report.rows
    ]
    t = report.totals
    data.append([TOTAL_LABEL, "", "", "", t.md, t.gross, -t.tax, t.net, ""])
    df = pd.DataFrame(data, columns=PAYROLL_HEADERS)

    year, mon = (month or today_local().strftime("%Y-%m")).split("-")[:2]
    return Workbook(content=_to_xlsx(df, PAYROLL_SHEET), filename=f"출력현황_{year}_{mon}.xlsx")


def profit_workbook(profits: Sequence[SiteProfit], *, today: Optional[date] = None) -> Workbook:
    data = []
    budget = gross = tax = net = expense = profit = 0
    for p in profits:
        data.append(
            [
                p.company_name or "-",
                p.name,
                p.budget,
                -p.labor_cost,
                -p.labor_tax,
                -p.labor_net,
                -p.expense_cost,
                p.profit,
            ]
        )
        budget += p.budget
        gross += p.labor_cost
        tax += p.labor_tax
        net += p.labor_net
        expense += p.expense_cost
        profit += p.profit
    data.append([TOTAL_LABEL, "", budget, -gross, -tax, -net, -expense, profit])
    df = pd.DataFrame(data, columns=PROFIT_HEADERS)

    day = (today or today_local()).isoformat()
    return Workbook(content=_to_xlsx(df, PROFIT_SHEET), filename=f"현장별_수익보고서_{day}.xlsx")


def expense_template() -> Workbook:
    df = pd.DataFrame(
        [
            ["2025-01-01", "현장명 예시", "", "점심", "현장 식사", 50000],
            ["2025-01-02", "현장명 예시", "홍길동", "주유", "장비 주유", 30000],
            ["2025-01-03", "", "", "자재", "철물점", 120000],
        ],
        columns=TEMPLATE_HEADERS,
    )
    return Workbook(content=_to_xlsx(df, TEMPLATE_SHEET), filename=TEMPLATE_FILENAME)
