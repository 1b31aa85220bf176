from datetime import date

from src.worksite_ledger.worksite_ledger.payroll.service import PayrollReportService
from src.worksite_ledger.worksite_ledger.worklogs.model import WorkLog


def test_report_filters_by_month_and_sorts_desc(sample_snapshot):
    report = PayrollReportService().build_payroll_report(sample_snapshot, month="2025-01")
    assert [r.id for r in report.rows] == ["l2", "l1"]
    assert report.totals.md == 2.5
    assert report.totals.gross == 270000 + 150000
    assert report.totals.tax == 8910 + 4950
    assert report.totals.net == report.totals.gross - report.totals.tax


def test_report_ascending_and_worker_filter(sample_snapshot):
    report = PayrollReportService().build_payroll_report(sample_snapshot, worker_id="w1", date_desc=False)
    assert [r.id for r in report.rows] == ["l1", "l3"]
    assert report.rows[1].note == "야간"


def test_report_company_filter(sample_snapshot):
    report = PayrollReportService().build_payroll_report(sample_snapshot, company="미래건설")
    assert [r.site_name for r in report.rows] == ["판교 현장"]
    assert report.rows[0].company_name == "미래건설"


def test_dangling_references_are_labelled(sample_snapshot):
    snap = sample_snapshot.put(
        "work_logs", WorkLog(id="l9", date=date(2025, 3, 1), site_id="gone", worker_id="nobody", md=1.0)
    )
    row = PayrollReportService().build_payroll_report(snap, month="2025-03").rows[0]
    assert row.worker_name == "미등록"
    assert row.site_name == "삭제된 현장"
    assert row.company_name == "-"
    assert row.gross == 0


def test_site_profits(sample_snapshot):
    profits = {p.site_id: p for p in PayrollReportService().build_site_profits(sample_snapshot)}
    s1 = profits["s1"]
    assert s1.labor_cost == 270000 + 150000
    assert s1.expense_cost == 200000
    assert s1.total_cost == 620000
    assert s1.profit == 10_000_000 - 620000

    s2 = profits["s2"]
    assert s2.labor_cost == 180000
    assert s2.expense_cost == 0


def test_site_profit_search(sample_snapshot):
    profits = PayrollReportService().build_site_profits(sample_snapshot, search="판교")
    assert [p.site_id for p in profits] == ["s2"]
