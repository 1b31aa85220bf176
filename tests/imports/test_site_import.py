import pytest

from src.worksite_ledger.worksite_ledger.core.enums import SiteStatus
from src.worksite_ledger.worksite_ledger.core.exceptions import ImportFormatError
from src.worksite_ledger.worksite_ledger.imports.sites import plan_site_import
from src.worksite_ledger.worksite_ledger.state.snapshot import EMPTY_SNAPSHOT


def test_updates_existing_and_creates_new(sample_snapshot):
    rows = [
        {"현장명": "강남현장", "예산": "12,000,000", "거래처": ""},
        {"현장명": "판교 현장", "예산": "5000000", "거래처": "미래건설"},
        {"현장명": "수원 현장", "예산": "3,000,000", "거래처": "한빛"},
        {"현장명": "", "예산": "1"},
    ]
    plan = plan_site_import(sample_snapshot, rows)

    assert [(s.id, s.budget, s.company_name) for s in plan.updated_sites] == [("s1", 12_000_000, "대한건설")]
    assert len(plan.new_sites) == 1
    new = plan.new_sites[0]
    assert (new.name, new.budget, new.company_name, new.status) == ("수원 현장", 3_000_000, "한빛", SiteStatus.ACTIVE)
    assert plan.skipped == 1

    snap = plan.apply(sample_snapshot)
    assert len(snap.sites) == 3
    assert snap.find("sites", "s1").budget == 12_000_000


def test_nothing_to_change(sample_snapshot):
    plan = plan_site_import(sample_snapshot, [{"현장": "판교 현장", "budget": "5000000"}])
    assert plan.is_empty


def test_missing_name_column_names_the_headers(sample_snapshot):
    with pytest.raises(ImportFormatError) as exc:
        plan_site_import(sample_snapshot, [{"금액": "1", "비고": "x"}])
    assert exc.value.headers == ("금액", "비고")
    assert "금액, 비고" in str(exc.value)


def test_decimal_budget_keeps_its_scale():
    plan = plan_site_import(EMPTY_SNAPSHOT, [{"현장명": "A", "예산": "5,000,000.00"}])
    assert plan.new_sites[0].budget == 5_000_000
