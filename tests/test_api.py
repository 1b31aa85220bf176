import io

import pytest

from src.worksite_ledger.worksite_ledger.container import build_services
from src.worksite_ledger.worksite_ledger.main import create_app

from conftest import InlineExecutor, InMemoryRowStore


@pytest.fixture
def container():
    remote = InMemoryRowStore(
        {
            "sites": [{"id": "s1", "name": "강남 현장", "budget": 1000000, "company_name": "대한건설", "status": "active"}],
            "workers": [{"id": "w1", "name": "김철수", "daily": 180000}],
        }
    )
    return build_services(remote, suppress_seconds=0, executor=InlineExecutor())


@pytest.fixture
def client(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()


def test_snapshot_is_loaded(client):
    body = client.get("/api/snapshot").get_json()
    assert body["success"]
    assert body["data"]["loading"] is False
    assert body["data"]["snapshot"]["sites"][0]["name"] == "강남 현장"


def test_worklog_and_payroll_report(client, container):
    res = client.post("/api/worklogs", json={"date": "2025-01-10", "site_id": "s1", "worker_id": "w1", "md": 1.5})
    assert res.status_code == 201
    assert len(container.row_store.tables["work_logs"]) == 1

    body = client.get("/api/payroll?month=2025-01").get_json()
    assert body["data"]["totals"]["gross"] == 270000
    assert body["data"]["totals"]["tax"] == 8910


def test_validation_error_is_400(client):
    res = client.post("/api/worklogs", json={"date": "2025-01-10", "site_id": "", "worker_id": "w1"})
    assert res.status_code == 400
    assert res.get_json()["success"] is False

    res = client.post("/api/transactions", json={"date": "2025/01/10", "category": "점심", "amount": 1000})
    assert res.status_code == 400


def test_import_format_error_carries_headers(client):
    data = {"file": (io.BytesIO("금액\n1\n".encode("utf-8")), "sites.csv")}
    res = client.post("/api/sites/import", data=data, content_type="multipart/form-data")
    assert res.status_code == 400
    assert res.get_json()["headers"] == ["금액"]


def test_expense_import_and_notices(client, container):
    text = "날짜,현장,항목,금액\n2025-01-05,강남,점심,50000\n"
    data = {"file": (io.BytesIO(text.encode("utf-8")), "expense.csv")}
    res = client.post("/api/transactions/import", data=data, content_type="multipart/form-data")
    assert res.status_code == 200
    assert res.get_json()["data"]["added"] == 1
    assert container.row_store.tables["transactions"][0]["site_id"] == "s1"

    notices = client.get("/api/notices").get_json()["data"]
    assert notices[-1]["level"] == "success"


def test_downloads(client):
    res = client.get("/api/transactions/template")
    assert res.status_code == 200
    assert res.mimetype.endswith("spreadsheetml.sheet")

    res = client.get("/api/reports/profit/export")
    assert res.status_code == 200


def test_checklist_toggle(client):
    item = client.post("/api/checklists", json={"type": "task", "date": "2025-01-01", "title": "서류"}).get_json()["data"]
    toggled = client.post(f"/api/checklists/{item['id']}/toggle").get_json()["data"]
    assert toggled["status"] == "completed"


def test_sync_status(client):
    client.post("/api/workers", json={"name": "이영희"})
    body = client.get("/api/sync/status").get_json()["data"]
    assert body["last"]["ok"] is True
    assert body["last"]["counts"] == {"workers": {"insert": 1, "update": 0, "delete": 0}}
