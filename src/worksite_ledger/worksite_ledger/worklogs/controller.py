from __future__ import annotations

from flask import Flask, request

from ..common.formatting import to_num
from ..common.http import date_field, json_api, ok, payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    logs = container.worklog_service

    @app.route("/api/worklogs", methods=["GET"], endpoint="api_worklogs")
    @json_api
    def api_worklogs():
        day = date_field(dict(request.args), required=False)
        if day is None:
            return ok(list(container.store.snapshot.work_logs))
        return ok(logs.logs_for_date(day))

    @app.route("/api/worklogs/recent", methods=["GET"], endpoint="api_worklogs_recent")
    @json_api
    def api_worklogs_recent():
        return ok(logs.recent_ids())

    @app.route("/api/worklogs", methods=["POST"], endpoint="api_worklogs_add")
    @json_api
    def api_worklogs_add():
        data = payload()
        log = logs.add_log(
            day=date_field(data),
            site_id=data.get("site_id", ""),
            worker_id=data.get("worker_id", ""),
            md=to_num(data.get("md"), 1.0),
            note=data.get("note", ""),
        )
        return ok(log, message="작업일지가 등록되었습니다.", status=201)

    @app.route("/api/worklogs/<log_id>", methods=["PUT"], endpoint="api_worklogs_update")
    @json_api
    def api_worklogs_update(log_id: str):
        data = payload()
        log = logs.update_log(
            log_id,
            site_id=data.get("site_id"),
            worker_id=data.get("worker_id"),
            md=to_num(data["md"], 0) if "md" in data else None,
            note=data.get("note"),
        )
        return ok(log, message="작업일지가 수정되었습니다.")

    @app.route("/api/worklogs/<log_id>", methods=["DELETE"], endpoint="api_worklogs_delete")
    @json_api
    def api_worklogs_delete(log_id: str):
        logs.delete_log(log_id)
        return ok(message="작업일지가 삭제되었습니다.")
