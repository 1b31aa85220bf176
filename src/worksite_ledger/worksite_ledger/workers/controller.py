from __future__ import annotations

from flask import Flask, request

from ..common.http import json_api, ok, payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    workers = container.worker_service

    @app.route("/api/workers", methods=["GET"], endpoint="api_workers")
    @json_api
    def api_workers():
        return ok(workers.list_workers(search=request.args.get("search", "")))

    @app.route("/api/workers", methods=["POST"], endpoint="api_workers_add")
    @json_api
    def api_workers_add():
        data = payload()
        kwargs = {"name": data.get("name", "")}
        if data.get("daily") not in (None, ""):
            kwargs["daily"] = data["daily"]
        worker = workers.add_worker(**kwargs)
        return ok(worker, message="작업자가 등록되었습니다.", status=201)

    @app.route("/api/workers/<worker_id>", methods=["PUT"], endpoint="api_workers_update")
    @json_api
    def api_workers_update(worker_id: str):
        data = payload()
        worker = workers.update_worker(worker_id, name=data.get("name"), daily=data.get("daily"))
        return ok(worker, message="작업자 정보가 수정되었습니다.")

    @app.route("/api/workers/<worker_id>", methods=["DELETE"], endpoint="api_workers_delete")
    @json_api
    def api_workers_delete(worker_id: str):
        workers.delete_worker(worker_id)
        return ok(message="작업자가 삭제되었습니다.")
