from __future__ import annotations

from flask import Flask

from ..common.http import fail, json_api, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    store = container.store

    @app.route("/api/snapshot", methods=["GET"], endpoint="api_snapshot")
    @json_api
    def api_snapshot():
        return ok({"version": store.version, "loading": store.loading, "snapshot": store.snapshot})

    @app.route("/api/notices", methods=["GET"], endpoint="api_notices")
    @json_api
    def api_notices():
        return ok(store.drain_notices())

    @app.route("/api/reload", methods=["POST"], endpoint="api_reload")
    @json_api
    def api_reload():
        if not store.load():
            return fail("데이터 로딩 실패. 새로고침 해주세요.", status=503)
        return ok({"version": store.version})

    @app.route("/api/sync/status", methods=["GET"], endpoint="api_sync_status")
    @json_api
    def api_sync_status():
        last = store.last_result
        return ok(
            {
                "version": store.version,
                "suppressed": store.is_suppressed(),
                "last": None
                if last is None
                else {
                    "generation": last.generation,
                    "version": last.version,
                    "ok": last.ok,
                    "error": last.error,
                    "counts": last.diff.counts(),
                },
            }
        )
