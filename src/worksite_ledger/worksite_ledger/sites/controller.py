from __future__ import annotations

from flask import Flask, request

from ..common.http import json_api, ok, payload, uploaded_file
from ..container import Container

_EDITABLE = ("name", "budget", "company_name", "status")


def register(app: Flask, container: Container) -> None:
    sites = container.site_service

    @app.route("/api/sites", methods=["GET"], endpoint="api_sites")
    @json_api
    def api_sites():
        return ok(sites.list_sites(search=request.args.get("search", ""), status=request.args.get("status")))

    @app.route("/api/sites", methods=["POST"], endpoint="api_sites_add")
    @json_api
    def api_sites_add():
        data = payload()
        site = sites.add_site(
            name=data.get("name", ""),
            budget=data.get("budget", 0),
            company_name=data.get("company_name", ""),
            status=data.get("status") or "scheduled",
        )
        return ok(site, message="현장이 등록되었습니다.", status=201)

    @app.route("/api/sites/<site_id>", methods=["PUT"], endpoint="api_sites_update")
    @json_api
    def api_sites_update(site_id: str):
        data = payload()
        site = sites.update_site(site_id, **{k: data[k] for k in _EDITABLE if k in data})
        return ok(site, message="현장 정보가 수정되었습니다.")

    @app.route("/api/sites/<site_id>", methods=["DELETE"], endpoint="api_sites_delete")
    @json_api
    def api_sites_delete(site_id: str):
        sites.delete_site(site_id)
        return ok(message="현장이 삭제되었습니다.")

    @app.route("/api/sites/import", methods=["POST"], endpoint="api_sites_import")
    @json_api
    def api_sites_import():
        data, filename = uploaded_file()
        result = container.import_service.import_sites(data, filename)
        return ok(result, message=result.message)
