from __future__ import annotations

from flask import Flask, request

from ..common.http import date_field, json_api, ok, payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    checklists = container.checklist_service

    @app.route("/api/checklists", methods=["GET"], endpoint="api_checklists")
    @json_api
    def api_checklists():
        return ok(checklists.list_items(item_type=request.args.get("type")))

    @app.route("/api/checklists", methods=["POST"], endpoint="api_checklists_add")
    @json_api
    def api_checklists_add():
        data = payload()
        item = checklists.add_item(
            item_type=data.get("type", ""),
            day=date_field(data),
            title=data.get("title", ""),
            amount=data.get("amount", 0),
            memo=data.get("memo", ""),
        )
        return ok(item, message="항목이 등록되었습니다.", status=201)

    @app.route("/api/checklists/<item_id>/toggle", methods=["POST"], endpoint="api_checklists_toggle")
    @json_api
    def api_checklists_toggle(item_id: str):
        return ok(checklists.toggle(item_id))

    @app.route("/api/checklists/<item_id>", methods=["DELETE"], endpoint="api_checklists_delete")
    @json_api
    def api_checklists_delete(item_id: str):
        checklists.delete_item(item_id)
        return ok(message="항목이 삭제되었습니다.")
