from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.http import date_field, json_api, ok, payload, uploaded_file
from ..container import Container
from ..reports.export import expense_template

_EDITABLE = ("category", "amount", "description", "site_id", "worker_id")


def register(app: Flask, container: Container) -> None:
    txs = container.transaction_service

    @app.route("/api/transactions", methods=["GET"], endpoint="api_transactions")
    @json_api
    def api_transactions():
        return ok(txs.list_transactions(search=request.args.get("search", "")))

    @app.route("/api/transactions", methods=["POST"], endpoint="api_transactions_add")
    @json_api
    def api_transactions_add():
        data = payload()
        tx = txs.add_transaction(
            day=date_field(data),
            category=data.get("category", ""),
            amount=data.get("amount"),
            description=data.get("description", ""),
            site_id=data.get("site_id", ""),
            worker_id=data.get("worker_id", ""),
        )
        return ok(tx, message="지출 내역이 등록되었습니다.", status=201)

    @app.route("/api/transactions/<tx_id>", methods=["PUT"], endpoint="api_transactions_update")
    @json_api
    def api_transactions_update(tx_id: str):
        data = payload()
        changes = {k: data[k] for k in _EDITABLE if k in data}
        if "date" in data:
            changes["date"] = date_field(data)
        tx = txs.update_transaction(tx_id, **changes)
        return ok(tx, message="지출 내역이 수정되었습니다.")

    @app.route("/api/transactions/<tx_id>", methods=["DELETE"], endpoint="api_transactions_delete")
    @json_api
    def api_transactions_delete(tx_id: str):
        txs.delete_transaction(tx_id)
        return ok(message="지출 내역이 삭제되었습니다.")

    @app.route("/api/transactions/assign-sites", methods=["POST"], endpoint="api_transactions_assign_sites")
    @json_api
    def api_transactions_assign_sites():
        count = txs.assign_sites()
        return ok({"assigned": count}, message=f"{count}건의 현장이 연결되었습니다.")

    @app.route("/api/transactions/import", methods=["POST"], endpoint="api_transactions_import")
    @json_api
    def api_transactions_import():
        data, filename = uploaded_file()
        result = container.import_service.import_expenses(data, filename)
        return ok(result, message=result.message)

    @app.route("/api/transactions/template", methods=["GET"], endpoint="api_transactions_template")
    @json_api
    def api_transactions_template():
        workbook = expense_template()
        return send_file(
            io.BytesIO(workbook.content),
            mimetype=workbook.mimetype,
            as_attachment=True,
            download_name=workbook.filename,
        )
