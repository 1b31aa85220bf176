from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.http import json_api, ok, uploaded_file
from ..container import Container
from ..reports.export import payroll_workbook, profit_workbook


def register(app: Flask, container: Container) -> None:
    reports = container.payroll_report_service

    def _payroll_report():
        month = request.args.get("month") or None
        if month == "all":
            month = None
        report = reports.build_payroll_report(
            container.store.snapshot,
            month=month,
            worker_id=request.args.get("worker_id") or None,
            site_id=request.args.get("site_id") or None,
            company=request.args.get("company") or None,
            date_desc=request.args.get("order", "desc") != "asc",
        )
        return report, month

    def _send(workbook):
        return send_file(
            io.BytesIO(workbook.content),
            mimetype=workbook.mimetype,
            as_attachment=True,
            download_name=workbook.filename,
        )

    @app.route("/api/payroll", methods=["GET"], endpoint="api_payroll")
    @json_api
    def api_payroll():
        report, _ = _payroll_report()
        return ok(report)

    @app.route("/api/payroll/export", methods=["GET"], endpoint="api_payroll_export")
    @json_api
    def api_payroll_export():
        report, month = _payroll_report()
        return _send(payroll_workbook(report, month=month))

    @app.route("/api/payroll/import", methods=["POST"], endpoint="api_payroll_import")
    @json_api
    def api_payroll_import():
        data, filename = uploaded_file()
        replace_existing = request.form.get("replace", "").lower() in ("1", "true", "yes", "on")
        result = container.import_service.import_payroll(data, filename, replace_existing=replace_existing)
        return ok(result, message=result.message)

    @app.route("/api/reports/profit", methods=["GET"], endpoint="api_profit")
    @json_api
    def api_profit():
        return ok(reports.build_site_profits(container.store.snapshot, search=request.args.get("search", "")))

    @app.route("/api/reports/profit/export", methods=["GET"], endpoint="api_profit_export")
    @json_api
    def api_profit_export():
        profits = reports.build_site_profits(container.store.snapshot, search=request.args.get("search", ""))
        return _send(profit_workbook(profits))
