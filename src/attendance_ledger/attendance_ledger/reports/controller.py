from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import error_response, make_guards
from ..container import Container
from ..core.exceptions import ValidationError
from .excel import XLSX_MIMETYPE


def register(app: Flask, container: Container) -> None:
    _, hr_required = make_guards(container)

    @app.route("/reports/export.xlsx", methods=["GET"], endpoint="report_export")
    @hr_required
    def report_export():
        try:
            filename, payload = container.report_service.export_workbook(
                start=request.args.get("start"),
                end=request.args.get("end"),
            )
        except ValidationError as e:
            return error_response(str(e), 400)

        return app.response_class(
            payload,
            mimetype=XLSX_MIMETYPE,
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/insights", methods=["POST"], endpoint="insights")
    @hr_required
    def insights():
        text = container.insight_service.analyze_attendance(container.store.list_logs())
        return jsonify({"insight": text})
