from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.datetime_utils import to_iso
from ..common.web import error_response, make_guards
from ..container import Container
from ..core.exceptions import PreconditionError, ValidationError
from ..notifications.detection import classify


def _log_json(log) -> dict:
    data = log.to_dict()
    kind = classify(log)
    data["event"] = kind.value if kind else None
    return data


def register(app: Flask, container: Container) -> None:
    login_required, hr_required = make_guards(container)
    service = container.attendance_service

    @app.route("/api/checkin", methods=["POST"], endpoint="checkin")
    @login_required
    def checkin():
        try:
            log = service.check_in(g.user)
        except PreconditionError as e:
            return error_response(str(e), 409)
        return jsonify({"success": True, "log": _log_json(log)}), 201

    @app.route("/api/checkout", methods=["POST"], endpoint="checkout")
    @login_required
    def checkout():
        try:
            log = service.check_out(g.user)
        except PreconditionError as e:
            return error_response(str(e), 409)
        return jsonify({"success": True, "log": _log_json(log)})

    @app.route("/api/logs/manual", methods=["POST"], endpoint="manual_entry")
    @login_required
    def manual_entry():
        data = request.get_json(silent=True) or {}
        try:
            log = service.add_manual_entry(
                g.user,
                day=data.get("date", ""),
                log_type=data.get("type", ""),
                start_time=data.get("startTime"),
                end_time=data.get("endTime"),
                notes=data.get("notes"),
            )
        except ValidationError as e:
            return error_response(str(e), 400)
        return jsonify({"success": True, "log": _log_json(log)}), 201

    @app.route("/api/me/logs", methods=["GET"], endpoint="my_logs")
    @login_required
    def my_logs():
        return jsonify([log.to_dict() for log in service.history(g.user.id)])

    @app.route("/api/me/today", methods=["GET"], endpoint="my_today")
    @login_required
    def my_today():
        summary = service.today(g.user.id)
        return jsonify(
            {
                "firstCheckIn": to_iso(summary.first_check_in),
                "lastCheckOut": to_iso(summary.last_check_out),
                "totalMinutes": summary.total_minutes,
                "totalDisplay": summary.total_display,
                "elapsedSeconds": summary.elapsed_seconds,
                "activeLog": summary.active_entry.to_dict() if summary.active_entry else None,
            }
        )

    @app.route("/api/logs", methods=["GET"], endpoint="company_activity")
    @hr_required
    def company_activity():
        return jsonify([log.to_dict() for log in service.company_activity()])
