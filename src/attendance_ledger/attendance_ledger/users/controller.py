from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import error_response, make_guards
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    _, hr_required = make_guards(container)
    users = container.user_service
    sessions = container.session_service

    @app.route("/api/session", methods=["GET"], endpoint="session_get")
    def session_get():
        user = sessions.current_user()
        return jsonify({"user": user.to_dict() if user else None})

    @app.route("/api/session", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        try:
            user = sessions.login(str(data.get("userId", "")))
        except ValidationError as e:
            return error_response(str(e), 400)
        return jsonify({"success": True, "user": user.to_dict()})

    @app.route("/api/session", methods=["DELETE"], endpoint="logout")
    def logout():
        sessions.logout()
        return jsonify({"success": True})

    @app.route("/api/theme", methods=["GET"], endpoint="theme_get")
    def theme_get():
        return jsonify({"theme": sessions.theme().value})

    @app.route("/api/theme", methods=["PUT"], endpoint="theme_put")
    def theme_put():
        data = request.get_json(silent=True) or {}
        try:
            theme = sessions.set_theme(data["theme"]) if "theme" in data else sessions.toggle_theme()
        except ValidationError as e:
            return error_response(str(e), 400)
        return jsonify({"theme": theme.value})

    @app.route("/api/users", methods=["GET"], endpoint="users_list")
    def users_list():
        return jsonify([u.to_dict() for u in users.list_users()])

    @app.route("/api/users", methods=["POST"], endpoint="users_add")
    @hr_required
    def users_add():
        data = request.get_json(silent=True) or {}
        try:
            user = users.add_user(
                name=data.get("name", ""),
                email=data.get("email", ""),
                role=data.get("role", "EMPLOYEE"),
                department=data.get("department", ""),
            )
        except ValidationError as e:
            return error_response(str(e), 400)
        return jsonify({"success": True, "user": user.to_dict()}), 201

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="users_remove")
    @hr_required
    def users_remove(user_id: str):
        if not users.remove_user(user_id):
            return error_response("User not found", 404)
        return jsonify({"success": True})
