from __future__ import annotations

from functools import wraps

from flask import g, jsonify

from ..container import Container
from ..core.enums import Role


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def make_guards(container: Container):
    """Route decorators resolving the ledger's session user into ``g.user``."""

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = container.session_service.current_user()
            if user is None:
                return error_response("Please select a user to continue", 401)
            g.user = user
            return view(*args, **kwargs)

        return wrapper

    def hr_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = container.session_service.current_user()
            if user is None:
                return error_response("Please select a user to continue", 401)
            if user.role != Role.HR:
                return error_response("HR access required", 403)
            g.user = user
            return view(*args, **kwargs)

        return wrapper

    return login_required, hr_required
