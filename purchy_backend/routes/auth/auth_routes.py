# purchy_backend/routes/auth/auth_routes.py

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

auth_bp = Blueprint("auth", __name__)


def _credentials_match(username, password) -> bool:
    expected_user = current_app.config.get("LOGIN_USERNAME")
    expected_pw = current_app.config.get("LOGIN_PASSWORD")

    # unset credentials never match, even against an empty body
    if not expected_user or not expected_pw:
        return False
    return username == expected_user and password == expected_pw


@auth_bp.post("/login")
def login():
    """
    Static credential check. Issues no token or session.
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        data = {}

    ok = _credentials_match(data.get("username"), data.get("password"))
    if not ok:
        current_app.logger.info("login rejected for %r", data.get("username"))
    return jsonify(success=ok)
