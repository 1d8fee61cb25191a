from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.web import current_user_id, error_response, login_required
from ..container import Container
from .service import SessionUser


def _start_session(s_user: SessionUser) -> None:
    session.clear()
    session.permanent = True
    session["user_id"] = s_user.user_id
    session["username"] = s_user.username
    session["display_name"] = s_user.display_name


def _user_payload(s_user: SessionUser) -> dict:
    return {"id": s_user.user_id, "username": s_user.username, "displayName": s_user.display_name}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/signup", methods=["POST"], endpoint="signup")
    def signup():
        data = request.get_json(silent=True) or {}
        try:
            s_user = container.auth_service.signup(
                username=data.get("username", ""),
                password=data.get("password", ""),
                display_name=data.get("displayName"),
            )
        except Exception as e:
            return error_response(e, action="sign up")

        _start_session(s_user)
        return jsonify({"success": True, "user": _user_payload(s_user)}), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        try:
            s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))
        except Exception as e:
            return error_response(e, action="log in")

        _start_session(s_user)
        return jsonify({"success": True, "user": _user_payload(s_user)})

    @app.route("/api/auth/signout", methods=["POST"], endpoint="signout")
    def signout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        try:
            s_user = container.auth_service.get_session_user(current_user_id())
        except Exception as e:
            return error_response(e, action="load user")
        return jsonify({"user": _user_payload(s_user)})
