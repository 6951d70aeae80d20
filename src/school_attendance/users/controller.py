from __future__ import annotations

from flask import Flask, current_app, jsonify, request

from ..common.validators import require_json_object
from ..core.constants import TOKEN_COOKIE_NAME
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..container import Container
from ..web.extensions import auth_limit
from .guards import auth_required, current_identity


def _set_token_cookie(response, token: str, *, max_age: int):
    secure = bool(current_app.config.get("COOKIE_SECURE", False))
    response.set_cookie(
        TOKEN_COOKIE_NAME,
        token,
        max_age=max_age,
        httponly=True,
        secure=secure,
        samesite="None" if secure else "Lax",
    )
    return response


def _user_payload(container: Container, account) -> dict:
    # users has no id column; expose the id of the matching teacher or student profile
    profiles = container.profiles_repo
    if account.role is Role.TEACHER:
        profile = profiles.get_teacher_by_email(account.email)
    else:
        profile = profiles.get_student_by_email(account.email)
    return {
        "id": profile.id if profile else None,
        "name": account.name,
        "email": account.email,
        "role": account.role.value,
    }


def register(app: Flask, container: Container) -> None:
    login_required = auth_required(container)

    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    @auth_limit
    def auth_register():
        body = require_json_object(request.get_json(silent=True))
        token = container.auth_service.register_teacher(
            name=body.get("name"),
            email=body.get("email"),
            password=body.get("password"),
            subject=body.get("subject"),
        )
        response = jsonify({"message": "Register successful"})
        response.status_code = 201
        return _set_token_cookie(response, token, max_age=container.auth_service.token_ttl_seconds)

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    @auth_limit
    def auth_login():
        body = require_json_object(request.get_json(silent=True))
        try:
            account, token = container.auth_service.authenticate(body.get("email"), body.get("password"))
        except AuthenticationError as e:
            return jsonify({"message": str(e)}), 400

        response = jsonify({"message": "Login successfully", "user": _user_payload(container, account)})
        return _set_token_cookie(response, token, max_age=container.auth_service.token_ttl_seconds)

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @auth_limit
    @login_required
    def auth_me():
        account = container.auth_service.get_account(current_identity().email)
        return jsonify({"message": "Details fetched successfully", "user": _user_payload(container, account)})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    @auth_limit
    def auth_logout():
        response = jsonify({"message": "Logged out successfully"})
        return _set_token_cookie(response, "", max_age=0)
