from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.web import api_errors, current_user, login_required, role_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    @api_errors
    def login():
        data = request.get_json(silent=True) or {}
        s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=7)

        session["user_id"] = s_user.user_id
        session["organization_id"] = s_user.organization_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value

        return jsonify({"success": True, "user": _session_json()})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/auth/me", endpoint="me")
    @login_required
    def me():
        return jsonify({"success": True, "user": _session_json()})

    @app.route("/api/team", endpoint="team_list")
    @role_required(Role.MANAGER)
    @api_errors
    def team_list():
        users = container.user_service.list_team(current_user().organization_id)
        return jsonify(
            {
                "success": True,
                "team": [
                    {
                        "user_id": u.user_id,
                        "name": u.name,
                        "username": u.username,
                        "role": u.role.value,
                        "photo_url": u.photo_url,
                    }
                    for u in users
                ],
            }
        )

    @app.route("/api/team", methods=["POST"], endpoint="team_create")
    @role_required(Role.ADMIN)
    @api_errors
    def team_create():
        data = request.get_json(silent=True) or {}
        try:
            role = Role(data.get("role", Role.STAFF.value))
        except ValueError:
            raise ValidationError("Unknown role")

        user_id = container.user_service.create_account(
            current=current_user(),
            full_name=data.get("full_name", ""),
            username=data.get("username", ""),
            password=data.get("password", ""),
            role=role,
            display_name=data.get("display_name"),
        )
        return jsonify({"success": True, "user_id": user_id}), 201

    @app.route("/api/team/<int:user_id>", methods=["DELETE"], endpoint="team_deactivate")
    @role_required(Role.ADMIN)
    @api_errors
    def team_deactivate(user_id: int):
        container.user_service.deactivate(current=current_user(), user_id=user_id)
        return jsonify({"success": True})

    def _session_json() -> dict:
        user = current_user()
        return {
            "user_id": user.user_id,
            "organization_id": user.organization_id,
            "name": user.name,
            "role": user.role.value,
        }
