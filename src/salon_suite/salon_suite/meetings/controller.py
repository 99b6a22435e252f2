from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.web import api_errors, current_user, role_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/meetings/overview", endpoint="meetings_overview")
    @role_required(Role.MANAGER)
    @api_errors
    def meetings_overview():
        overview = container.meeting_service.overview(
            organization_id=current_user().organization_id,
            today=date.today(),
        )
        return jsonify({"success": True, "overview": overview.to_dict()})

    @app.route("/api/meetings/cadence", methods=["PUT"], endpoint="meetings_cadence_update")
    @role_required(Role.MANAGER)
    @api_errors
    def meetings_cadence_update():
        data = request.get_json(silent=True) or {}
        user_id = data.get("user_id")
        if user_id is not None:
            try:
                user_id = int(user_id)
            except (TypeError, ValueError):
                raise ValidationError("user_id must be a number")

        days = container.meeting_service.update_cadence(
            current=current_user(),
            user_id=user_id,
            cadence_days=data.get("cadence_days"),
        )
        return jsonify({"success": True, "user_id": user_id, "cadence_days": days})

    @app.route("/api/meetings/cadence/<int:user_id>", methods=["DELETE"], endpoint="meetings_cadence_remove")
    @role_required(Role.MANAGER)
    @api_errors
    def meetings_cadence_remove(user_id: int):
        container.meeting_service.remove_override(current=current_user(), user_id=user_id)
        return jsonify({"success": True})
