from __future__ import annotations

from datetime import date, timedelta

from flask import Flask, jsonify

from ..common.web import api_errors, current_user, date_arg, role_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/api/staffing/balance", endpoint="staffing_balance")
    @role_required(Role.MANAGER)
    @api_errors
    def staffing_balance():
        today = date.today()
        start = date_arg("start", today)
        end = date_arg("end", today + timedelta(days=6))

        report = container.staffing_service.build(
            organization_id=current_user().organization_id,
            start=start,
            end=end,
        )
        return jsonify({"success": True, "balance": report.to_dict()})
