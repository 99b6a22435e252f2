from __future__ import annotations

import math
from datetime import date, timedelta

from flask import Flask, jsonify, request

from ..common.web import api_errors, current_user, date_arg, role_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError
from .tiers import ALL, PRODUCTS, SERVICES


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll/forecast", endpoint="payroll_forecast")
    @role_required(Role.ADMIN)
    @api_errors
    def payroll_forecast():
        today = date.today()
        start = date_arg("start", today - timedelta(days=today.weekday()))
        end = date_arg("end", start + timedelta(days=13))

        forecast = container.payroll_service.forecast(
            organization_id=current_user().organization_id,
            period_start=start,
            period_end=end,
            today=today,
        )
        return jsonify({"success": True, "forecast": forecast.to_dict()})

    @app.route("/api/payroll/tiers/resolve", endpoint="payroll_tier_resolve")
    @role_required(Role.MANAGER)
    @api_errors
    def payroll_tier_resolve():
        try:
            revenue = float(request.args.get("revenue") or 0)
        except ValueError:
            raise ValidationError("revenue must be a number")
        if not math.isfinite(revenue):
            raise ValidationError("revenue must be a finite number")
        applies_to = request.args.get("applies_to") or SERVICES
        if applies_to not in (SERVICES, PRODUCTS, ALL):
            raise ValidationError("applies_to must be services, products or all")

        result = container.payroll_service.resolve(
            organization_id=current_user().organization_id,
            revenue=revenue,
            applies_to=applies_to,
        )
        return jsonify({"success": True, "revenue": revenue, "tier": result.to_dict()})
