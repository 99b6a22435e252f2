from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request, send_file

from ..common.web import api_errors, current_user, role_required
from ..container import Container
from ..core.enums import CapacityPeriod, Role
from ..core.exceptions import ValidationError
from .export import report_to_csv, report_to_xlsx


def register(app: Flask, container: Container) -> None:
    def _build_report():
        try:
            period = CapacityPeriod(request.args.get("period", CapacityPeriod.SEVEN_DAYS.value))
        except ValueError:
            raise ValidationError("period must be one of: tomorrow, 7days, 30days")

        location_s = request.args.get("location_id")
        if not location_s or location_s == "all":
            location_id = None
        elif location_s.isdigit():
            location_id = int(location_s)
        else:
            raise ValidationError("location_id must be a number or 'all'")

        report = container.capacity_service.build(
            organization_id=current_user().organization_id,
            period=period,
            today=date.today(),
            location_id=location_id,
        )
        return period, report

    @app.route("/api/capacity", endpoint="capacity")
    @role_required(Role.MANAGER)
    @api_errors
    def capacity():
        _, report = _build_report()
        return jsonify({"success": True, "capacity": report.to_dict()})

    @app.route("/api/capacity/export.csv", endpoint="capacity_csv")
    @role_required(Role.MANAGER)
    @api_errors
    def capacity_csv():
        period, report = _build_report()
        filename = f"capacity_{period.value}_{date.today().strftime('%Y%m%d')}.csv"
        return app.response_class(
            report_to_csv(report),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/capacity/export.xlsx", endpoint="capacity_xlsx")
    @role_required(Role.MANAGER)
    @api_errors
    def capacity_xlsx():
        period, report = _build_report()
        return send_file(
            report_to_xlsx(report),
            download_name=f"capacity_{period.value}_{date.today().strftime('%Y%m%d')}.xlsx",
            as_attachment=True,
            mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )
