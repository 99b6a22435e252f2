from __future__ import annotations

from datetime import date, timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import api_errors, current_user, date_arg, login_required, role_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    def _int_arg(name: str):
        value = request.args.get(name)
        return int(value) if value and value.isdigit() else None

    @app.route("/api/schedules", methods=["GET"], endpoint="schedules_list")
    @login_required
    @api_errors
    def schedules_list():
        today = date.today()
        start = date_arg("start", today)
        end = date_arg("end", today + timedelta(days=7))

        rows = container.schedule_service.list_range(
            current=current_user(),
            start=start,
            end=end,
            location_id=_int_arg("location_id"),
            user_id=_int_arg("user_id"),
        )
        return jsonify({"success": True, "schedules": [r.to_dict() for r in rows]})

    @app.route("/api/schedules", methods=["POST"], endpoint="schedules_assign")
    @role_required(Role.MANAGER)
    @api_errors
    def schedules_assign():
        data = request.get_json(silent=True) or {}
        try:
            user_id = int(data.get("user_id") or 0)
            location_id = int(data.get("location_id") or 0)
            shift_id = int(data.get("shift_id") or 0)
        except (TypeError, ValueError):
            raise ValidationError("user_id, location_id and shift_id must be numbers")

        schedule_id = container.schedule_service.assign(
            current=current_user(),
            user_id=user_id,
            location_id=location_id,
            work_date=parse_iso_date(data.get("work_date") or ""),
            shift_id=shift_id,
            note=data.get("note"),
        )
        return jsonify({"success": True, "schedule_id": schedule_id}), 201

    @app.route("/api/schedules/<int:schedule_id>", methods=["DELETE"], endpoint="schedules_delete")
    @role_required(Role.MANAGER)
    @api_errors
    def schedules_delete(schedule_id: int):
        container.schedule_service.delete(current=current_user(), schedule_id=schedule_id)
        return jsonify({"success": True})

    @app.route("/api/shifts", methods=["GET"], endpoint="shifts_list")
    @login_required
    @api_errors
    def shifts_list():
        shifts = container.shifts_repo.list_all()
        return jsonify(
            {
                "success": True,
                "shifts": [
                    {"shift_id": s.shift_id, "label": s.label(), "hours": round(s.working_hours(), 2)}
                    for s in shifts
                ],
            }
        )
