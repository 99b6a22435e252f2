from __future__ import annotations

from datetime import datetime

from flask import Flask, jsonify, request

from ..common.web import api_errors, current_user, login_required, role_required
from ..container import Container
from ..core.enums import Role, SwapStatus, SwapType
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/swaps", methods=["GET"], endpoint="swaps_list")
    @login_required
    @api_errors
    def swaps_list():
        raw_status = request.args.get("status")
        try:
            status = SwapStatus(raw_status) if raw_status else None
        except ValueError:
            raise ValidationError(f"Unknown status: {raw_status}")

        swaps = container.swap_service.list_swaps(
            current=current_user(),
            status=status,
            mine=request.args.get("mine") in ("1", "true"),
        )
        return jsonify({"success": True, "swaps": [s.to_dict() for s in swaps]})

    @app.route("/api/swaps", methods=["POST"], endpoint="swaps_create")
    @login_required
    @api_errors
    def swaps_create():
        data = request.get_json(silent=True) or {}
        try:
            schedule_id = int(data.get("schedule_id") or 0)
            swap_type = SwapType(data.get("swap_type") or SwapType.GIVEAWAY.value)
        except (TypeError, ValueError):
            raise ValidationError("schedule_id must be a number and swap_type one of swap, cover, giveaway")

        expires_at = None
        if data.get("expires_at"):
            try:
                expires_at = datetime.fromisoformat(data["expires_at"])
            except (TypeError, ValueError):
                raise ValidationError("expires_at must be an ISO datetime")
            if expires_at.tzinfo is not None:
                # Offsets are converted to server local time, which the clock uses.
                expires_at = expires_at.astimezone().replace(tzinfo=None)

        swap_id = container.swap_service.create(
            current=current_user(),
            schedule_id=schedule_id,
            swap_type=swap_type,
            reason=data.get("reason") or "",
            expires_at=expires_at,
        )
        return jsonify({"success": True, "swap_id": swap_id}), 201

    @app.route("/api/swaps/<int:swap_id>/claim", methods=["POST"], endpoint="swaps_claim")
    @login_required
    @api_errors
    def swaps_claim(swap_id: int):
        container.swap_service.claim(current=current_user(), swap_id=swap_id)
        return jsonify({"success": True})

    @app.route("/api/swaps/<int:swap_id>/approve", methods=["POST"], endpoint="swaps_approve")
    @role_required(Role.MANAGER)
    @api_errors
    def swaps_approve(swap_id: int):
        data = request.get_json(silent=True) or {}
        container.swap_service.approve(current=current_user(), swap_id=swap_id, notes=data.get("notes") or "")
        return jsonify({"success": True})

    @app.route("/api/swaps/<int:swap_id>/deny", methods=["POST"], endpoint="swaps_deny")
    @role_required(Role.MANAGER)
    @api_errors
    def swaps_deny(swap_id: int):
        data = request.get_json(silent=True) or {}
        container.swap_service.deny(current=current_user(), swap_id=swap_id, notes=data.get("notes") or "")
        return jsonify({"success": True})

    @app.route("/api/swaps/<int:swap_id>/cancel", methods=["POST"], endpoint="swaps_cancel")
    @login_required
    @api_errors
    def swaps_cancel(swap_id: int):
        container.swap_service.cancel(current=current_user(), swap_id=swap_id)
        return jsonify({"success": True})
