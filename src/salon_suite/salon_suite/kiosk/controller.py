from __future__ import annotations

from flask import Flask, jsonify, request, send_file

from ..common.web import api_errors, current_user, role_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from .qr import kiosk_url, qr_png


def register(app: Flask, container: Container) -> None:
    def _device_id() -> str:
        data = request.get_json(silent=True) or {}
        device = (request.args.get("device") or data.get("device") or "").strip()
        if not device:
            raise ValidationError("device is required")
        return device

    @app.route("/api/kiosk/<int:location_id>/state", endpoint="kiosk_state")
    @api_errors
    def kiosk_state(location_id: int):
        state = container.kiosk_service.state(location_id=location_id, device_id=_device_id())
        return jsonify({"success": True, "kiosk": state})

    @app.route("/api/kiosk/<int:location_id>/lookup", methods=["POST"], endpoint="kiosk_lookup")
    @api_errors
    def kiosk_lookup(location_id: int):
        data = request.get_json(silent=True) or {}
        state = container.kiosk_service.start_lookup(
            location_id=location_id,
            device_id=_device_id(),
            phone=data.get("phone") or "",
        )
        return jsonify({"success": True, "kiosk": state})

    @app.route("/api/kiosk/<int:location_id>/confirm", methods=["POST"], endpoint="kiosk_confirm")
    @api_errors
    def kiosk_confirm(location_id: int):
        state = container.kiosk_service.confirm(location_id=location_id, device_id=_device_id())
        return jsonify({"success": True, "kiosk": state})

    @app.route("/api/kiosk/<int:location_id>/reset", methods=["POST"], endpoint="kiosk_reset")
    @api_errors
    def kiosk_reset(location_id: int):
        state = container.kiosk_service.reset(location_id=location_id, device_id=_device_id())
        return jsonify({"success": True, "kiosk": state})

    @app.route("/api/kiosk/<int:location_id>/qr.png", endpoint="kiosk_qr")
    @role_required(Role.ADMIN)
    @api_errors
    def kiosk_qr(location_id: int):
        loc = container.locations_repo.get_by_id(location_id)
        if not loc or loc.organization_id != current_user().organization_id:
            raise NotFoundError("Location not found")

        url = kiosk_url(app.config.get("KIOSK_BASE_URL", "http://localhost:5000"), location_id)
        return send_file(qr_png(url), mimetype="image/png")
