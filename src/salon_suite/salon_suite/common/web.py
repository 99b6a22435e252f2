"""Shared controller helpers: session guards and DomainError -> JSON mapping."""
from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from ..users.service import SessionUser
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (InvalidTransitionError, 409),
)


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def status_for(error: DomainError) -> int:
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(error, cls):
            return status
    return 400


def api_errors(view):
    """Translate domain errors to JSON; log anything unexpected as a 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return json_error(str(e), status_for(e))
        except Exception:
            logger.exception("Unhandled error in %s %s", request.method, request.path)
            return json_error("Internal server error", 500)

    return wrapper


def current_user() -> Optional[SessionUser]:
    if "user_id" not in session:
        return None
    return SessionUser(
        user_id=int(session["user_id"]),
        organization_id=int(session["organization_id"]),
        name=session.get("name") or "",
        role=Role(session["role"]),
    )


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def role_required(min_role: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = current_user()
            if user is None:
                return json_error("Please sign in to continue", 401)
            if not user.role.at_least(min_role):
                return json_error("You do not have permission", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def date_arg(name: str, default: date) -> date:
    value = request.args.get(name)
    return parse_iso_date(value) if value else default
