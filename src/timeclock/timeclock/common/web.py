from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session

from ..core.exceptions import AuthenticationError, IncompleteMonthError, RecordNotFoundError, ValidationError

logger = logging.getLogger(__name__)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Authentication required"}), 401
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> int:
    return int(session["user_id"])


def current_display_name() -> str:
    return str(session.get("display_name") or session.get("username") or "")


def error_response(e: Exception, *, action: str):
    """Map an exception raised by a service to a JSON error response."""
    if isinstance(e, IncompleteMonthError):
        return jsonify({"error": str(e), "missingClockOuts": e.missing_dates}), 400
    if isinstance(e, ValidationError):
        return jsonify({"error": str(e)}), 400
    if isinstance(e, AuthenticationError):
        return jsonify({"error": str(e)}), 401
    if isinstance(e, RecordNotFoundError):
        return jsonify({"error": "Record not found"}), 404

    logger.exception("%s failed", action)
    return jsonify({"error": f"Failed to {action}"}), 500
