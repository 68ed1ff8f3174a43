from __future__ import annotations

from typing import Any

from flask import jsonify, request

from ..core.exceptions import ValidationError


def json_body() -> dict:
    """Request body as a dict; anything else is a client error."""
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def ok(data: Any = None, status_code: int = 200, **extra):
    payload = {"success": True}
    if data is not None or not extra:
        payload["data"] = data
    payload.update(extra)
    return jsonify(payload), status_code


def fail(error: str, status: int, details: Any = None):
    payload = {"success": False, "error": error}
    if details is not None:
        payload["details"] = details
    return jsonify(payload), status
