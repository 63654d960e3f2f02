"""
JSON envelope shared by every API endpoint.

    {"success": true, "data": {...}, "message": "..."}
    {"success": false, "error": "...", ...}

Overlap and availability rejections are not malformed requests: they
answer 409 with the conflicting reservations attached.
"""

from flask import jsonify
from typing import Any


def api_success(
    data: dict | None = None,
    message: str | None = None,
    warning: str | None = None,
    status: int = 200,
    **extra_fields: Any
) -> tuple:
    """
    Wrap a result in the success envelope.

    Args:
        data: Result payload, sent under 'data'.
        message: Text for the selection panel (e.g. '2 reservation range(s) selected').
        warning: Non-blocking notice shown next to the form.
        status: HTTP status code.
        **extra_fields: Merged at the top level.

    Returns:
        Tuple of (Response, status_code)
    """
    body = {'success': True}
    if data is not None:
        body['data'] = data
    if message:
        body['message'] = message
    if warning:
        body['warning'] = warning
    body.update(extra_fields)
    return jsonify(body), status


def api_error(error: str, status: int = 400, **extra_fields: Any) -> tuple:
    """
    Wrap an error message in the failure envelope.

    Returns:
        Tuple of (Response, status_code)
    """
    body = {'success': False, 'error': error}
    body.update(extra_fields)
    return jsonify(body), status


def api_conflict(error: str, conflicts: list | None = None, **extra_fields: Any) -> tuple:
    """409 for ranges that overlap each other or existing reservations."""
    return api_error(error, 409, conflicts=conflicts or [], **extra_fields)
