"""API response helpers and request parsing utilities."""

from __future__ import annotations

from typing import Any

from flask import jsonify


def api_error(error: str, status: int = 400, **extra) -> tuple[Any, int]:
    """Return a standardized JSON error response."""
    resp = {"success": False, "error": error}
    resp.update(extra)
    return jsonify(resp), status


def api_success(**data) -> Any:
    """Return a standardized JSON success response."""
    resp = {"success": True}
    resp.update(data)
    return jsonify(resp)


def normalize_name(value: str | None) -> str:
    """Normalize input name/value."""
    return (value or "").strip()
