from __future__ import annotations

from typing import Any

from flask import jsonify


def ok(data: Any = None, *, message: str | None = None, status: int = 200):
    """JSON envelope shared by every endpoint: {success, data, message}."""
    return jsonify({"success": True, "data": data, "message": message}), status


def fail(message: str, *, status: int):
    return jsonify({"success": False, "data": None, "message": message}), status
