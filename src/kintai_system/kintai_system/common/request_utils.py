from __future__ import annotations

from flask import request

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date
from .validators import optional_int


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def query_int(name: str) -> int | None:
    return optional_int(request.args.get(name), name)


def query_date(name: str, *, required: bool = False):
    value = request.args.get(name)
    if not value:
        if required:
            raise ValidationError(f"{name} is required")
        return None
    return parse_iso_date(value)
