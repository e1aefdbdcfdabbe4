"""
Request body helpers shared by the API blueprints.

Each helper raises ValidationError, which the app-level error handler turns
into a 400 response.
"""
from flask import request

from ..utils.exceptions import ValidationError


def json_body() -> dict:
    """Return the JSON object body, or raise if it is missing/not an object."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")
    return data


def required_str(data: dict, key: str, label: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} is required.", key)
    return value.strip()


def optional_int(data: dict, key: str, label: str):
    """Parse an integer field; None when absent. Accepts ints and digit strings."""
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be a whole number.", key)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"{label} must be a whole number.", key)


def required_int(data: dict, key: str, label: str) -> int:
    value = optional_int(data, key, label)
    if value is None:
        raise ValidationError(f"{label} is required.", key)
    return value
