"""
Request parsing helpers shared by the route modules.
"""
from typing import Any, Dict

from flask import current_app, request

from app.utils.exceptions import InvalidInputError, InvalidRequestError


def json_body() -> Dict[str, Any]:
    """
    Parsed JSON object of the current request.

    Raises:
        InvalidRequestError: If the body is missing or not a JSON object
    """
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise InvalidRequestError("Request body must be a JSON object")
    return body


def text_field(source: Dict[str, Any], name: str, required: bool = True) -> str:
    """
    String field of a request, bounded by MAX_TEXT_LENGTH.

    Missing optional fields come back as an empty string.
    """
    if name not in source or source[name] is None:
        if required:
            raise InvalidRequestError(f"Missing '{name}' field")
        return ''

    value = source[name]
    if not isinstance(value, str):
        raise InvalidInputError(f"'{name}' must be a string")

    max_length = current_app.config.get('MAX_TEXT_LENGTH', 1000)
    if len(value) > max_length:
        raise InvalidRequestError(f"'{name}' exceeds {max_length} characters")

    return value


def bool_field(source: Dict[str, Any], name: str, default: bool = False) -> bool:
    value = source.get(name, default)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes')
    raise InvalidInputError(f"'{name}' must be a boolean")
