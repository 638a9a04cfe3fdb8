# core/validator.py
"""
Checks the API's error envelope before any data is pulled out of a response.
"""

from typing import Any

from core.errors import ApiError

DEFAULT_ERROR_MESSAGE = "Unknown error"


def validate_response(body: Any) -> Any:
    """
    Raise ApiError if the body carries a truthy `error` flag, otherwise
    return it unchanged.
    """
    if isinstance(body, dict) and body.get("error"):
        message = body.get("msg")
        if message is None or message == "":
            message = DEFAULT_ERROR_MESSAGE
        raise ApiError(str(message))
    return body
