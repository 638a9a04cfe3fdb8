# core/errors.py
"""
Failure types raised by the transport, the validator and the aggregation layer.
"""

from typing import Optional, Any


class CountriesClientError(Exception):
    """Base class for every failure the client reports."""


class TransportError(CountriesClientError):
    """Connection failure, timeout, non-2xx status or an unparseable body."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ApiError(CountriesClientError):
    """The API answered but flagged the response with `error: true`."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingFieldError(CountriesClientError):
    """An expected field is absent or has the wrong type."""

    def __init__(self, field: str, expected: str = ""):
        detail = f" (expected {expected})" if expected else ""
        super().__init__(f"Missing or invalid field '{field}'{detail}")
        self.field = field
        self.expected = expected


class ParseError(CountriesClientError):
    """A numeric field could not be turned into an integer."""

    def __init__(self, field: str, value: Any):
        super().__init__(f"Cannot parse '{field}' value {value!r} as an integer")
        self.field = field
        self.value = value
