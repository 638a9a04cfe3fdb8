# core/__init__.py
"""
Core modules — transport, validation and shared types.
"""

from .client import APIClient, build_query
from .errors import (
    CountriesClientError,
    TransportError,
    ApiError,
    MissingFieldError,
    ParseError,
)
from .validator import validate_response

__all__ = [
    "APIClient",
    "build_query",
    "CountriesClientError",
    "TransportError",
    "ApiError",
    "MissingFieldError",
    "ParseError",
    "validate_response",
]
