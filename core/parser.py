# core/parser.py
"""
Strict field extraction from validated API payloads.
Every accessor raises MissingFieldError instead of KeyError/TypeError so
callers see which field was wrong.
"""

import re
from typing import Any, Dict, List

from core.errors import MissingFieldError, ParseError

_THOUSANDS = re.compile(r"[,\s_]")
_INTEGER = re.compile(r"[+-]?\d+")


def require_dict(obj: Any, key: str, path: str = "") -> Dict[str, Any]:
    value = _get(obj, key, path)
    if not isinstance(value, dict):
        raise MissingFieldError(_join(path, key), "object")
    return value


def require_list(obj: Any, key: str, path: str = "") -> List[Any]:
    value = _get(obj, key, path)
    if not isinstance(value, list):
        raise MissingFieldError(_join(path, key), "array")
    return value


def require_str(obj: Any, key: str, path: str = "") -> str:
    value = _get(obj, key, path)
    if not isinstance(value, str):
        raise MissingFieldError(_join(path, key), "string")
    return value


def require_value(obj: Any, key: str, path: str = "") -> Any:
    return _get(obj, key, path)


def parse_int(value: Any, field: str) -> int:
    """
    Normalize a population/year value into an int.

    Accepts ints, integral floats and strings such as "1,324,277".
    """
    if isinstance(value, bool):
        raise ParseError(field, value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ParseError(field, value)
    if isinstance(value, str):
        cleaned = _THOUSANDS.sub("", value)
        if cleaned.endswith(".0"):
            cleaned = cleaned[:-2]
        if _INTEGER.fullmatch(cleaned):
            return int(cleaned)
    raise ParseError(field, value)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  HELPERS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _get(obj: Any, key: str, path: str) -> Any:
    if not isinstance(obj, dict) or obj.get(key) is None:
        raise MissingFieldError(_join(path, key))
    return obj[key]


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key
