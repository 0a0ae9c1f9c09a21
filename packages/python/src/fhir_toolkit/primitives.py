"""FHIR primitive type checks (https://hl7.org/fhir/R4/datatypes.html)."""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any, Callable, Optional

from fhir_toolkit._constants import (
    INTEGER64_MAX,
    INTEGER64_MIN,
    INTEGER_MAX,
    INTEGER_MIN,
    PRIMITIVE_TYPES,
)

_YEAR = r"([0-9]([0-9]([0-9][1-9]|[1-9]0)|[1-9]00)|[1-9]000)"
_MONTH = r"(0[1-9]|1[0-2])"
_DAY = r"(0[1-9]|[1-2][0-9]|3[0-1])"
_TIME = r"([01][0-9]|2[0-3]):[0-5][0-9]:([0-5][0-9]|60)(\.[0-9]+)?"
_ZONE = r"(Z|(\+|-)((0[0-9]|1[0-3]):[0-5][0-9]|14:00))"

PATTERNS: dict[str, re.Pattern[str]] = {
    "id": re.compile(r"^[A-Za-z0-9\-.]{1,64}$"),
    "instant": re.compile(rf"^{_YEAR}-{_MONTH}-{_DAY}T{_TIME}{_ZONE}$"),
    "date": re.compile(rf"^{_YEAR}(-{_MONTH}(-{_DAY})?)?$"),
    "dateTime": re.compile(
        rf"^{_YEAR}(-{_MONTH}(-{_DAY}(T{_TIME}{_ZONE})?)?)?$"
    ),
    "time": re.compile(rf"^{_TIME}$"),
    "code": re.compile(r"^[^\s]+(\s[^\s]+)*$"),
    "oid": re.compile(r"^urn:oid:[0-2](\.(0|[1-9][0-9]*))+$"),
    "uuid": re.compile(
        r"^urn:uuid:[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-"
        r"[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
    ),
    "uri": re.compile(r"^\S*$"),
    "url": re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://[^\s]+$"),
    "canonical": re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://[^\s|]+(\|[^\s]+)?$"),
    "base64Binary": re.compile(
        r"^(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?$"
    ),
    "xhtml": re.compile(r"^<div[^>]*>[\s\S]*</div>$"),
    "integer64": re.compile(r"^-?([0]|([1-9][0-9]*))$"),
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_boolean(value: Any) -> Optional[str]:
    if not isinstance(value, bool):
        return f"Expected boolean, got {type(value).__name__}"
    return None


def _check_integer(value: Any) -> Optional[str]:
    if not _is_int(value):
        return f"Expected integer, got {type(value).__name__}"
    if not INTEGER_MIN <= value <= INTEGER_MAX:
        return f"Integer out of range: {value}"
    return None


def _check_positive_int(value: Any) -> Optional[str]:
    message = _check_integer(value)
    if message is None and value <= 0:
        message = f"Expected positive integer (> 0), got {value}"
    return message


def _check_unsigned_int(value: Any) -> Optional[str]:
    message = _check_integer(value)
    if message is None and value < 0:
        message = f"Expected unsigned integer (>= 0), got {value}"
    return message


def _check_integer64(value: Any) -> Optional[str]:
    # R5 JSON carries integer64 as a string; tolerate native ints too.
    if _is_int(value):
        number = value
    elif isinstance(value, str) and PATTERNS["integer64"].match(value):
        number = int(value)
    else:
        return f"Expected integer64, got {value!r}"
    if not INTEGER64_MIN <= number <= INTEGER64_MAX:
        return f"Integer64 out of range: {value}"
    return None


def _check_decimal(value: Any) -> Optional[str]:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return f"Expected decimal, got {type(value).__name__}"
    if isinstance(value, float) and not math.isfinite(value):
        return f"Decimal must be finite, got {value}"
    return None


def _check_string(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return f"Expected string, got {type(value).__name__}"
    if value == "":
        return "String must not be empty"
    return None


_CHECKERS: dict[str, Callable[[Any], Optional[str]]] = {
    "boolean": _check_boolean,
    "integer": _check_integer,
    "positiveInt": _check_positive_int,
    "unsignedInt": _check_unsigned_int,
    "integer64": _check_integer64,
    "decimal": _check_decimal,
}


def check_primitive(value: Any, type_code: str) -> Optional[str]:
    """Return an error message if *value* is not a valid *type_code*.

    Returns ``None`` for valid values and for type codes that are not FHIR
    primitives (complex types are checked structurally elsewhere).
    """
    if type_code not in PRIMITIVE_TYPES:
        return None
    checker = _CHECKERS.get(type_code)
    if checker is not None:
        return checker(value)
    message = _check_string(value)
    if message is not None:
        return message
    pattern = PATTERNS.get(type_code)
    if pattern is not None and not pattern.match(value):
        return f"Invalid {type_code}: {value!r}"
    return None


def is_valid_primitive(value: Any, type_code: str) -> bool:
    return check_primitive(value, type_code) is None
