"""
Value Validator
================
Type-checks decoded JSON values against single attribute definitions.

``validate_singular`` handles one value of one data type (recursing into
complex attributes); ``validate_attribute`` wraps it with presence and
multi-valued cardinality rules. Both raise an ``AttributeValidationError``
subclass on the first violation and return the validated value otherwise.

Decoded JSON is expected in its standard library shape: ``dict``, ``list``,
``str``, ``int``, ``float``, ``bool`` and ``None``. ``None`` means "no value".
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any, NoReturn

from pydantic import TypeAdapter, ValidationError

from ..errors import InvalidSyntaxError, InvalidValueError
from ..models.attribute import AttributeDefinition, DataType

logger = logging.getLogger(__name__)

BASE64_PATTERN = re.compile(r"([A-Za-z0-9+/]{4})*([A-Za-z0-9+/]{3}=|[A-Za-z0-9+/]{2}==)?")

# xsd:dateTime as profiled by RFC 7643 §2.3.5, e.g. 2008-01-23T04:56:22Z
DATETIME_PATTERN = re.compile(
    r"(?P<date>\d{4}-\d{2}-\d{2})T(?P<time>\d{2}:\d{2}:\d{2})"
    r"(?P<fraction>\.\d+)?(?P<offset>Z|[+-]\d{2}:\d{2})?"
)

_datetime_adapter = TypeAdapter(datetime)


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def _type_name(value: Any) -> str:
    return type(value).__name__


# ---------------------------------------------------------------------------
# Key resolution
# ---------------------------------------------------------------------------


def lookup(obj: Mapping[str, Any], definition: AttributeDefinition, path: str = "") -> Any:
    """
    Return the value stored under *definition*'s name in *obj*, ignoring case.

    Returns None when no key matches. Two or more keys that differ only in
    case are ambiguous and raise InvalidSyntaxError rather than picking one.
    """
    hits = [(k, v) for k, v in obj.items() if definition.matches(k)]
    if len(hits) > 1:
        keys = ", ".join(repr(k) for k, _ in hits)
        raise InvalidSyntaxError(
            f"ambiguous keys {keys} for attribute {definition.name!r}",
            _join(path, definition.name),
        )
    return hits[0][1] if hits else None


def validate_members(
    attributes: tuple[AttributeDefinition, ...],
    obj: Mapping[str, Any],
    path: str = "",
) -> dict[str, Any]:
    """Validate every attribute of *attributes* against the keys of *obj*."""
    result: dict[str, Any] = {}
    for attr in attributes:
        value = validate_attribute(attr, lookup(obj, attr, path), _join(path, attr.name))
        if value is not None:
            result[attr.name] = value
    return result


# ---------------------------------------------------------------------------
# Attribute validator
# ---------------------------------------------------------------------------


def validate_attribute(definition: AttributeDefinition, value: Any, path: str = "") -> Any:
    """Validate a possibly absent value, applying multi-valued rules."""
    path = path or definition.name

    if value is None:
        if definition.required:
            _reject(InvalidValueError("required attribute is missing", path))
        return None

    if not definition.multi_valued:
        return validate_singular(definition, value, path)

    if not isinstance(value, (list, tuple)):
        _reject(InvalidSyntaxError(
            f"multi-valued attribute expects an array, got {_type_name(value)}", path
        ))
    if definition.required and not value:
        _reject(InvalidValueError("required multi-valued attribute is empty", path))

    return [validate_singular(definition, v, f"{path}[{i}]") for i, v in enumerate(value)]


# ---------------------------------------------------------------------------
# Singular-value validator
# ---------------------------------------------------------------------------


def validate_singular(definition: AttributeDefinition, value: Any, path: str = "") -> Any:
    """Validate one (non-array) value against *definition*'s data type."""
    path = path or definition.name
    dt = definition.data_type

    if dt == DataType.BINARY:
        if not isinstance(value, str):
            _mismatch("base64-encoded string", value, path)
        if not BASE64_PATTERN.fullmatch(value):
            _reject(InvalidValueError("malformed base64 string", path))
        return value

    if dt == DataType.BOOLEAN:
        if not isinstance(value, bool):
            _mismatch("boolean", value, path)
        return value

    if dt == DataType.COMPLEX:
        if not isinstance(value, Mapping):
            _mismatch("object", value, path)
        return validate_members(definition.sub_attributes, value, path)

    if dt == DataType.DATE_TIME:
        if not isinstance(value, str):
            _mismatch("dateTime string", value, path)
        if not _is_datetime(value):
            _reject(InvalidValueError(
                f"malformed dateTime {value!r}, expected e.g. 2008-01-23T04:56:22Z", path
            ))
        return value

    if dt == DataType.DECIMAL:
        if not isinstance(value, float):
            _mismatch("decimal", value, path)
        if not math.isfinite(value):
            _reject(InvalidValueError(f"decimal must be finite, got {value!r}", path))
        return value

    if dt == DataType.INTEGER:
        if not isinstance(value, int) or isinstance(value, bool):
            _mismatch("integer", value, path)
        return value

    if dt in (DataType.STRING, DataType.REFERENCE):
        if not isinstance(value, str):
            _mismatch("string", value, path)
        return value

    _reject(InvalidValueError(f"unsupported data type {dt!r}", path))


def _is_datetime(value: str) -> bool:
    m = DATETIME_PATTERN.fullmatch(value)
    if not m:
        return False
    if m["time"].startswith("24:"):
        # xsd end of day: 24:00:00 with no non-zero fraction
        if m["time"] != "24:00:00" or (m["fraction"] or "").strip(".0"):
            return False
        value = f"{m['date']}T00:00:00{m['offset'] or ''}"
    try:
        _datetime_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def _mismatch(expected: str, value: Any, path: str) -> NoReturn:
    _reject(InvalidValueError(f"expected {expected}, got {_type_name(value)}", path))


def _reject(error: InvalidValueError | InvalidSyntaxError) -> NoReturn:
    logger.debug("rejected %s (%s)", error.path, error.message)
    raise error
