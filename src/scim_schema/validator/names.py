"""
Attribute name checks, run once while a schema is constructed.

RFC 7643 §2.1: ATTRNAME = ALPHA *(nameChar), nameChar = "$" / "-" / "_" /
DIGIT / ALPHA.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

from ..errors import InvalidNameError

if TYPE_CHECKING:
    from ..models.attribute import AttributeDefinition

ATTRIBUTE_NAME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9$_-]*")


def check_name(name: str) -> None:
    """Raise InvalidNameError unless *name* is a valid attribute identifier."""
    if not isinstance(name, str) or not ATTRIBUTE_NAME_PATTERN.fullmatch(name):
        raise InvalidNameError(name)


def check_unique_names(attributes: Iterable[AttributeDefinition], owner: str) -> None:
    """Raise InvalidNameError if two siblings share a name, ignoring case."""
    seen: dict[str, int] = {}
    for i, attr in enumerate(attributes):
        key = attr.name.casefold()
        if key in seen:
            raise InvalidNameError(
                attr.name,
                f"duplicate name in {owner} (attributes {seen[key]} and {i})",
            )
        seen[key] = i
