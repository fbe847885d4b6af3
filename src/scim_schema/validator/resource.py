"""
Resource Validator
===================
Validates a whole decoded resource body against a ``Schema``.

Example::

    from scim_schema.validator.resource import validate

    try:
        attributes = validate(user_schema, json.loads(body))
    except AttributeValidationError as e:
        return error_response(400, e.to_dict())

Attributes are visited in the schema's declared order and the first failure
is raised unchanged. The returned mapping is keyed by the schema's spelling
of each attribute name, whatever casing the caller used, and omits
attributes that were absent. Keys the schema does not declare are dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..errors import InvalidSyntaxError
from .values import validate_members

if TYPE_CHECKING:
    from ..models.schema import Schema

logger = logging.getLogger(__name__)

# Validated resource: canonical attribute name -> validated value.
ValidationResult = dict[str, Any]


def validate(schema: Schema, resource: Any) -> ValidationResult:
    """Validate *resource* against *schema* and return the resolved attributes."""
    if not isinstance(resource, Mapping):
        logger.debug("rejected %s resource: not an object", schema.id)
        raise InvalidSyntaxError(f"resource must be a JSON object, got {type(resource).__name__}")

    result = validate_members(schema.attributes, resource)
    logger.debug("validated %d attribute(s) against %s", len(result), schema.id)
    return result
