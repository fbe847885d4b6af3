"""
Errors
======
Exception taxonomy shared by the schema model, the validators and the CLI.

Two families exist and they must not be confused:

* ``SchemaDefinitionError`` – raised while a schema is being *constructed*.
  It signals a bug in the schema author's code and is expected to abort
  start-up. These classes do not derive from ``ValueError``, so pydantic
  re-raises them unchanged instead of folding them into a ``ValidationError``.
* ``AttributeValidationError`` – raised while a *payload* is validated or a
  patch is authorized. It carries the RFC 7644 ``scimType`` keyword so the
  HTTP layer can build an error response without re-classifying it.
"""

from __future__ import annotations

from enum import Enum


class ScimType(str, Enum):
    """``scimType`` keywords used for 400 responses (RFC 7644 §3.12)."""
    INVALID_SYNTAX = "invalidSyntax"
    INVALID_VALUE = "invalidValue"


class ScimSchemaError(Exception):
    """Base class for every error raised by scim-schema."""


# ---------------------------------------------------------------------------
# Construction-time errors
# ---------------------------------------------------------------------------


class SchemaDefinitionError(ScimSchemaError):
    """The schema itself is malformed."""


class InvalidNameError(SchemaDefinitionError):
    """An attribute name violates the identifier grammar or is duplicated."""

    def __init__(self, name: str, reason: str = "invalid attribute name") -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"{reason}: {name!r}")


# ---------------------------------------------------------------------------
# Validation-time errors
# ---------------------------------------------------------------------------


class AttributeValidationError(ScimSchemaError):
    """A payload does not satisfy its schema."""

    scim_type: ScimType

    def __init__(self, message: str, path: str = "") -> None:
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)

    def to_dict(self) -> dict[str, str]:
        """Fields the HTTP layer needs for an RFC 7644 error body."""
        d = {"scimType": self.scim_type.value, "detail": str(self)}
        if self.path:
            d["path"] = self.path
        return d


class InvalidSyntaxError(AttributeValidationError):
    """The payload's shape cannot be reconciled with the schema."""
    scim_type = ScimType.INVALID_SYNTAX


class InvalidValueError(AttributeValidationError):
    """A value is missing, wrongly typed, or may not be modified."""
    scim_type = ScimType.INVALID_VALUE
