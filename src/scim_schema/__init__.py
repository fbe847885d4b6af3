"""
scim-schema – SCIM attribute schemas and payload validation
============================================================
Declarative SCIM 2.0 schemas (RFC 7643) plus the two checks a SCIM service
runs before touching storage:

* ``validate`` – type-check a decoded resource body against a schema and
  return its attributes keyed by their canonical names;
* ``authorize_patch`` – decide whether a PATCH operation (RFC 7644) may
  modify the attributes it names, given their mutability.

Quick Start::

    from scim_schema import AttributeBuilder, SchemaBuilder, authorize_patch, validate

    user = (
        SchemaBuilder("urn:ietf:params:scim:schemas:core:2.0:User", name="User")
        .add(AttributeBuilder.string("userName").required().unique_on_server())
        .add(AttributeBuilder.string("id").read_only())
        .add(AttributeBuilder.boolean("active"))
        .build()
    )

    validate(user, {"UserName": "bjensen", "active": True})
    # -> {"userName": "bjensen", "active": True}

    authorize_patch(user, "replace", {"id": "42"})
    # -> raises InvalidValueError (readOnly)
"""

__version__ = "0.1.0"

# Core models
from .models.attribute import (
    AttributeDefinition,
    DataType,
    Mutability,
    ReferenceType,
    Returned,
    Uniqueness,
)
from .models.schema import Schema

# Builders
from .builder.attribute_builder import AttributeBuilder
from .builder.schema_builder import SchemaBuilder

# Validators
from .validator.names import check_name
from .validator.values import validate_attribute, validate_singular
from .validator.resource import ValidationResult, validate
from .validator.patch import (
    PatchOperation,
    PatchOperationRequest,
    PatchRequest,
    authorize_patch,
    authorize_patch_request,
    authorize_patch_value,
)

# Errors
from .errors import (
    AttributeValidationError,
    InvalidNameError,
    InvalidSyntaxError,
    InvalidValueError,
    SchemaDefinitionError,
    ScimSchemaError,
    ScimType,
)

__all__ = [
    # Models
    "AttributeDefinition",
    "DataType",
    "Mutability",
    "ReferenceType",
    "Returned",
    "Uniqueness",
    "Schema",
    # Builders
    "AttributeBuilder",
    "SchemaBuilder",
    # Validators
    "check_name",
    "validate",
    "validate_attribute",
    "validate_singular",
    "ValidationResult",
    "PatchOperation",
    "PatchOperationRequest",
    "PatchRequest",
    "authorize_patch",
    "authorize_patch_request",
    "authorize_patch_value",
    # Errors
    "AttributeValidationError",
    "InvalidNameError",
    "InvalidSyntaxError",
    "InvalidValueError",
    "SchemaDefinitionError",
    "ScimSchemaError",
    "ScimType",
]
