"""
Patch Authorizer
=================
Decides whether a PATCH operation (RFC 7644 §3.5.2) may touch the attributes
it names, before the resource handler applies it.

Rules, checked per target attribute in order:

- the attribute must be declared at the top level of the schema;
- ``readOnly`` attributes may never be patched;
- ``immutable`` attributes may be added but not replaced or removed;
- ``add`` and ``replace`` values must have the attribute's data type;
  ``remove`` carries no value and is not type-checked.

Paths are resolved against top-level attributes only. Sub-attribute paths and
value filters are handled by the resource layer and are rejected here.

Example::

    request = PatchRequest.model_validate(json.loads(body))
    authorize_patch_request(user_schema, request)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from ..errors import InvalidSyntaxError, InvalidValueError
from ..models.attribute import AttributeDefinition, Mutability
from .names import ATTRIBUTE_NAME_PATTERN
from .values import validate_singular

if TYPE_CHECKING:
    from ..models.schema import Schema

logger = logging.getLogger(__name__)

PATCH_OP_SCHEMA = "urn:ietf:params:scim:api:messages:2.0:PatchOp"


class PatchOperation(str, Enum):
    ADD = "add"
    REPLACE = "replace"
    REMOVE = "remove"

    @classmethod
    def parse(cls, op: PatchOperation | str) -> PatchOperation:
        """Accept enum members or op strings in any case ("Replace" is common)."""
        if isinstance(op, cls):
            return op
        if isinstance(op, str):
            try:
                return cls(op.lower())
            except ValueError:
                pass
        raise InvalidSyntaxError(f"unsupported patch operation {op!r}")


def cannot_be_patched(operation: PatchOperation, attr: AttributeDefinition) -> bool:
    if attr.mutability == Mutability.READ_ONLY:
        return True
    return attr.mutability == Mutability.IMMUTABLE and operation in (
        PatchOperation.REPLACE,
        PatchOperation.REMOVE,
    )


def authorize_patch(
    schema: Schema,
    operation: PatchOperation | str,
    targets: Mapping[str, Any],
) -> None:
    """Raise InvalidValueError unless every target in *targets* may be patched."""
    op = PatchOperation.parse(operation)

    for name, value in targets.items():
        attr = schema.find_attribute(name)
        if attr is None:
            logger.debug("patch %s rejected: %r is not defined by %s", op.value, name, schema.id)
            raise InvalidValueError(f"attribute is not defined by schema {schema.id!r}", name)

        if cannot_be_patched(op, attr):
            logger.debug("patch %s rejected: %r is %s", op.value, attr.name, attr.mutability.value)
            raise InvalidValueError(
                f"{attr.mutability.value} attribute cannot be patched with {op.value!r}", attr.name
            )

        if op == PatchOperation.REMOVE:
            continue

        # A multi-valued add/replace may carry one value or an array of them.
        if attr.multi_valued and isinstance(value, (list, tuple)):
            if attr.required and not value:
                logger.debug("patch %s rejected: %r would be emptied", op.value, attr.name)
                raise InvalidValueError("required multi-valued attribute is empty", attr.name)
            for i, element in enumerate(value):
                validate_singular(attr, element, f"{attr.name}[{i}]")
        else:
            validate_singular(attr, value, attr.name)


# Name used by the HTTP layer's call contract.
authorize_patch_value = authorize_patch


# ---------------------------------------------------------------------------
# PatchOp message (RFC 7644 §3.5.2)
# ---------------------------------------------------------------------------


class PatchOperationRequest(BaseModel):
    """One entry of a PatchOp ``Operations`` array."""
    model_config = ConfigDict(frozen=True)

    op: str
    path: str | None = None
    value: Any = None

    def operation(self) -> PatchOperation:
        return PatchOperation.parse(self.op)

    def targets(self) -> dict[str, Any]:
        """Flat ``attribute -> value`` map this operation touches."""
        if self.path is not None:
            if not ATTRIBUTE_NAME_PATTERN.fullmatch(self.path):
                raise InvalidSyntaxError(f"unsupported patch path {self.path!r}", self.path)
            return {self.path: self.value}

        if self.operation() == PatchOperation.REMOVE:
            raise InvalidSyntaxError("remove operations require a path")
        if not isinstance(self.value, Mapping):
            raise InvalidSyntaxError("operations without a path require an object value")
        return dict(self.value)


class PatchRequest(BaseModel):
    """A PatchOp request body."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    schemas: tuple[str, ...] = (PATCH_OP_SCHEMA,)
    operations: tuple[PatchOperationRequest, ...] = Field(..., alias="Operations")


def authorize_patch_request(schema: Schema, request: PatchRequest) -> None:
    """Authorize every operation of *request* in order; the first failure is raised."""
    if PATCH_OP_SCHEMA not in request.schemas:
        raise InvalidSyntaxError(f"patch request must declare schema {PATCH_OP_SCHEMA!r}")
    for operation in request.operations:
        authorize_patch(schema, operation.operation(), operation.targets())
