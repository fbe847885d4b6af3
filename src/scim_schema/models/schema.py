"""
Schema – Core Model
====================
A ``Schema`` is the ordered, immutable collection of attribute definitions
describing an entire resource or an extension (RFC 7643 §7).

Example::

    from scim_schema import Schema, SchemaBuilder, AttributeBuilder

    user = (
        SchemaBuilder("urn:ietf:params:scim:schemas:core:2.0:User", name="User")
        .add(AttributeBuilder.string("userName").required().unique_on_server())
        .add(AttributeBuilder.boolean("active"))
        .build()
    )
    resource = user.validate_resource({"userName": "bjensen", "active": True})
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..config import get_settings
from ..errors import SchemaDefinitionError
from ..validator.names import check_unique_names
from ..validator.patch import authorize_patch
from ..validator.resource import validate
from .attribute import AttributeDefinition


class Schema(BaseModel):
    """Schema resource (§7): ``id``, ``name``, ``description``, ``attributes``."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Unique schema URI, e.g. a URN")
    name: str = ""
    description: str = ""
    attributes: tuple[AttributeDefinition, ...] = ()

    @model_validator(mode="after")
    def check_attributes(self) -> Schema:
        check_unique_names(self.attributes, owner=f"schema {self.id!r}")
        limit = get_settings().max_nesting_depth
        for attr in self.attributes:
            if attr.depth() > limit:
                raise SchemaDefinitionError(
                    f"attribute {attr.name!r} in schema {self.id!r} nests deeper than {limit} levels"
                )
        return self

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def find_attribute(self, name: str) -> AttributeDefinition | None:
        """Top-level attribute named *name*, ignoring case."""
        for attr in self.attributes:
            if attr.matches(name):
                return attr
        return None

    # ------------------------------------------------------------------
    # Validation entry points
    # ------------------------------------------------------------------

    def validate_resource(self, resource: Any) -> dict[str, Any]:
        """Validate a decoded resource body. See ``validator.resource.validate``."""
        return validate(self, resource)

    def validate_patch_operation_value(self, operation: Any, targets: Mapping[str, Any]) -> None:
        """Authorize one patch operation. See ``validator.patch.authorize_patch``."""
        authorize_patch(self, operation, targets)

    # ------------------------------------------------------------------
    # JSON representation
    # ------------------------------------------------------------------

    def to_scim_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "attributes": [a.to_scim_dict() for a in self.attributes],
        }

    @classmethod
    def from_scim_dict(cls, data: Any) -> Schema:
        """Build a Schema from its JSON representation; unknown keys such as ``meta`` are ignored."""
        if not isinstance(data, Mapping):
            raise SchemaDefinitionError(f"schema must be a JSON object, got {type(data).__name__}")
        return cls.model_validate(dict(data))

    @classmethod
    def from_json_file(cls, path: str | Path) -> Schema:
        return cls.from_scim_dict(json.loads(Path(path).read_text(encoding="utf-8")))

    def __repr__(self) -> str:
        return f"Schema(id={self.id!r}, attributes={len(self.attributes)})"
