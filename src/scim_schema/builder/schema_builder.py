"""
Schema Builder
===============
Fluent builder API for constructing Schema objects.

Example::

    from scim_schema.builder.schema_builder import SchemaBuilder
    from scim_schema.builder.attribute_builder import AttributeBuilder

    enterprise = (
        SchemaBuilder(
            "urn:ietf:params:scim:schemas:extension:enterprise:2.0:User",
            name="EnterpriseUser",
            description="Enterprise User",
        )
        .add(AttributeBuilder.string("employeeNumber"))
        .add(AttributeBuilder.string("organization"))
        .build()
    )
"""

from __future__ import annotations

from ..models.attribute import AttributeDefinition
from ..models.schema import Schema
from .attribute_builder import AttributeBuilder


class SchemaBuilder:
    """Collects attributes in declaration order; validation follows that order."""

    def __init__(self, schema_id: str, name: str = "", description: str = "") -> None:
        self._id = schema_id
        self._name = name
        self._description = description
        self._attributes: list[AttributeDefinition] = []

    def add(self, *attributes: AttributeDefinition | AttributeBuilder) -> "SchemaBuilder":
        for attr in attributes:
            self._attributes.append(attr.build() if isinstance(attr, AttributeBuilder) else attr)
        return self

    def build(self) -> Schema:
        """Raises InvalidNameError on duplicate top-level names."""
        return Schema(
            id=self._id,
            name=self._name,
            description=self._description,
            attributes=tuple(self._attributes),
        )
