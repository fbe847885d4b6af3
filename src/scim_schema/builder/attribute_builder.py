"""
Attribute Builder
==================
Fluent builder API for constructing AttributeDefinition objects.

Provides one factory method per SCIM data type. Each factory applies the
characteristics RFC 7643 fixes for that type (binary and reference values are
case exact, booleans and binaries have no uniqueness) and only exposes the
chain methods that make sense for it.

Example::

    from scim_schema.builder.attribute_builder import AttributeBuilder

    emails = (
        AttributeBuilder.complex(
            "emails",
            AttributeBuilder.string("value"),
            AttributeBuilder.string("type").canonical("work", "home", "other"),
            AttributeBuilder.boolean("primary"),
        )
        .multi_valued()
        .build()
    )
"""

from __future__ import annotations

from ..errors import SchemaDefinitionError
from ..models.attribute import (
    CASE_EXACT_TYPES,
    AttributeDefinition,
    DataType,
    Mutability,
    ReferenceType,
    Returned,
    Uniqueness,
)

# Types whose uniqueness is always "none" (RFC 7643 §2.3.2, §2.3.6, §2.3.5).
_NO_UNIQUENESS = frozenset({DataType.BINARY, DataType.BOOLEAN, DataType.DATE_TIME})


class AttributeBuilder:
    """
    Fluent builder for AttributeDefinition objects.

    Typically instantiated via the factory class methods (e.g. AttributeBuilder.string()).
    """

    def __init__(self, name: str, data_type: DataType = DataType.STRING) -> None:
        self._name = name
        self._data_type = data_type
        self._description: str = ""
        self._multi_valued = False
        self._required = False
        self._case_exact = data_type in CASE_EXACT_TYPES
        self._canonical_values: tuple[str, ...] = ()
        self._mutability = Mutability.READ_WRITE
        self._returned = Returned.DEFAULT
        self._uniqueness = Uniqueness.NONE
        self._reference_types: tuple[str, ...] = ()
        self._sub_attributes: tuple[AttributeDefinition | AttributeBuilder, ...] = ()

    # ------------------------------------------------------------------
    # Factory methods, one per data type
    # ------------------------------------------------------------------

    @classmethod
    def string(cls, name: str) -> "AttributeBuilder":
        """Sequence of zero or more Unicode characters (§2.3.1)."""
        return cls(name, DataType.STRING)

    @classmethod
    def boolean(cls, name: str) -> "AttributeBuilder":
        """The literal true or false (§2.3.2)."""
        return cls(name, DataType.BOOLEAN)

    @classmethod
    def decimal(cls, name: str) -> "AttributeBuilder":
        """Real number with at least one digit after the decimal point (§2.3.3)."""
        return cls(name, DataType.DECIMAL)

    @classmethod
    def integer(cls, name: str) -> "AttributeBuilder":
        """Whole number with no fractional digits (§2.3.4)."""
        return cls(name, DataType.INTEGER)

    @classmethod
    def date_time(cls, name: str) -> "AttributeBuilder":
        """xsd:dateTime, e.g. 2008-01-23T04:56:22Z (§2.3.5)."""
        return cls(name, DataType.DATE_TIME)

    @classmethod
    def binary(cls, name: str) -> "AttributeBuilder":
        """Base64-encoded octets, always case exact (§2.3.6)."""
        return cls(name, DataType.BINARY)

    @classmethod
    def reference(cls, name: str, *reference_types: ReferenceType | str) -> "AttributeBuilder":
        """URI of a resource, always case exact (§2.3.7)."""
        b = cls(name, DataType.REFERENCE)
        b._reference_types = tuple(_keyword(t) for t in reference_types)
        return b

    @classmethod
    def complex(
        cls, name: str, *sub_attributes: AttributeDefinition | AttributeBuilder
    ) -> "AttributeBuilder":
        """Composition of sub-attributes (§2.3.8)."""
        b = cls(name, DataType.COMPLEX)
        b._sub_attributes = sub_attributes
        return b

    # ------------------------------------------------------------------
    # Builder chain methods
    # ------------------------------------------------------------------

    def describe(self, description: str) -> "AttributeBuilder":
        self._description = description
        return self

    def multi_valued(self) -> "AttributeBuilder":
        """Value must be an array."""
        self._multi_valued = True
        return self

    def required(self) -> "AttributeBuilder":
        """Value must be present; a required multi-valued attribute needs at least one element."""
        self._required = True
        return self

    def case_exact(self, exact: bool = True) -> "AttributeBuilder":
        """Only strings may choose; binary and reference are always case exact."""
        if self._data_type != DataType.STRING:
            raise SchemaDefinitionError(f"caseExact is fixed for {self._data_type.value} attributes")
        self._case_exact = exact
        return self

    def canonical(self, *values: str) -> "AttributeBuilder":
        """Suggested canonical values. Informational; not enforced during validation."""
        if self._data_type != DataType.STRING:
            raise SchemaDefinitionError("canonicalValues only apply to string attributes")
        self._canonical_values = values
        return self

    # --- Mutability ---

    def mutability(self, mutability: Mutability) -> "AttributeBuilder":
        self._mutability = mutability
        return self

    def read_only(self) -> "AttributeBuilder":
        """Never patchable by clients."""
        return self.mutability(Mutability.READ_ONLY)

    def immutable(self) -> "AttributeBuilder":
        """May be added once, never replaced or removed."""
        return self.mutability(Mutability.IMMUTABLE)

    def write_only(self) -> "AttributeBuilder":
        return self.mutability(Mutability.WRITE_ONLY)

    # --- Returned / uniqueness ---

    def returned(self, returned: Returned) -> "AttributeBuilder":
        self._returned = returned
        return self

    def uniqueness(self, uniqueness: Uniqueness) -> "AttributeBuilder":
        if self._data_type in _NO_UNIQUENESS and uniqueness != Uniqueness.NONE:
            raise SchemaDefinitionError(f"{self._data_type.value} attributes have no uniqueness")
        self._uniqueness = uniqueness
        return self

    def unique_on_server(self) -> "AttributeBuilder":
        return self.uniqueness(Uniqueness.SERVER)

    def globally_unique(self) -> "AttributeBuilder":
        return self.uniqueness(Uniqueness.GLOBAL)

    # --- Build ---

    def build(self) -> AttributeDefinition:
        """
        Construct and return the AttributeDefinition.

        Raises InvalidNameError for a bad or duplicated name.
        """
        return AttributeDefinition(
            name=self._name,
            data_type=self._data_type,
            description=self._description,
            multi_valued=self._multi_valued,
            required=self._required,
            case_exact=self._case_exact,
            canonical_values=self._canonical_values,
            mutability=self._mutability,
            returned=self._returned,
            uniqueness=self._uniqueness,
            reference_types=self._reference_types,
            sub_attributes=tuple(_built(s) for s in self._sub_attributes),
        )


def _built(attr: AttributeDefinition | AttributeBuilder) -> AttributeDefinition:
    return attr.build() if isinstance(attr, AttributeBuilder) else attr


def _keyword(value: ReferenceType | str) -> str:
    return value.value if isinstance(value, ReferenceType) else value
