"""
Attribute Definition – Core Model
==================================
Python representation of a SCIM attribute definition (RFC 7643 §2.2, §7).

An ``AttributeDefinition`` is one node of a schema tree. Only ``complex``
attributes carry children. Every node is a frozen pydantic model: the tree is
built once, checked once, and then shared read-only by any number of
concurrent validation calls.

Characteristics that validation does not consult (``caseExact``,
``canonicalValues``, ``returned``, ``uniqueness``) are still carried so the
storage and response layers can read them from the same tree.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..errors import SchemaDefinitionError
from ..validator.names import check_name, check_unique_names


# ---------------------------------------------------------------------------
# Enumerations (RFC 7643 §2.2, §2.3, §7)
# ---------------------------------------------------------------------------


class _Keyword(str, Enum):
    """Enum whose values are SCIM keywords, matched without regard to case."""

    @classmethod
    def _missing_(cls, value: object) -> Any:
        if isinstance(value, str):
            folded = value.casefold()
            for member in cls:
                if member.value.casefold() == folded:
                    return member
        return None


class DataType(_Keyword):
    """Attribute data types (§2.3). Only COMPLEX carries sub-attributes."""
    STRING = "string"
    DECIMAL = "decimal"
    INTEGER = "integer"
    BINARY = "binary"
    BOOLEAN = "boolean"
    COMPLEX = "complex"
    DATE_TIME = "dateTime"
    REFERENCE = "reference"


class Mutability(_Keyword):
    """Whether and how an attribute may be modified (§7)."""
    READ_WRITE = "readWrite"
    IMMUTABLE = "immutable"
    READ_ONLY = "readOnly"
    WRITE_ONLY = "writeOnly"


class Returned(_Keyword):
    """When an attribute is returned in a response (§7)."""
    DEFAULT = "default"
    ALWAYS = "always"
    NEVER = "never"
    REQUEST = "request"


class Uniqueness(_Keyword):
    """How the service provider enforces uniqueness (§7)."""
    NONE = "none"
    SERVER = "server"
    GLOBAL = "global"


class ReferenceType(str, Enum):
    """Well-known ``referenceTypes`` values. Resource type names are also allowed."""
    EXTERNAL = "external"
    URI = "uri"
    USER = "User"
    GROUP = "Group"


# Data types that compare case-sensitively unless declared otherwise.
CASE_EXACT_TYPES = frozenset({DataType.BINARY, DataType.REFERENCE})


# ---------------------------------------------------------------------------
# AttributeDefinition
# ---------------------------------------------------------------------------


class AttributeDefinition(BaseModel):
    """
    A single attribute definition (§7 ``attributes`` / ``subAttributes``).

    Construction checks the name grammar and sibling uniqueness and raises
    ``InvalidNameError`` (not a pydantic ``ValidationError``) on violation.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., description="Attribute name, unique among siblings ignoring case")
    data_type: DataType = Field(DataType.STRING, alias="type")
    multi_valued: bool = Field(False, alias="multiValued")
    description: str = Field("", description="Human-readable description")
    required: bool = False
    case_exact: bool = Field(False, alias="caseExact")
    canonical_values: tuple[str, ...] = Field((), alias="canonicalValues")
    mutability: Mutability = Mutability.READ_WRITE
    returned: Returned = Returned.DEFAULT
    uniqueness: Uniqueness = Uniqueness.NONE
    reference_types: tuple[str, ...] = Field((), alias="referenceTypes")
    sub_attributes: tuple[AttributeDefinition, ...] = Field((), alias="subAttributes")

    @model_validator(mode="before")
    @classmethod
    def default_case_exact(cls, data: Any) -> Any:
        """caseExact defaults to True for binary and reference attributes."""
        if not isinstance(data, dict) or "caseExact" in data or "case_exact" in data:
            return data
        raw = data.get("type", data.get("data_type", DataType.STRING))
        try:
            data_type = DataType(raw)
        except ValueError:
            return data
        return {**data, "case_exact": data_type in CASE_EXACT_TYPES}

    @model_validator(mode="after")
    def check_definition(self) -> AttributeDefinition:
        check_name(self.name)
        if self.sub_attributes and self.data_type != DataType.COMPLEX:
            raise SchemaDefinitionError(
                f"attribute {self.name!r} of type {self.data_type.value!r} cannot have sub-attributes"
            )
        if self.reference_types and self.data_type != DataType.REFERENCE:
            raise SchemaDefinitionError(
                f"referenceTypes only apply to reference attributes, not {self.name!r}"
            )
        check_unique_names(self.sub_attributes, owner=f"attribute {self.name!r}")
        return self

    @property
    def is_complex(self) -> bool:
        return self.data_type == DataType.COMPLEX

    def matches(self, key: str) -> bool:
        """True if *key* names this attribute, ignoring case."""
        return isinstance(key, str) and key.casefold() == self.name.casefold()

    def find_sub_attribute(self, name: str) -> AttributeDefinition | None:
        for sub in self.sub_attributes:
            if sub.matches(name):
                return sub
        return None

    def depth(self) -> int:
        """Height of the subtree rooted here; a leaf has depth 1."""
        return 1 + max((sub.depth() for sub in self.sub_attributes), default=0)

    def to_scim_dict(self) -> dict[str, Any]:
        """RFC 7643 §7 representation with every characteristic present."""
        return self.model_dump(mode="json", by_alias=True)

    def __repr__(self) -> str:
        flags = []
        if self.multi_valued:
            flags.append("multi")
        if self.required:
            flags.append("required")
        if self.mutability != Mutability.READ_WRITE:
            flags.append(self.mutability.value)
        suffix = f", {', '.join(flags)}" if flags else ""
        return f"AttributeDefinition({self.name!r}, {self.data_type.value}{suffix})"
