"""
Examples for scim-schema
=========================
Three complete examples demonstrating schema validation in a SCIM service.

Run:
    python examples/examples.py
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from scim_schema import (
    AttributeBuilder,
    AttributeValidationError,
    PatchRequest,
    ReferenceType,
    Schema,
    SchemaBuilder,
    authorize_patch_request,
    validate,
)


def user_schema() -> Schema:
    return (
        SchemaBuilder(
            "urn:ietf:params:scim:schemas:core:2.0:User",
            name="User",
            description="User Account",
        )
        .add(AttributeBuilder.string("id").read_only())
        .add(AttributeBuilder.string("userName").required().unique_on_server())
        .add(AttributeBuilder.string("externalId").immutable())
        .add(AttributeBuilder.complex(
            "name",
            AttributeBuilder.string("formatted"),
            AttributeBuilder.string("familyName"),
            AttributeBuilder.string("givenName"),
        ))
        .add(AttributeBuilder.boolean("active"))
        .add(
            AttributeBuilder.complex(
                "emails",
                AttributeBuilder.string("value"),
                AttributeBuilder.string("type").canonical("work", "home", "other"),
                AttributeBuilder.boolean("primary"),
            ).multi_valued()
        )
        .add(AttributeBuilder.binary("x509Certificates").multi_valued())
        .add(AttributeBuilder.reference("profileUrl", ReferenceType.EXTERNAL))
        .build()
    )


# ---------------------------------------------------------------------------
# Example 1: Create
# ---------------------------------------------------------------------------


def example_create() -> None:
    """
    Example 1: validating a POST /Users body.

    Keys are matched ignoring case and come back under their schema spelling;
    attributes the schema does not declare are dropped.
    """
    print("\n" + "="*60)
    print("EXAMPLE 1: Create a User")
    print("="*60)

    body = {
        "schemas": ["urn:ietf:params:scim:schemas:core:2.0:User"],
        "UserName": "bjensen",
        "name": {"givenName": "Barbara", "familyName": "Jensen"},
        "emails": [{"value": "bjensen@example.com", "type": "work", "primary": True}],
        "x509Certificates": ["ZXhhbXBsZQ=="],
    }
    print(json.dumps(validate(user_schema(), body), indent=2))


# ---------------------------------------------------------------------------
# Example 2: Rejected payloads
# ---------------------------------------------------------------------------


def example_rejections() -> None:
    """Example 2: what the HTTP layer gets back for bad payloads."""
    print("\n" + "="*60)
    print("EXAMPLE 2: Rejected payloads")
    print("="*60)

    schema = user_schema()
    for body in (
        {"name": {"givenName": "Barbara"}},
        {"userName": "bjensen", "USERNAME": "bjensen2"},
        {"userName": "bjensen", "emails": {"value": "not-an-array@example.com"}},
        {"userName": "bjensen", "active": "yes"},
    ):
        try:
            validate(schema, body)
        except AttributeValidationError as e:
            print(f"  {e.scim_type.value:<14} {e}")


# ---------------------------------------------------------------------------
# Example 3: PATCH
# ---------------------------------------------------------------------------


def example_patch() -> None:
    """Example 3: authorizing PatchOp requests against attribute mutability."""
    print("\n" + "="*60)
    print("EXAMPLE 3: PATCH authorization")
    print("="*60)

    schema = user_schema()
    for ops in (
        [{"op": "replace", "path": "active", "value": False}],
        [{"op": "add", "value": {"externalId": "701984"}}],
        [{"op": "replace", "path": "externalId", "value": "701985"}],
        [{"op": "remove", "path": "id"}],
    ):
        request = PatchRequest.model_validate({"Operations": ops})
        try:
            authorize_patch_request(schema, request)
            print(f"  allowed   {ops}")
        except AttributeValidationError as e:
            print(f"  rejected  {ops}: {e}")


if __name__ == "__main__":
    example_create()
    example_rejections()
    example_patch()
