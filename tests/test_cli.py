"""
CLI tests
==========
Exercises the scim-schema commands through click's CliRunner.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from scim_schema import AttributeBuilder, SchemaBuilder
from scim_schema.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    schema = (
        SchemaBuilder("urn:ietf:params:scim:schemas:core:2.0:User", name="User")
        .add(AttributeBuilder.string("userName").required())
        .add(AttributeBuilder.boolean("active"))
        .add(AttributeBuilder.string("id").read_only())
        .add(AttributeBuilder.complex("name", AttributeBuilder.string("givenName")))
        .build()
    )
    path = tmp_path / "user.json"
    path.write_text(json.dumps(schema.to_scim_dict()), encoding="utf-8")
    return path


def _write(tmp_path: Path, name: str, data) -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestValidateCommand:

    def test_valid_resource(self, runner: CliRunner, schema_file: Path, tmp_path: Path) -> None:
        resource = _write(tmp_path, "bjensen.json", {"UserName": "bjensen", "active": True})
        result = runner.invoke(cli, ["validate", str(schema_file), str(resource), "--json-output"])
        assert result.exit_code == 0, result.output
        out = json.loads(result.output)
        assert out["passed"] is True
        assert out["attributes"] == {"userName": "bjensen", "active": True}

    def test_invalid_resource(self, runner: CliRunner, schema_file: Path, tmp_path: Path) -> None:
        resource = _write(tmp_path, "bad.json", {"active": True})
        result = runner.invoke(cli, ["validate", str(schema_file), str(resource), "--json-output"])
        assert result.exit_code == 1
        out = json.loads(result.output)
        assert out["passed"] is False
        assert out["error"]["scimType"] == "invalidValue"
        assert out["error"]["path"] == "userName"

    def test_rich_output(self, runner: CliRunner, schema_file: Path, tmp_path: Path) -> None:
        resource = _write(tmp_path, "bjensen.json", {"userName": "bjensen"})
        result = runner.invoke(cli, ["validate", str(schema_file), str(resource)])
        assert result.exit_code == 0
        assert "PASS" in result.output

    def test_unusable_schema(self, runner: CliRunner, tmp_path: Path) -> None:
        schema = _write(tmp_path, "bad-schema.json", {"id": "urn:x", "attributes": [{"name": "_bad"}]})
        resource = _write(tmp_path, "r.json", {})
        result = runner.invoke(cli, ["validate", str(schema), str(resource)])
        assert result.exit_code == 2

    @pytest.mark.parametrize("document", [[1], "x", 42])
    def test_schema_not_an_object(self, runner: CliRunner, tmp_path: Path, document) -> None:
        schema = _write(tmp_path, "bad-schema.json", document)
        resource = _write(tmp_path, "r.json", {})
        result = runner.invoke(cli, ["validate", str(schema), str(resource)])
        assert result.exit_code == 2


class TestPatchCommand:

    def test_allowed(self, runner: CliRunner, schema_file: Path, tmp_path: Path) -> None:
        patch = _write(tmp_path, "patch.json", {
            "schemas": ["urn:ietf:params:scim:api:messages:2.0:PatchOp"],
            "Operations": [{"op": "replace", "path": "active", "value": False}],
        })
        result = runner.invoke(cli, ["patch", str(schema_file), str(patch), "--json-output"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"file": str(patch), "passed": True, "operations": 1}

    def test_read_only_rejected(self, runner: CliRunner, schema_file: Path, tmp_path: Path) -> None:
        patch = _write(tmp_path, "patch.json", {
            "schemas": ["urn:ietf:params:scim:api:messages:2.0:PatchOp"],
            "Operations": [{"op": "replace", "path": "id", "value": "42"}],
        })
        result = runner.invoke(cli, ["patch", str(schema_file), str(patch), "--json-output"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["scimType"] == "invalidValue"

    def test_not_a_patch_message(self, runner: CliRunner, schema_file: Path, tmp_path: Path) -> None:
        patch = _write(tmp_path, "patch.json", {"op": "replace"})
        result = runner.invoke(cli, ["patch", str(schema_file), str(patch)])
        assert result.exit_code == 1


class TestInspectCommand:

    def test_json(self, runner: CliRunner, schema_file: Path) -> None:
        result = runner.invoke(cli, ["inspect", str(schema_file), "--format", "json"])
        assert result.exit_code == 0
        out = json.loads(result.output)
        assert [a["name"] for a in out["attributes"]] == ["userName", "active", "id", "name"]

    def test_rich(self, runner: CliRunner, schema_file: Path) -> None:
        result = runner.invoke(cli, ["inspect", str(schema_file)])
        assert result.exit_code == 0
        assert "givenName" in result.output


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["version"])
    assert result.exit_code == 0
    assert "scim-schema" in result.output
