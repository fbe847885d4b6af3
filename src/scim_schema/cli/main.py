"""
scim-schema CLI
================
Command-line interface for the scim-schema library.

Commands:
    validate    Validate a resource JSON file against a schema
    patch       Authorize a PatchOp JSON file against a schema
    inspect     Display the attribute tree of a schema
    version     Show version information

Usage::

    scim-schema validate user-schema.json bjensen.json
    scim-schema patch user-schema.json deactivate.json --json-output
    scim-schema inspect user-schema.json --format json
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn

import click
from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from .. import __version__
from ..config import configure_logging
from ..errors import AttributeValidationError, SchemaDefinitionError
from ..models.attribute import AttributeDefinition
from ..models.schema import Schema

console = Console()
logger = logging.getLogger(__name__)

EXIT_INVALID = 1
EXIT_BAD_SCHEMA = 2


@click.group()
@click.version_option(version=__version__, prog_name="scim-schema")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override SCIM_SCHEMA_LOG_LEVEL",
)
def cli(log_level: str | None) -> None:
    """
    scim-schema – SCIM attribute schemas and payload validation.

    Validates resources and PATCH requests against RFC 7643 schemas.
    """
    configure_logging(log_level.upper() if log_level else None)


def _load_schema(path: Path) -> Schema:
    try:
        return Schema.from_json_file(path)
    except (json.JSONDecodeError, ValidationError, SchemaDefinitionError) as e:
        console.print(f"[red]Unusable schema {path}:[/red] {escape(str(e))}")
        sys.exit(EXIT_BAD_SCHEMA)


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]{path} is not valid JSON:[/red] {e}")
        sys.exit(EXIT_INVALID)


def _report_failure(path: Path, error: AttributeValidationError, json_output: bool) -> NoReturn:
    if json_output:
        click.echo(json.dumps({"file": str(path), "passed": False, "error": error.to_dict()}, indent=2))
    else:
        console.print(Panel(
            f"[bold]{path.name}[/bold]\n"
            f"Status: [bold red]FAIL[/bold red]  |  scimType: [yellow]{error.scim_type.value}[/yellow]\n"
            f"{escape(str(error))}",
            title="scim-schema",
            border_style="red",
        ))
    sys.exit(EXIT_INVALID)


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("schema_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("resource_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json-output", is_flag=True, help="Output results as JSON")
def validate(schema_path: Path, resource_path: Path, json_output: bool) -> None:
    """Validate a resource against a schema."""
    schema = _load_schema(schema_path)
    resource = _load_json(resource_path)

    try:
        attributes = schema.validate_resource(resource)
    except AttributeValidationError as e:
        _report_failure(resource_path, e, json_output)

    logger.info("%s: %d attribute(s) valid against %s", resource_path, len(attributes), schema.id)

    if json_output:
        click.echo(json.dumps(
            {"file": str(resource_path), "passed": True, "attributes": attributes}, indent=2
        ))
        return

    console.print(Panel(
        f"[bold]{resource_path.name}[/bold]\n"
        f"Status: [bold green]PASS[/bold green]  |  Schema: {schema.id}  |  "
        f"Attributes: {len(attributes)}",
        title="scim-schema",
        border_style="green",
    ))
    console.print_json(data=attributes)


# ---------------------------------------------------------------------------
# patch
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("schema_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("patch_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json-output", is_flag=True, help="Output results as JSON")
def patch(schema_path: Path, patch_path: Path, json_output: bool) -> None:
    """Authorize a PatchOp request against a schema."""
    from ..validator.patch import PatchRequest, authorize_patch_request

    schema = _load_schema(schema_path)
    try:
        request = PatchRequest.model_validate(_load_json(patch_path))
    except ValidationError as e:
        console.print(f"[red]{patch_path} is not a PatchOp message:[/red] {e}")
        sys.exit(EXIT_INVALID)

    try:
        authorize_patch_request(schema, request)
    except AttributeValidationError as e:
        _report_failure(patch_path, e, json_output)

    if json_output:
        click.echo(json.dumps(
            {"file": str(patch_path), "passed": True, "operations": len(request.operations)}, indent=2
        ))
        return

    t = Table(box=box.SIMPLE, title="Patch Operations")
    t.add_column("#", style="dim")
    t.add_column("Op")
    t.add_column("Path")
    t.add_column("Status")
    for i, op in enumerate(request.operations, 1):
        t.add_row(str(i), op.op, op.path or "—", "[green]✓ allowed[/green]")
    console.print(t)


# ---------------------------------------------------------------------------
# inspect
# ---------------------------------------------------------------------------


def _flags(attr: AttributeDefinition) -> str:
    flags = [attr.data_type.value]
    if attr.multi_valued:
        flags.append("multi")
    if attr.required:
        flags.append("[bold]required[/bold]")
    if attr.mutability.value != "readWrite":
        flags.append(f"[yellow]{attr.mutability.value}[/yellow]")
    if attr.uniqueness.value != "none":
        flags.append(f"unique:{attr.uniqueness.value}")
    return ", ".join(flags)


def _add_branch(tree: Tree, attr: AttributeDefinition) -> None:
    branch = tree.add(f"[cyan]{attr.name}[/cyan] ({_flags(attr)})")
    for sub in attr.sub_attributes:
        _add_branch(branch, sub)


@cli.command()
@click.argument("schema_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--format", "output_format", type=click.Choice(["rich", "json"]), default="rich")
def inspect(schema_path: Path, output_format: str) -> None:
    """Display the attribute tree of a schema."""
    schema = _load_schema(schema_path)

    if output_format == "json":
        click.echo(json.dumps(schema.to_scim_dict(), indent=2))
        return

    console.print(Panel(
        f"[bold]{schema.name or schema.id}[/bold]\n"
        f"{schema.id}\n"
        f"{schema.description or '—'}",
        title="Schema",
        border_style="cyan",
    ))
    tree = Tree("[bold]attributes[/bold]")
    for attr in schema.attributes:
        _add_branch(tree, attr)
    console.print(tree)


# ---------------------------------------------------------------------------
# version info
# ---------------------------------------------------------------------------


@cli.command("version")
def show_version() -> None:
    """Show detailed version information."""
    console.print(Panel(
        f"[bold cyan]scim-schema[/bold cyan] v{__version__}\n\n"
        "SCIM 2.0 schema definitions and payload validation\n"
        "Core schema: RFC 7643\n"
        "Protocol:    RFC 7644 (PATCH authorization)",
        title="scim-schema",
        border_style="cyan",
    ))


if __name__ == "__main__":
    cli()
