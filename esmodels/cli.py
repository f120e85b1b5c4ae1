"""Command-line interface for inspecting models and converting payloads."""

from __future__ import annotations

import json
import logging
import sys
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from esmodels import models  # noqa: F401  (registers the generated models)
from esmodels.runtime import (
    MissingRequiredField,
    UnrecognizedWireValue,
    disable_required_checks,
    get_model,
    registered_models,
)
from esmodels.schema import describe_model

if TYPE_CHECKING:
    from esmodels.runtime import ObjectModel
    from esmodels.schema import ModelSummary


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Typed Elasticsearch API models."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
        )


def _lookup(name: str) -> type[ObjectModel]:
    try:
        return get_model(name)
    except KeyError:
        print(f"Unknown model: {name}")
        sys.exit(1)


@cli.command("list")
def list_models() -> None:
    """List the registered models."""
    console = Console()
    table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    table.add_column("Name", style="white")
    table.add_column("Kind", style="dim")
    table.add_column("Fields", style="yellow", justify="right")

    for name, model in sorted(registered_models().items()):
        table.add_row(name, model._info.kind, str(len(model._info.fields)))

    console.print(table)


@cli.command()
@click.argument("model_name")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(model_name: str, output_json: bool) -> None:
    """Display a model's fields and wire keys."""
    summary = describe_model(_lookup(model_name))

    if output_json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        _output_plain(summary)


def _output_plain(summary: ModelSummary) -> None:
    """Output model info using rich text formatting."""
    console = Console()

    console.print(f"[bold cyan]{summary.name}[/bold cyan] [dim]({summary.kind})[/dim]")
    if summary.ancestors:
        console.print(f"[dim]Ancestors:[/dim] {' -> '.join(summary.ancestors)}")
    if summary.field_key:
        console.print(f"[dim]Keyed by:[/dim] {summary.field_key}")
    if summary.value_body:
        console.print(f"[dim]Value body:[/dim] {summary.value_body}")
    console.print()

    table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    table.add_column("Field", style="white")
    table.add_column("Wire key", style="green")
    table.add_column("Type", style="yellow")
    table.add_column("Cardinality", style="dim")
    table.add_column("Required", style="red")
    table.add_column("Location", style="dim")
    table.add_column("Declared in", style="dim")

    for field in summary.fields:
        wire_key = field.wire_key
        if field.aliases:
            wire_key += f" ({', '.join(field.aliases)})"
        required = "variant" if field.variant else ("yes" if field.required else "")
        table.add_row(
            field.name,
            wire_key,
            field.type,
            field.cardinality,
            required,
            field.location,
            field.declared_in,
        )

    console.print(table)


@cli.command()
@click.argument("model_name")
@click.option("--input", "-i", "input_file", required=True, help="Input JSON file")
@click.option("--output", "-o", "output_file", default=None, help="Output file (default: stdout)")
@click.option("--lenient", is_flag=True, default=False, help="Do not check required properties")
@click.option("--indent", type=int, default=None, help="Indent the output JSON")
def convert(
    model_name: str, input_file: str, output_file: str | None, lenient: bool, indent: int | None
) -> None:
    """Read a JSON payload as a model and write it back normalized."""
    model = _lookup(model_name)

    with open(input_file, encoding="utf-8") as f:
        text = f.read()

    try:
        if lenient:
            with disable_required_checks():
                instance = model.from_json(text)
        else:
            instance = model.from_json(text)
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"Invalid JSON: {exc}") from exc
    except (MissingRequiredField, UnrecognizedWireValue) as exc:
        raise click.ClickException(str(exc)) from exc

    output = instance.to_json(indent=indent) if indent is not None else instance.to_json()

    if output_file is None:
        click.echo(output)
    else:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(output + "\n")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
