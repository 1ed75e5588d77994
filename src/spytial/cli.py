"""CLI interface for spytial using Typer framework."""

import json as jsonlib
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml
from rich.console import Console
from rich.table import Table

from spytial import __description__, __version__
from spytial.config import configure_logging, load_config
from spytial.decorators.builder import record_from_params
from spytial.errors import DecoratorValidationError, SpytialError
from spytial.export import Exporter
from spytial.schemas import SchemaGenerator
from spytial.schemas.validator import load_document
from spytial.serialization import from_yaml, record_params, to_yaml

app = typer.Typer(
    name="spytial",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"spytial version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """spytial - Relational instance export with layout decorators."""


def _record_issues(section: str, records: Any) -> list[tuple[str, str, str, str]]:
    """Check every record of one decorator document section.

    Returns:
        Rows of (section, index, kind, problem)
    """
    if records is None:
        return []
    if not isinstance(records, list):
        return [(section, "-", "-", f"'{section}' must be a list")]

    issues = []
    for index, record in enumerate(records):
        if not isinstance(record, dict) or len(record) != 1:
            issues.append((section, str(index), "-", "Record must be a mapping with exactly one key"))
            continue

        kind, payload = next(iter(record.items()))
        try:
            record_from_params(str(kind), record_params(str(kind), payload))
        except DecoratorValidationError as e:
            issues.append((section, str(index), str(kind), str(e)))

    return issues


@app.command()
def export(
    data: Annotated[
        Path,
        typer.Argument(help="JSON or YAML data file to export")
    ],
    decorators: Annotated[
        Path,
        typer.Option("--decorators", "-d", help="Decorator YAML file to validate and emit alongside")
    ] = None,
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Write the instance JSON to this file (default: stdout)")
    ] = None,
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Configuration file path (default: search for .spytial.json)")
    ] = None,
) -> None:
    """Export a data file into an atom/relation instance document."""
    try:
        spytial_config = load_config(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    configure_logging(spytial_config.logging.level)

    if not data.exists():
        console.print(f"[red]Error:[/red] Data file not found: {data}")
        raise typer.Exit(1)

    try:
        value = load_document(data)
        document = Exporter(spytial_config.export).export(value)
    except (jsonlib.JSONDecodeError, yaml.YAMLError) as e:
        console.print(f"[red]Error:[/red] Failed to parse {data}: {e}")
        raise typer.Exit(1)
    except SpytialError as e:
        console.print(f"[red]Error:[/red] Export failed: {e}")
        raise typer.Exit(1)

    instance_json = document.to_json(indent=spytial_config.output.json_indent)

    decorators_yaml = None
    if decorators:
        try:
            decorator_set = from_yaml(decorators.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError, DecoratorValidationError) as e:
            console.print(f"[red]Error:[/red] Invalid decorators file {decorators}: {e}")
            raise typer.Exit(1)
        decorators_yaml = to_yaml(decorator_set, spytial_config.output.yaml_indent)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(instance_json, encoding="utf-8")
        console.print(
            f"[green]OK[/green] Exported {len(document.atoms)} atoms and "
            f"{len(document.relations)} relations to {output}"
        )
        if decorators_yaml is not None:
            decorators_output = output.with_suffix(".yaml")
            decorators_output.write_text(decorators_yaml, encoding="utf-8")
            console.print(f"[green]OK[/green] Wrote decorators to {decorators_output}")
    else:
        print(instance_json)
        if decorators_yaml is not None:
            print("---")
            print(decorators_yaml, end="")


@app.command("validate-decorators")
def validate_decorators(
    path: Annotated[
        Path,
        typer.Argument(help="Decorator YAML file to validate")
    ],
) -> None:
    """Validate constraint and directive parameters of a decorator file."""
    if not path.exists():
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(1)

    try:
        document = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        console.print(f"[red]Error:[/red] Invalid YAML in {path}: {e}")
        raise typer.Exit(1)

    if not isinstance(document, dict):
        console.print("[red]Error:[/red] Decorator document must be a mapping")
        raise typer.Exit(1)

    issues = []
    for key in document:
        if key not in ("constraints", "directives"):
            issues.append((str(key), "-", "-", "Unknown top-level key"))
    issues.extend(_record_issues("constraints", document.get("constraints")))
    issues.extend(_record_issues("directives", document.get("directives")))

    if not issues:
        total = len(document.get("constraints") or []) + len(document.get("directives") or [])
        console.print(f"[green]OK[/green] {total} decorators are valid: {path}")
        return

    table = Table(title=f"Decorator issues in {path.name}")
    table.add_column("Section", style="cyan")
    table.add_column("Index", justify="right")
    table.add_column("Kind", style="magenta")
    table.add_column("Problem", style="red")
    for row in issues:
        table.add_row(*row)

    console.print(table)
    console.print(f"[red]{len(issues)} issue(s) found[/red]")
    raise typer.Exit(1)


@app.command()
def schema(
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Directory for generated schemas (default: ./schemas)")
    ] = Path("schemas"),
) -> None:
    """Generate JSON schemas for instance and decorator documents."""
    console.print("[dim]Generating JSON schemas from Pydantic models...[/dim]")

    generator = SchemaGenerator()
    generator.generate_all_schemas()
    schema_files = generator.save_schemas(output_dir.resolve())

    console.print(f"[green]Generated {len(schema_files)} JSON schemas:[/green]")
    for schema_name, schema_file in schema_files.items():
        console.print(f"  • {schema_name}: {schema_file}")

    errors = generator.validate_schema_compliance()
    if errors:
        console.print("[yellow]Schema validation warnings:[/yellow]")
        for error in errors:
            console.print(f"  • {error}")
    else:
        console.print("[green]All schemas are valid![/green]")


if __name__ == "__main__":
    app()
