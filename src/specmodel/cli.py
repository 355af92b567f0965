"""
specmodel command line interface.

Commands:
- parse: Build specifications from serialized class syntax trees
- grammar: Show the block grammar
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from specmodel._version import get_version
from specmodel.core import ir
from specmodel.core.config import DEFAULT_CONFIG, ParserConfig, find_config_file, load_config
from specmodel.core.errors import ConfigError, InputError, SpecParseError
from specmodel.core.grammar import GRAMMAR, BlockKind, display_name
from specmodel.core.parser import parse_batch
from specmodel.core.syntax_loader import load_classes

app = typer.Typer(
    help="Build specification object models from class syntax trees",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"specmodel {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """specmodel - specification parser."""


def _resolve_config(config_path: Path | None) -> ParserConfig:
    if config_path is None:
        config_path = find_config_file(Path.cwd())
        if config_path is None:
            return DEFAULT_CONFIG
    try:
        return load_config(config_path)
    except ConfigError as e:
        err_console.print(f"[red]Config error:[/red] {escape(str(e))}")
        raise typer.Exit(code=2)


def _render_spec(spec: ir.Specification) -> Tree:
    tree = Tree(f"[bold]{escape(spec.name)}[/bold]")

    if spec.fields:
        fields = tree.add("fields")
        for f in spec.fields:
            marker = " [cyan](shared)[/cyan]" if f.shared else ""
            fields.add(f"{f.ordinal}: {escape(f.name)}{marker}")

    for fixture in spec.fixture_methods:
        count = len(fixture.blocks[0].statements)
        tree.add(f"[magenta]fixture[/magenta] {escape(fixture.name)}() ({count} statements)")

    for method in spec.methods:
        if isinstance(method, ir.FeatureMethod):
            node = tree.add(f"[green]feature {method.ordinal}[/green] {escape(method.name)}")
            for block in method.blocks:
                if block.is_anonymous and block.is_empty:
                    continue
                text = f"{block.label}: {len(block.statements)} statements"
                if block.descriptions:
                    text += " - " + "; ".join(f'"{escape(d)}"' for d in block.descriptions)
                node.add(text)
        else:
            count = len(method.blocks[0].statements)
            tree.add(f"[dim]helper[/dim] {escape(method.name)}() ({count} statements)")

    return tree


def _report_failure(class_name: str, error: SpecParseError) -> None:
    err_console.print(
        f"[red]✗ {escape(class_name)}[/red]\n{escape(str(error))}",
    )


@app.command(name="parse")
def parse_command(
    files: list[Path] = typer.Argument(  # noqa: B008
        ...,
        help="Syntax tree files (.json, .yaml, .yml)",
    ),
    output_format: str = typer.Option(
        "text",
        "--format",
        "-f",
        help="Output format (text or json)",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: nearest specmodel.toml)",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """
    Parse specification classes and print their structure.

    Every class is parsed even when earlier ones fail; the exit code is 1
    if any file or class could not be parsed.

    Examples:
        specmodel parse StackSpec.json
        specmodel parse trees/*.yaml -f json
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if output_format.lower() not in ("text", "json"):
        err_console.print(f"[red]Unknown format:[/red] {escape(output_format)}")
        raise typer.Exit(code=2)

    config = _resolve_config(config_path)
    failed = False
    specs: list[ir.Specification] = []

    for path in files:
        try:
            classes = load_classes(path)
        except InputError as e:
            err_console.print(f"[red]Input error:[/red] {escape(str(e))}")
            failed = True
            continue

        for outcome in parse_batch(classes, config):
            if outcome.error is not None:
                _report_failure(outcome.class_name, outcome.error)
                failed = True
            elif outcome.spec is not None:
                specs.append(outcome.spec)

    if output_format.lower() == "json":
        typer.echo(json.dumps([spec.outline() for spec in specs], indent=2))
    else:
        for spec in specs:
            console.print(_render_spec(spec))

    if failed:
        raise typer.Exit(code=1)


@app.command(name="grammar")
def grammar_command() -> None:
    """Show which blocks may follow each block."""
    table = Table(title="Block grammar")
    table.add_column("Block", style="bold")
    table.add_column("Label")
    table.add_column("May be followed by")

    for kind, desc in GRAMMAR.items():
        if kind is BlockKind.METHOD_END:
            continue
        table.add_row(kind.value, desc.label or "-", ", ".join(desc.successor_labels))

    console.print(table)
    console.print(f"'{display_name(BlockKind.METHOD_END)}' marks the end of the method body.")


def main() -> None:
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
