"""
Main CLI entry point for complyscan.

Usage:
    complyscan scan ./project
    complyscan scan ./project --scanner structure --json
    complyscan scan ./project --checks 1-13 --type open-source
    complyscan rules --scanner structure

Exit codes: 0 clean, 1 failing checks, 2 usage, configuration or path error.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from complyscan import __version__
from complyscan.domain.config import ScanConfig, ScannerKind, parse_check_ids
from complyscan.domain.exceptions import ScanError
from complyscan.domain.models import ProjectKind, ProjectScope

EXIT_USAGE = 2

# Create the main Typer app
app = typer.Typer(
    name="complyscan",
    help="Declarative compliance scanner for project documentation and package structure.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)


class OutputFormat(str, Enum):
    """Output format options."""

    text = "text"
    terminal = "terminal"
    json = "json"


class ProjectTypeOption(str, Enum):
    """Project type as written on the command line."""

    open_source = "open-source"
    internal = "internal"


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose)],
        force=True,
    )


def fail(message: str) -> typer.Exit:
    err_console.print(f"[red]{message}[/red]")
    return typer.Exit(EXIT_USAGE)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"complyscan version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    Declarative compliance scanner.

    Checks a project's documentation tree or Python package layout against
    a numbered rule catalogue and reports pass, fail or skip per rule.

    Examples:

        complyscan scan .

        complyscan scan . --scanner structure --json --output report.json

        complyscan rules
    """


def _split(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


@app.command()
def scan(
    path: Annotated[
        Path,
        typer.Argument(help="Project directory to scan."),
    ],
    scanner: Annotated[
        Optional[ScannerKind],
        typer.Option("--scanner", "-s", help="Scanner variant (default: docs)."),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print the report as JSON."),
    ] = False,
    format: Annotated[
        Optional[OutputFormat],
        typer.Option("--format", "-f", help="Output format (default: text)."),
    ] = None,
    checks: Annotated[
        Optional[str],
        typer.Option("--checks", help="Only run these IDs, e.g. '1-3,7,10-12'."),
    ] = None,
    project_type: Annotated[
        Optional[ProjectTypeOption],
        typer.Option("--type", "-t", help="Override project type detection."),
    ] = None,
    project_kind: Annotated[
        Optional[ProjectKind],
        typer.Option("--kind", "-k", help="Override project kind detection."),
    ] = None,
    scope: Annotated[
        Optional[ProjectScope],
        typer.Option("--scope", help="Project scope tier (default: large)."),
    ] = None,
    rules_path: Annotated[
        Optional[Path],
        typer.Option("--rules", "-r", help="Rule document replacing the default catalogue."),
    ] = None,
    phase: Annotated[
        Optional[str],
        typer.Option("--phase", help="Only run rules in these categories, comma separated."),
    ] = None,
    module: Annotated[
        Optional[str],
        typer.Option("--module", help="Only inspect these modules, comma separated."),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Also write the JSON report to this file."),
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML file with scan options."),
    ] = None,
    audit: Annotated[
        bool,
        typer.Option("--audit", help="Stamp the report with audit metadata."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log per-check decisions."),
    ] = False,
) -> None:
    """
    Scan a project against a rule catalogue.

    Command-line options override values from --config.

    Examples:

        complyscan scan .

        complyscan scan . --checks 1-13 --scope small

        complyscan scan . --scanner structure --kind library --json
    """
    from complyscan.adapters.sinks import FileSink
    from complyscan.engine.scanner import audit_scan, scan_with_config
    from complyscan.renderers.json_renderer import JsonRenderer
    from complyscan.renderers.terminal import TerminalRenderer
    from complyscan.renderers.text import TextRenderer

    configure_logging(verbose)

    try:
        check_ids = parse_check_ids(checks) if checks is not None else None
    except ValueError as e:
        raise fail(f"Invalid --checks value: {e}")

    try:
        base = ScanConfig.from_file(config) if config is not None else ScanConfig()
        scan_config = base.merged(
            scanner=scanner,
            checks=check_ids,
            project_type=project_type.value if project_type else None,
            project_kind=project_kind,
            scope=scope,
            rules_path=str(rules_path) if rules_path else None,
            phases=_split(phase),
            modules=_split(module),
        )
        if audit:
            report = audit_scan(path, scan_config)
        else:
            report = scan_with_config(path, scan_config)
        if output is not None:
            FileSink(output).emit(report)
    except ScanError as e:
        raise fail(str(e))

    if json_output:
        format = OutputFormat.json

    match format or OutputFormat.text:
        case OutputFormat.json:
            typer.echo(JsonRenderer().render(report))
        case OutputFormat.terminal:
            TerminalRenderer(console=console).render(report)
        case OutputFormat.text:
            typer.echo(TextRenderer().render(report), nl=False)

    if output is not None:
        err_console.print(f"[green]Report written to {output}[/green]")

    raise typer.Exit(report.exit_code)


@app.command()
def rules(
    scanner: Annotated[
        ScannerKind,
        typer.Option("--scanner", "-s", help="Scanner whose catalogue to list."),
    ] = ScannerKind.DOCS,
    rules_path: Annotated[
        Optional[Path],
        typer.Option("--rules", "-r", help="List this rule document instead."),
    ] = None,
) -> None:
    """
    List the rules of a catalogue.

    Shows rule IDs, categories, severities, matcher types and
    applicability restrictions.
    """
    from rich.table import Table

    from complyscan.engine.loader import load_rules

    try:
        catalogue = load_rules(scanner, rules_path)
    except ScanError as e:
        raise fail(str(e))

    table = Table(title=f"complyscan {scanner.value} rules")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Category")
    table.add_column("Description", style="white")
    table.add_column("Severity", style="bold")
    table.add_column("Type", style="dim")
    table.add_column("Applies to")

    severity_styles = {
        "error": "red",
        "warning": "yellow",
        "info": "blue",
    }

    for rule in catalogue:
        applies = [
            value.value
            for value in (rule.project_type, rule.project_kind)
            if value is not None
        ]
        if rule.scope is not None:
            applies.append(f">= {rule.scope.value}")
        table.add_row(
            str(rule.id),
            rule.category,
            rule.description,
            f"[{severity_styles[rule.severity.value]}]{rule.severity.value}[/]",
            rule.kind.tag,
            ", ".join(applies) or "-",
        )

    console.print(table)
    console.print(f"\nTotal: {len(catalogue)} rules")


if __name__ == "__main__":
    app()
