"""
Main CLI application.

Entry point for qpool-lint command.
"""

from __future__ import annotations

from pathlib import Path  # noqa: TC003
from typing import Annotated

import typer

import qpool_lint
from qpool_lint.cli.context import ExitCode, configure_logging, get_exit_code
from qpool_lint.cli.output import OutputFormat, get_output_adapter

# Create main app
app = typer.Typer(
    name="qpool-lint",
    help="Question pool CSV validator and linter",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"qpool-lint {qpool_lint.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Question pool CSV validator and linter."""
    pass


# =============================================================================
# Validate Command
# =============================================================================


@app.command()
def validate(
    file: Annotated[Path, typer.Argument(help="Question pool CSV file to validate", exists=True)],
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: terminal, json"),
    ] = "terminal",
    output: Annotated[
        Path | None,
        typer.Option("--out", "-o", help="Write output to file"),
    ] = None,
    color: Annotated[
        bool,
        typer.Option("--color/--no-color", help="Enable/disable colored output"),
    ] = True,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress non-error output"),
    ] = False,
    max_bytes: Annotated[
        int | None,
        typer.Option(
            "--max-bytes",
            help="Maximum input size in bytes (0 = unlimited). Defaults to QPOOL_LINT_MAX_BYTES or 100MiB.",
        ),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="YAML config file. Defaults to QPOOL_LINT_CONFIG."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug information to stderr"),
    ] = False,
) -> None:
    """Validate a question pool CSV file."""
    from qpool_lint.core.config import load_config, resolve_max_bytes
    from qpool_lint.core.parser import ConfigError, DocumentTooLargeError, read_file
    from qpool_lint.core.rules import validate_document

    configure_logging(verbose)

    try:
        output_format = OutputFormat(format)
    except ValueError:
        typer.echo(f"Unknown format: {format}", err=True)
        typer.echo("Available formats: terminal, json", err=True)
        raise typer.Exit(ExitCode.USAGE) from None

    try:
        config = load_config(config_file)
        max_bytes_value = resolve_max_bytes(max_bytes, config)
    except ConfigError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(ExitCode.CONFIG) from None

    # Read the file
    try:
        document = read_file(file, max_bytes=max_bytes_value)
    except (DocumentTooLargeError, OSError) as e:
        typer.echo(f"Error reading file: {e}", err=True)
        raise typer.Exit(ExitCode.FATAL) from None

    report = validate_document(document, config)

    adapter = get_output_adapter(output_format, color=color)
    rendered = adapter.render_report(report)

    # Write to file or stdout
    if output:
        output.write_text(rendered, encoding="utf-8")
        if not quiet:
            typer.echo(f"Output written to {output}")
    elif not quiet or report.has_errors:
        typer.echo(rendered)

    raise typer.Exit(get_exit_code(len(report.findings)))


# =============================================================================
# Utility Commands
# =============================================================================


@app.command("rules")
def list_rules() -> None:
    """List finding codes."""
    from qpool_lint.core.parser.errors import FINDING_CODES

    typer.echo("Finding codes:\n")
    for code, title in FINDING_CODES.items():
        typer.secho(f"  {code}", bold=True)
        typer.echo(f"    {title}")


@app.command()
def explain(
    code: Annotated[str, typer.Argument(help="Finding code to explain, e.g., QPL-FIELD-003")],
) -> None:
    """Explain a finding code in detail."""
    from qpool_lint.core.parser.errors import get_code_details, get_code_title

    normalized = code.strip().upper()
    title = get_code_title(normalized)

    if title is None:
        typer.echo(f"Code not found: {code}", err=True)
        raise typer.Exit(ExitCode.USAGE)

    typer.secho(f"\n{normalized}", bold=True)
    typer.echo()

    typer.secho("Title:", bold=True)
    typer.echo(f"  {title}")

    details = get_code_details(normalized)
    if details:
        typer.echo()
        typer.secho("Details:", bold=True)
        typer.echo(f"  {details}")


# =============================================================================
# CLI Entry Point
# =============================================================================


def run() -> None:
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    run()
