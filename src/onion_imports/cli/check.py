"""Main check command: scan a project and report layer violations."""

from pathlib import Path
from typing import Optional

import typer

from ..api import check_project
from ..exceptions import InvalidPathError, OnionImportsError
from ..formatters import FORMATTERS, get_formatter
from ..logging_config import setup_logging
from . import app
from ._common import EXIT_ERROR, EXIT_VIOLATIONS, config_option, err_console, fail, resolve_config


@app.command()
def check(
    path: Path = typer.Argument(
        Path("."),
        help="Project root (layer patterns are relative to it)",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    config: Optional[Path] = config_option(),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help=f"Output format: {', '.join(FORMATTERS)}",
    ),
    exit_zero: bool = typer.Option(
        False,
        "--exit-zero",
        help="Exit with status 0 even when violations are found",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Append DEBUG logs to this file",
        file_okay=True,
        dir_okay=False,
    ),
):
    """
    Check every import/export in PATH against the configured layers.

    [bold cyan]Examples:[/bold cyan]

      onion-imports check

      onion-imports check ./frontend --format github

      onion-imports check -c layers.toml --format json

      onion-imports check --quiet --log-file onion-imports.log
    """
    if fmt not in FORMATTERS:
        err_console.print(f"[red]Error:[/red] unknown format {fmt!r}")
        raise typer.Exit(code=EXIT_ERROR)

    json_output = fmt == "json"
    settings = resolve_config(path, config, verbose=verbose, quiet=quiet, json_output=json_output)
    try:
        setup_logging(settings.verbosity, log_file=log_file)
    except OSError as e:
        fail(InvalidPathError(log_file, f"cannot open log file: {e}"), json_output=json_output)

    try:
        report = check_project(str(path), config=settings)
    except OnionImportsError as e:
        fail(e, json_output=json_output)

    get_formatter(fmt).render(report)

    if report.has_violations and not exit_zero:
        raise typer.Exit(code=EXIT_VIOLATIONS)
