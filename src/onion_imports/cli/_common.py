"""Shared CLI helpers."""

import json
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import CheckConfig, load_config
from ..exceptions import OnionImportsError

console = Console()
err_console = Console(stderr=True)

EXIT_VIOLATIONS = 1
EXIT_ERROR = 2


def resolve_config(
    root: Path,
    config: Optional[Path] = None,
    verbose: bool = False,
    quiet: bool = False,
    json_output: bool = False,
) -> CheckConfig:
    """Build a CheckConfig from CLI options, exiting with code 2 on error."""
    try:
        return load_config(root, config_file=config, verbose=verbose, quiet=quiet)
    except OnionImportsError as e:
        fail(e, json_output=json_output)


def fail(error: OnionImportsError, json_output: bool = False) -> NoReturn:
    """Report ``error`` and exit with its status.

    With ``json_output`` the error is written to stdout as a JSON object.
    """
    if json_output:
        print(json.dumps(error.to_dict(), indent=2, default=str))
    else:
        err_console.print(f"[red]Error:[/red] {escape(str(error))}", highlight=False)
        if error.hint:
            err_console.print(f"[dim]hint: {escape(error.hint)}[/dim]", highlight=False)
    raise typer.Exit(code=error.exit_code)


def config_option() -> Optional[Path]:
    return typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    )
