"""CLI entry point: registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="onion-imports",
    help="onion-imports - Enforce import direction in onion architectures",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"onion-imports {__version__}")
        raise typer.Exit()


@app.callback()
def _root(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """Check that references only point inward through the configured layers."""


# Import subcommands to register them
from .check import check as _check  # noqa: F401, E402
from .classify import classify as _classify  # noqa: F401, E402
from .layers import layers as _layers  # noqa: F401, E402


def main() -> None:
    app()
