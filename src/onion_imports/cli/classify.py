"""Classify command: show which layer each path belongs to."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from ..layers.classifier import classify as classify_path
from ..layers.paths import relative_to_root
from . import app
from ._common import config_option, console, resolve_config


@app.command()
def classify(
    paths: List[str] = typer.Argument(..., help="Project-relative paths to classify"),
    root: Path = typer.Option(
        Path("."),
        "--root",
        "-r",
        help="Project root",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    config: Optional[Path] = config_option(),
):
    """
    Print the rank and layer of each path, or "-" when it is outside all layers.
    """
    settings = resolve_config(root, config)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Path", style="cyan")
    table.add_column("Rank", justify="right")
    table.add_column("Layer")

    for raw in paths:
        path = relative_to_root(raw, root.resolve())
        result = classify_path(path, settings.layers)
        if result is None:
            table.add_row(path, "-", "[dim]unclassified[/dim]")
        else:
            table.add_row(path, str(result.rank_index), result.layer.name)

    console.print(table)
