"""Layers command: print the configured layer model."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.tree import Tree

from . import app
from ._common import config_option, console, resolve_config


@app.command()
def layers(
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
    Show the layers from outermost (0) to innermost.
    """
    settings = resolve_config(root, config)

    tree = Tree("[bold cyan]Layers[/bold cyan] (outermost first)")
    for index, rank in enumerate(settings.layers.ranks):
        label = f"[bold]{index}[/bold]"
        if rank.is_parallel:
            label += " [dim](parallel)[/dim]"
        branch = tree.add(label)
        for layer in rank.layers:
            patterns = escape(", ".join(layer.patterns))
            branch.add(f"[yellow]{escape(layer.name)}[/yellow]  [dim]{patterns}[/dim]")

    console.print(tree)
