"""Rich terminal formatter for onion-imports."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..models import CheckReport
from .base import BaseFormatter


class RichFormatter(BaseFormatter):
    """Summary panel plus a table of violations per file."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, report: CheckReport) -> None:
        self._print_summary(report)
        for path, findings in report.by_file().items():
            table = Table(title=f"[bold]{escape(path)}[/bold]", title_justify="left", expand=False)
            table.add_column("Line", justify="right", style="dim")
            table.add_column("Reference", style="cyan")
            table.add_column("From layer", style="yellow")
            table.add_column("Into layer", style="red")
            for f in findings:
                table.add_row(
                    f"{f.edge.line}:{f.edge.column}",
                    escape(str(f.edge.target_spec)),
                    escape(f.violation.source_layer),
                    escape(f.violation.target_layer),
                )
            self.console.print(table)

        for error in report.errors:
            self.console.print(f"[yellow]warning:[/yellow] {escape(error)}")

    def format(self, report: CheckReport) -> str:
        with self.console.capture() as capture:
            self.render(report)
        return capture.get()

    def _print_summary(self, report: CheckReport) -> None:
        count = len(report.findings)
        if count:
            status = f"[red bold]{count} violation{'s' if count != 1 else ''}[/red bold]"
            border = "red"
        else:
            status = "[green bold]No layer violations[/green bold]"
            border = "green"

        body = (
            f"{status}\n"
            f"[dim]{report.files_scanned} files scanned, "
            f"{report.files_classified} in layers, "
            f"{report.edges_checked} references checked[/dim]"
        )
        self.console.print(
            Panel(
                body,
                title="[bold cyan]onion-imports[/bold cyan]",
                expand=False,
                border_style=border,
            )
        )
