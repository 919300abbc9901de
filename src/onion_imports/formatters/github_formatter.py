"""GitHub Actions formatter: one ``::error`` annotation per violation."""

from ..models import CheckReport
from .base import BaseFormatter


def _escape(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class GithubFormatter(BaseFormatter):
    """Output GitHub Actions workflow-command annotations."""

    def format(self, report: CheckReport) -> str:
        lines: list[str] = []
        for f in report.findings:
            location = f"file={f.file},line={f.edge.line},col={f.edge.column}"
            lines.append(f"::error {location},title=onion-imports::{_escape(f.message)}")
        for error in report.errors:
            lines.append(f"::warning title=onion-imports::{_escape(error)}")
        return "\n".join(lines)
