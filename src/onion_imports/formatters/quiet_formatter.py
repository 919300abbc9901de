"""Quiet formatter: ``path:line:column: message`` per violation."""

from ..models import CheckReport
from .base import BaseFormatter


class QuietFormatter(BaseFormatter):
    """Render one compiler-style line per violation."""

    def format(self, report: CheckReport) -> str:
        return "\n".join(
            f"{f.file}:{f.edge.line}:{f.edge.column}: {f.message}" for f in report.findings
        )
