"""JSON formatter for onion-imports."""

import json

from ..models import CheckReport
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the report as JSON."""

    def format(self, report: CheckReport) -> str:
        return json.dumps(report.to_dict(), indent=2)
