"""Base formatter interface for onion-imports output rendering."""

from abc import ABC, abstractmethod

from ..models import CheckReport


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    def render(self, report: CheckReport) -> None:
        """Print the formatted report to stdout."""
        print(self.format(report))

    @abstractmethod
    def format(self, report: CheckReport) -> str:
        """Return formatted string representation of the report."""
