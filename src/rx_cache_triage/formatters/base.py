"""Base formatter interface for report rendering."""

from abc import ABC, abstractmethod

from ..models import ReportModel


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, report: ReportModel) -> None:
        """Render the report to stdout."""

    @abstractmethod
    def format(self, report: ReportModel) -> str:
        """Return formatted string representation of the report."""
