"""Default output: tables, a blank line, then the JSON document."""

from ..models import ReportModel
from .base import BaseFormatter
from .json_formatter import JsonFormatter
from .table_formatter import TableFormatter


class CombinedFormatter(BaseFormatter):
    def __init__(self) -> None:
        self.table = TableFormatter()
        self.json = JsonFormatter()

    def render(self, report: ReportModel) -> None:
        self.table.render(report)
        print()
        self.json.render(report)

    def format(self, report: ReportModel) -> str:
        return f"{self.table.format(report)}\n{self.json.format(report)}"
