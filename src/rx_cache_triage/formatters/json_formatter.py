"""JSON formatter: the canonical machine-readable report."""

import json
from typing import Optional

from ..models import ReportModel
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the report as JSON. Compact (one line) unless indent is set."""

    def __init__(self, indent: Optional[int] = None) -> None:
        self.indent = indent

    def render(self, report: ReportModel) -> None:
        print(self.format(report))

    def format(self, report: ReportModel) -> str:
        if self.indent is None:
            return json.dumps(report.to_dict(), separators=(",", ":"))
        return json.dumps(report.to_dict(), indent=self.indent)
