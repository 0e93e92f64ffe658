"""Rich table formatter: per-counter rows plus a per-bond verdict summary."""

from typing import List, Optional

from rich.console import Console
from rich.table import Table

from ..models import SKEW_SENTINEL, ReportModel
from .base import BaseFormatter


def _ratio(value: int) -> str:
    return "inf" if value == SKEW_SENTINEL else str(value)


def _yes_no(flag: bool, style: str = "red") -> str:
    return f"[{style}]yes[/{style}]" if flag else "no"


def counters_table(report: ReportModel) -> Table:
    """One row per counter, sorted by node, bond, interface, metric."""
    table = Table(title="rx_cache counters", show_header=True, show_lines=False, pad_edge=True)
    table.add_column("NODE", min_width=12, no_wrap=True)
    table.add_column("BOND", no_wrap=True)
    table.add_column("INTERFACE", no_wrap=True)
    table.add_column("METRIC", no_wrap=True)
    table.add_column("VALUE", justify="right")
    table.add_column("ISSUE")

    for node, bond in report.iter_bonds():
        for iface in bond.interfaces:
            for metric, value in iface.metrics.items():
                table.add_row(
                    node.name, bond.name, iface.name, metric, str(value), _yes_no(iface.issue, "yellow")
                )
    return table


def bonds_table(report: ReportModel) -> Table:
    """One row per bond with the imbalance verdict."""
    table = Table(title="Bond imbalance", show_header=True, show_lines=False, pad_edge=True)
    table.add_column("NODE", min_width=12, no_wrap=True)
    table.add_column("BOND", no_wrap=True)
    table.add_column("TOP REUSE", no_wrap=True)
    table.add_column("SHARE %", justify="right")
    table.add_column("BUSY SKEW", justify="right")
    table.add_column("FULL SKEW", justify="right")
    table.add_column("IMBALANCE")
    table.add_column("REASONS")

    for node, bond in report.iter_bonds():
        table.add_row(
            node.name,
            bond.name,
            bond.top_reuse_interface or "-",
            str(bond.top_reuse_share_percent),
            _ratio(bond.busy_skew_ratio),
            _ratio(bond.full_skew_ratio),
            _yes_no(bond.imbalanced),
            "\n".join(bond.reasons),
        )
    return table


class TableFormatter(BaseFormatter):
    """Human-readable tables on stdout."""

    def __init__(self, width: Optional[int] = None) -> None:
        self.width = width

    def tables(self, report: ReportModel) -> List[Table]:
        return [counters_table(report), bonds_table(report)]

    def render(self, report: ReportModel, console: Optional[Console] = None) -> None:
        console = console or Console(width=self.width)
        for i, table in enumerate(self.tables(report)):
            if i:
                console.print()
            console.print(table)

    def format(self, report: ReportModel) -> str:
        console = Console(width=self.width or 160, color_system=None)
        with console.capture() as capture:
            self.render(report, console)
        return capture.get()
