"""Output formatters for rx-cache-triage."""

from .base import BaseFormatter
from .combined_formatter import CombinedFormatter
from .json_formatter import JsonFormatter
from .table_formatter import TableFormatter


def get_formatter(name: str) -> BaseFormatter:
    """Get a formatter instance by output format name.

    Args:
        name: One of "both", "table", "json"

    Returns:
        Formatter instance

    Raises:
        ValueError: If name is not recognized
    """
    formatters = {
        "both": CombinedFormatter,
        "table": TableFormatter,
        "json": JsonFormatter,
    }
    cls = formatters.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(formatters))}")
    return cls()


__all__ = [
    "BaseFormatter",
    "CombinedFormatter",
    "JsonFormatter",
    "TableFormatter",
    "get_formatter",
]
