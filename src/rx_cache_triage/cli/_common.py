"""Shared CLI helpers."""

from rich.console import Console

# stdout carries the report; messages go to stderr
console = Console(stderr=True)


class ExitCode:
    """Semantic exit codes for CI observability.

    Ranges:
      0: Success (including runs that found no bonds)
      1-9: Finding-based failures
      80-89: User errors (bad input)
      100+: Internal errors
    """

    SUCCESS = 0
    IMBALANCE_FOUND = 1
    BAD_USAGE = 80
    CONFIG_ERROR = 81
    COLLECTION_ERROR = 82
    INTERNAL_ERROR = 100
    INTERRUPTED = 130
