"""CLI entry point: registers the triage command."""

import typer

app = typer.Typer(
    name="rx-cache-triage",
    help="Flag bonded interfaces whose rx_cache_* counters are skewed toward one link",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import commands to register them
from .triage import triage as _triage  # noqa: F401, E402
