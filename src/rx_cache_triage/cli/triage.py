"""Main triage command."""

from pathlib import Path
from typing import Optional

import click
import typer

from ..api import triage as run_triage
from ..collection import FileSource
from ..config import load_config
from ..core.pipeline import TriageResult
from ..exceptions import CollectionError, ConfigurationError
from ..formatters import get_formatter
from ..logging_config import setup_logging
from . import app
from ._common import ExitCode, console


def _resolve_format(
    output_format: Optional[str], table_only: bool, json_only: bool
) -> Optional[str]:
    if table_only and json_only:
        console.print("[red]Error:[/red] --table-only and --json-only are mutually exclusive")
        raise typer.Exit(ExitCode.BAD_USAGE)
    if table_only:
        return "table"
    if json_only:
        return "json"
    return output_format


def _render(result: TriageResult, output_format: str) -> None:
    report = result.report

    if report.is_empty:
        console.print(
            "[yellow]No bonded interfaces with rx_cache_* statistics found on any node.[/yellow]"
        )
        # Still print an empty JSON document if requested
        if output_format in ("json", "both"):
            get_formatter("json").render(report)
    else:
        get_formatter(output_format).render(report)

    if result.failed_nodes:
        console.print(
            f"[yellow]{len(result.failed_nodes)} node(s) contributed no samples:[/yellow]"
        )
        for node, reason in sorted(result.failed_nodes.items()):
            console.print(f"  {node}: {reason}")

    if result.stats.dropped:
        console.print(f"[dim]{result.stats.dropped} malformed line(s) dropped[/dim]")


@app.command()
def triage(
    threshold: Optional[int] = typer.Option(
        None,
        "-t",
        "--threshold",
        help="Flag an interface when any counter is greater than N (default: 0)",
    ),
    imbalance_percent: Optional[int] = typer.Option(
        None,
        "--imbalance-percent",
        help="Flag a bond when one interface holds at least N% of rx_cache_reuse (default: 80)",
    ),
    skew_ratio: Optional[int] = typer.Option(
        None,
        "--skew-ratio",
        help="Flag a bond when the busy/full max/min ratio reaches N (default: 10)",
    ),
    table_only: bool = typer.Option(False, "--table-only", help="Print only the table output"),
    json_only: bool = typer.Option(False, "--json-only", help="Print only the JSON output"),
    output_format: Optional[str] = typer.Option(
        None,
        "--format",
        help="Output format: both | table | json",
        click_type=click.Choice(["both", "table", "json"], case_sensitive=False),
    ),
    selector: Optional[str] = typer.Option(
        None,
        "-l",
        "--selector",
        help="Only query nodes matching this label selector",
    ),
    bond: Optional[str] = typer.Option(
        None,
        "-b",
        "--bond",
        help="Only inspect this bond (e.g. bond0)",
    ),
    input_path: Optional[str] = typer.Option(
        None,
        "-i",
        "--input",
        help="Read pre-collected lines from a file ('-' for stdin) instead of running oc",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Nodes queried in parallel (default: auto-detect)",
    ),
    timeout: Optional[int] = typer.Option(
        None,
        "--timeout",
        help="Per-node timeout in seconds (default: 120)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    fail_on_imbalance: bool = typer.Option(
        False,
        "--fail-on-imbalance",
        help="Exit 1 if any bond is imbalanced",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
):
    """
    Triage rx_cache_* ethtool stats on bonded interfaces across all nodes.

    Discovers bonds and their slave interfaces via /proc/net/bonding on each
    node, collects rx_cache_* counters, and flags bonds where reuse share or
    busy/full skew point at one overloaded link. Only read-only commands run
    on the nodes.

    [bold cyan]Examples:[/bold cyan]

      rx-cache-triage

      rx-cache-triage --json-only --bond bond0

      rx-cache-triage -l node-role.kubernetes.io/worker= --skew-ratio 5

      rx-cache-triage --input samples.txt --fail-on-imbalance
    """
    from .. import __version__

    if version:
        console.print(f"[bold cyan]rx-cache-triage[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(ExitCode.SUCCESS)

    fmt = _resolve_format(output_format, table_only, json_only)
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = load_config(
            config_file=config,
            output_format=fmt.lower() if fmt else None,
            flag_threshold=threshold,
            imbalance_percent_threshold=imbalance_percent,
            skew_ratio_threshold=skew_ratio,
            node_selector=selector,
            bond=bond,
            workers=workers,
            timeout_seconds=timeout,
            verbose=verbose,
            quiet=quiet,
        )
        source = FileSource(input_path, bond=settings.bond) if input_path else None
        result = run_triage(source=source, config=settings)

    except ConfigurationError as e:
        logger.debug(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(ExitCode.CONFIG_ERROR)

    except CollectionError as e:
        logger.debug(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(ExitCode.COLLECTION_ERROR)

    except KeyboardInterrupt:
        logger.info("Triage interrupted by user")
        console.print("\n[yellow]Triage interrupted[/yellow]")
        raise typer.Exit(ExitCode.INTERRUPTED)

    except Exception as e:
        logger.exception("Unexpected error during triage")
        console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(ExitCode.INTERNAL_ERROR)

    _render(result, settings.output_format)

    if fail_on_imbalance and result.imbalanced:
        imbalanced = result.report.imbalanced_bonds()
        console.print(f"[red]--fail-on-imbalance:[/red] {len(imbalanced)} imbalanced bond(s)")
        raise typer.Exit(ExitCode.IMBALANCE_FOUND)
