"""
Logging configuration for rx-cache-triage.

Stdout carries only the table and JSON reports, so every log record goes to
stderr through a rich handler. What is logged at each level:

    DEBUG    per-node `oc debug` invocations, dropped and coerced sample
             lines, nodeless lines skipped in an input file
    INFO     node discovery, lines collected per run, bonds analyzed
    WARNING  nodes skipped after a failed or timed-out collection, and a
             batch with no bonded interfaces
    ERROR    unexpected failures in the triage command

The default level is WARNING: a healthy run prints nothing to stderr.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "rx_cache_triage"


def _level(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Route rx_cache_triage log records to stderr.

    Args:
        verbose: Show per-node commands and per-line parse decisions
        quiet: Hide skipped-node warnings, keep errors only
        log_file: Also append plain-text records here, e.g. to keep a trail
                  of which nodes failed across scheduled runs

    Returns:
        The rx_cache_triage root logger
    """
    level = _level(verbose, quiet)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the rx_cache_triage namespace.

    Module names such as 'rx_cache_triage.collection.fanout' pass through;
    bare names ('fanout') are prefixed.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
