"""Sample parsing: validate and normalize raw counter tuples.

Nodes emit one line per counter:

    node=worker-0 bond=bond0 iface=ens1f0 metric=rx_cache_reuse value=1234

A sample missing node, bond, interface or metric is dropped. A present but
unreadable value is coerced to 0: an unreadable counter is evidence of "no
traffic", not evidence of "no interface". Neither case fails the run.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional

from ..logging_config import get_logger
from ..models import Sample

logger = get_logger(__name__)

_UINT_RE = re.compile(r"[0-9]+")

# Line token -> Sample field
_LINE_KEYS = {
    "node": "node",
    "bond": "bond",
    "iface": "interface",
    "metric": "metric",
    "value": "value",
}


def _text(raw: Any) -> str:
    if raw is None:
        return ""
    return str(raw).strip()


def parse_value(raw: Any) -> Optional[int]:
    """Parse a non-negative integer literal. Returns None when unreadable."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw >= 0 else None
    text = _text(raw)
    if not _UINT_RE.fullmatch(text):
        return None
    return int(text)


def parse_sample(
    node: Any, bond: Any, interface: Any, metric: Any, value: Any
) -> Optional[Sample]:
    """Build a Sample from raw fields, or return None if it must be dropped."""
    sample, _coerced = _parse_fields(node, bond, interface, metric, value)
    return sample


def _parse_fields(
    node: Any, bond: Any, interface: Any, metric: Any, value: Any
) -> tuple[Optional[Sample], bool]:
    names = [_text(node), _text(bond), _text(interface), _text(metric)]
    if not all(names):
        return None, False
    parsed = parse_value(value)
    coerced = parsed is None
    return Sample(*names, value=0 if coerced else parsed), coerced


def split_line(line: str) -> dict[str, str]:
    """Split a `key=value` line into a dict keyed by Sample field name.

    Unknown keys are ignored; values are split on the first '='.
    """
    fields: dict[str, str] = {}
    for token in line.split():
        key, sep, val = token.partition("=")
        if not sep or key not in _LINE_KEYS:
            continue
        fields[_LINE_KEYS[key]] = val
    return fields


def parse_line(line: str) -> Optional[Sample]:
    """Parse one collected line, or return None if it must be dropped."""
    return parse_sample(**_line_fields(line))


def _line_fields(line: str) -> dict[str, Optional[str]]:
    fields = split_line(line)
    return {name: fields.get(name) for name in _LINE_KEYS.values()}


@dataclass
class ParseStats:
    """Counts of what the parser accepted, dropped and coerced."""

    accepted: int = 0
    dropped: int = 0
    coerced: int = 0

    @property
    def total(self) -> int:
        return self.accepted + self.dropped


class SampleParser:
    """Stateful parser that keeps ParseStats across a batch."""

    def __init__(self) -> None:
        self.stats = ParseStats()

    def parse(self, raw: str | Sample) -> Optional[Sample]:
        """Parse a raw line or re-validate an existing Sample."""
        if isinstance(raw, Sample):
            fields = {
                "node": raw.node,
                "bond": raw.bond,
                "interface": raw.interface,
                "metric": raw.metric,
                "value": raw.value,
            }
        else:
            fields = _line_fields(raw)

        sample, coerced = _parse_fields(**fields)
        if sample is None:
            self.stats.dropped += 1
            logger.debug("Dropping malformed sample: %r", raw)
            return None

        self.stats.accepted += 1
        if coerced:
            self.stats.coerced += 1
            logger.debug("Unreadable counter value coerced to 0: %r", raw)
        return sample

    def parse_all(self, raws: Iterable[str | Sample]) -> Iterator[Sample]:
        for raw in raws:
            sample = self.parse(raw)
            if sample is not None:
                yield sample
