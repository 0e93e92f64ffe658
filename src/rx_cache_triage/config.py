"""Configuration loading and management for rx-cache-triage.

Configuration sources are merged in priority order:
    1. Defaults (defined in TriageConfig)
    2. Global config (~/.rx-cache-triage.toml)
    3. Project config (./rx-cache-triage.toml)
    4. Explicit config file
    5. Environment variables (RX_TRIAGE_* prefix)
    6. CLI overrides (passed as kwargs)

Only ThresholdConfig reaches the analysis core. Everything else here
(worker count, node selection, output format) belongs to collection and
rendering.

Example:
    >>> config = load_config(skew_ratio_threshold=5, output_format="json")
    >>> config.thresholds.skew_ratio_threshold
    5
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]
OutputFormat = Literal["both", "table", "json"]

OUTPUT_FORMATS = ("both", "table", "json")
VERBOSITIES = ("quiet", "normal", "verbose")

ENV_PREFIX = "RX_TRIAGE_"
CONFIG_FILENAME = "rx-cache-triage.toml"


def _require_int(key: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigError(key, value, "must be an integer")


@dataclass(frozen=True)
class ThresholdConfig:
    """Imbalance detection thresholds.

    Attributes:
        flag_threshold: An interface has an issue when any rx_cache_* counter
            is strictly greater than this value.
        imbalance_percent_threshold: A bond is flagged when one interface holds
            at least this percentage of the bond's rx_cache_reuse total.
        skew_ratio_threshold: A bond is flagged when the max/min ratio of
            rx_cache_busy or rx_cache_full reaches this value.

    Lower thresholds catch regressions earlier (pre-production), higher
    thresholds keep production reports quiet.
    """

    flag_threshold: int = 0
    imbalance_percent_threshold: int = 80
    skew_ratio_threshold: int = 10

    def __post_init__(self) -> None:
        """Validate threshold domains. Values are never clamped."""
        for f in fields(self):
            _require_int(f.name, getattr(self, f.name))

        if self.flag_threshold < 0:
            raise InvalidConfigError(
                "flag_threshold", self.flag_threshold, "must be non-negative"
            )
        if not 0 <= self.imbalance_percent_threshold <= 100:
            raise InvalidConfigError(
                "imbalance_percent_threshold",
                self.imbalance_percent_threshold,
                "must be between 0 and 100",
            )
        if self.skew_ratio_threshold < 1:
            raise InvalidConfigError(
                "skew_ratio_threshold", self.skew_ratio_threshold, "must be a positive integer"
            )


DEFAULT_THRESHOLDS = ThresholdConfig()

_THRESHOLD_FIELDS = frozenset(f.name for f in fields(ThresholdConfig))


@dataclass(frozen=True)
class TriageConfig:
    """Configuration for one triage run.

    Attributes:
        Collection:
            workers: Parallel node collections (None = auto-detect)
            timeout_seconds: Per-node timeout for the remote command
            node_selector: Label selector passed to `oc get nodes -l`
            bond: Only inspect this bond (e.g. "bond0")

        Output:
            output_format: "both", "table" or "json"
            verbosity: Logging verbosity level

        Analysis:
            thresholds: Imbalance detection thresholds
    """

    workers: Optional[int] = None
    timeout_seconds: int = 120

    node_selector: Optional[str] = None
    bond: Optional[str] = None

    output_format: OutputFormat = "both"
    verbosity: Verbosity = "normal"

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    def __post_init__(self) -> None:
        if self.workers is not None:
            _require_int("workers", self.workers)
            if self.workers < 1:
                raise InvalidConfigError("workers", self.workers, "must be at least 1")
        _require_int("timeout_seconds", self.timeout_seconds)
        if self.timeout_seconds < 1:
            raise InvalidConfigError(
                "timeout_seconds", self.timeout_seconds, "must be at least 1"
            )
        if self.output_format not in OUTPUT_FORMATS:
            raise InvalidConfigError(
                "output_format", self.output_format, f"must be one of {', '.join(OUTPUT_FORMATS)}"
            )
        if self.verbosity not in VERBOSITIES:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"must be one of {', '.join(VERBOSITIES)}"
            )


def load_config(config_file: Optional[Path] = None, **overrides) -> TriageConfig:
    """Load configuration with auto-discovery and merging.

    Threshold values may be given either as a nested [thresholds] TOML table
    or flat (flag_threshold=5); both end up in TriageConfig.thresholds.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). None values
            are ignored so that unset CLI options don't mask file settings.

    Returns:
        Validated TriageConfig instance

    Raises:
        ConfigurationError: If a config file is missing, unreadable or has
            unknown keys
        InvalidConfigError: If a value is outside its valid domain
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / f".{CONFIG_FILENAME}"
    if global_config.exists():
        _merge(merged, _read_config_file(global_config, "global config"))

    project_config = Path.cwd() / CONFIG_FILENAME
    if project_config.exists():
        _merge(merged, _read_config_file(project_config, "project config"))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        _merge(merged, _read_config_file(config_file, "config file"))

    _merge(merged, _load_env_vars())

    if "verbose" in overrides:
        if overrides.pop("verbose"):
            overrides["verbosity"] = "verbose"
    if "quiet" in overrides:
        if overrides.pop("quiet"):
            overrides["verbosity"] = "quiet"

    _merge(merged, {k: v for k, v in overrides.items() if v is not None})

    thresholds = merged.pop("thresholds", {})
    if not isinstance(thresholds, dict):
        raise ConfigurationError(f"Invalid [thresholds] config: {thresholds!r}")

    try:
        merged["thresholds"] = ThresholdConfig(**thresholds)
    except TypeError as e:
        raise ConfigurationError(f"Invalid [thresholds] config: {e}")

    try:
        return TriageConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _merge(merged: dict[str, Any], source: dict[str, Any]) -> None:
    """Merge one source into the accumulated dict, routing flat threshold keys."""
    for key, value in source.items():
        if isinstance(value, ThresholdConfig):
            value = {f.name: getattr(value, f.name) for f in fields(value)}
        if key in _THRESHOLD_FIELDS:
            merged.setdefault("thresholds", {})[key] = value
        elif key == "thresholds" and isinstance(value, dict):
            merged.setdefault("thresholds", {}).update(value)
        else:
            merged[key] = value


def _read_config_file(path: Path, label: str) -> dict[str, Any]:
    try:
        return _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid {label} '{path}': {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from RX_TRIAGE_* environment variables.

    Supported environment variables:
        RX_TRIAGE_WORKERS: int
        RX_TRIAGE_TIMEOUT_SECONDS: int
        RX_TRIAGE_NODE_SELECTOR: str
        RX_TRIAGE_BOND: str
        RX_TRIAGE_OUTPUT_FORMAT: both/table/json
        RX_TRIAGE_VERBOSITY: quiet/normal/verbose
        RX_TRIAGE_FLAG_THRESHOLD: int
        RX_TRIAGE_IMBALANCE_PERCENT_THRESHOLD: int
        RX_TRIAGE_SKEW_RATIO_THRESHOLD: int
    """
    type_hints = {
        **get_type_hints(TriageConfig),
        **get_type_hints(ThresholdConfig),
    }
    type_hints.pop("thresholds", None)

    result: dict[str, Any] = {}

    for field_name, type_hint in type_hints.items():
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        try:
            result[field_name] = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the field's type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]

    if type_hint is int:
        return int(value)

    return value


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
