"""
YAML run configs and validation of runtime options.

A config file is a mapping whose keys are :class:`RunConfig` field names
(``num-bins`` and ``num_bins`` are both accepted)::

    column: 3
    delim: ";"
    skip_header: true
    num_bins: 20

Values given on the command line override values from the file.
"""

from __future__ import annotations

import copy
from dataclasses import fields, replace
from pathlib import Path
from typing import Any

import yaml

from ..core.errors import ConfigError, InvalidBinCountError
from ..io.writer import OUTPUT_FORMATS
from ..runtime.logging_utils import LOG_LEVELS
from .models import RunConfig

_FIELD_TYPES = {
    "input_path": str,
    "output_path": str,
    "column": int,
    "expr": str,
    "delim": str,
    "skip_header": bool,
    "num_bins": int,
    "output_format": str,
    "precision": int,
    "log_level": str,
    "log_file": str,
}


def _normalize_key(key) -> str:
    return str(key).strip().lower().replace("-", "_")


def load_config(config: Any) -> dict[str, Any]:
    """Parse a config from YAML text or dict input."""

    if isinstance(config, dict):
        return copy.deepcopy(config)

    if isinstance(config, str):
        try:
            parsed = yaml.safe_load(config)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Config is not valid YAML: {exc}") from None
        if parsed is None:
            raise ConfigError("Config text is empty")
        if not isinstance(parsed, dict):
            raise ConfigError("Config must parse to a mapping")
        return parsed

    raise TypeError("Config must be a dict or YAML string")


def load_config_file(path) -> dict[str, Any]:
    config_path = Path(str(path)).expanduser()
    if not config_path.exists() or not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")
    return load_config(config_path.read_text(encoding="utf-8"))


def _coerce(key: str, value: Any, errors: list[str]):
    expected = _FIELD_TYPES[key]
    if expected is bool:
        if not isinstance(value, bool):
            errors.append(f"'{key}' must be true or false, got {value!r}")
        return value
    if expected is int:
        if isinstance(value, bool) or not isinstance(value, int):
            errors.append(f"'{key}' must be an integer, got {value!r}")
        return value
    if isinstance(value, (dict, list)):
        errors.append(f"'{key}' must be a string, got {value!r}")
        return value
    return str(value)


def run_config_from_mapping(
    config: dict[str, Any], base: RunConfig | None = None
) -> RunConfig:
    """Build a :class:`RunConfig` from ``config`` layered over ``base``."""

    errors = []
    values = {}
    for raw_key, raw_value in config.items():
        key = _normalize_key(raw_key)
        if key not in _FIELD_TYPES:
            errors.append(f"unknown config key '{raw_key}'")
            continue
        if raw_value is None:
            continue
        values[key] = _coerce(key, raw_value, errors)

    if errors:
        raise ConfigError("; ".join(errors))

    return replace(base or RunConfig(), **values)


def apply_overrides(run_cfg: RunConfig, overrides: dict[str, Any]) -> RunConfig:
    """Return ``run_cfg`` with every non-``None`` override applied."""

    known = {f.name for f in fields(RunConfig)}
    values = {k: v for k, v in overrides.items() if k in known and v is not None}
    return replace(run_cfg, **values)


def validate_run_config(run_cfg: RunConfig) -> RunConfig:
    """Check option values before any input is read."""

    num_bins = run_cfg.num_bins
    if isinstance(num_bins, bool) or not isinstance(num_bins, int) or num_bins <= 0:
        raise InvalidBinCountError(
            f"number of bins must be a positive integer, got {num_bins!r}"
        )

    errors = []
    if run_cfg.column is not None and run_cfg.expr:
        errors.append("use either 'column' or 'expr', not both")
    if not run_cfg.delim:
        errors.append("'delim' must not be empty")
    if run_cfg.output_format not in OUTPUT_FORMATS:
        errors.append(
            f"'output_format' must be one of {', '.join(OUTPUT_FORMATS)}, "
            f"got '{run_cfg.output_format}'"
        )
    if run_cfg.precision < 0:
        errors.append(f"'precision' must be >= 0, got {run_cfg.precision}")
    if str(run_cfg.log_level).strip().lower() not in LOG_LEVELS:
        errors.append(
            f"'log_level' must be one of {', '.join(LOG_LEVELS)}, "
            f"got '{run_cfg.log_level}'"
        )

    if errors:
        raise ConfigError("; ".join(errors))
    return run_cfg
