"""Public runtime models for the import-first API."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.histogram import Bin, Histogram
from .defaults import (
    DEFAULT_DELIM,
    DEFAULT_LOG_LEVEL,
    DEFAULT_NUM_BINS,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_PRECISION,
    DEFAULT_SKIP_HEADER,
)


@dataclass
class RunConfig:
    """Top-level runtime options for one histogram run.

    ``column`` and ``expr`` are mutually exclusive; when both are ``None``
    the first column is used.
    """

    input_path: str | None = None
    output_path: str | None = None
    column: int | None = None
    expr: str | None = None
    delim: str = DEFAULT_DELIM
    skip_header: bool = DEFAULT_SKIP_HEADER
    num_bins: int = DEFAULT_NUM_BINS
    output_format: str = DEFAULT_OUTPUT_FORMAT
    precision: int = DEFAULT_PRECISION
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: str | None = None


@dataclass
class RunResult:
    """Result payload returned by :func:`rhisto.api.pipeline.run`."""

    histogram: Histogram
    rows_read: int
    rows_skipped: int
    output_path: Path | None = None
    log_path: Path | None = None

    @property
    def samples(self) -> int:
        return self.histogram.total


__all__ = ["Bin", "Histogram", "RunConfig", "RunResult"]
