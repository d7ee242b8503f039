"""Public package interface for rhisto."""

from importlib.metadata import PackageNotFoundError, version

from .api.config import load_config
from .api.models import RunConfig, RunResult
from .api.pipeline import run
from .core.errors import (
    ColumnOutOfRangeError,
    ConfigError,
    EmptyInputError,
    ExpressionError,
    HistogramError,
    InputError,
    InvalidBinCountError,
    ParseError,
)
from .core.histogram import Bin, Histogram, bin_index, bin_label, build_histogram

try:
    __version__ = version("rhisto")
except PackageNotFoundError:
    __version__ = "0.1.0"


__all__ = [
    "Bin",
    "ColumnOutOfRangeError",
    "ConfigError",
    "EmptyInputError",
    "ExpressionError",
    "Histogram",
    "HistogramError",
    "InputError",
    "InvalidBinCountError",
    "ParseError",
    "RunConfig",
    "RunResult",
    "bin_index",
    "bin_label",
    "build_histogram",
    "load_config",
    "run",
]
