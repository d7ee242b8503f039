"""Command-line interface for rhisto."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from .. import __version__
from ..core.errors import HistogramError
from ..io.writer import OUTPUT_FORMATS
from ..runtime.logging_utils import LOG_LEVELS
from .config import apply_overrides, load_config_file, run_config_from_mapping
from .defaults import (
    DEFAULT_COLUMN,
    DEFAULT_DELIM,
    DEFAULT_NUM_BINS,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_PRECISION,
)
from .models import RunConfig
from .pipeline import run


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rhisto",
        description="Build a histogram from one numeric column of delimited data.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="Path to read from (default: stdin, also '-')",
    )
    parser.add_argument(
        "output",
        nargs="?",
        help="Path to write the histogram to (default: stdout, also '-')",
    )
    value = parser.add_mutually_exclusive_group()
    value.add_argument(
        "-c",
        "--column",
        type=int,
        help=f"1-based column index to read (default: {DEFAULT_COLUMN})",
    )
    value.add_argument(
        "-e",
        "--expr",
        type=str,
        help="Expression over ?N column references evaluated per row, e.g. '?2 * ?3'",
    )
    parser.add_argument(
        "-d",
        "--delim",
        type=str,
        help=f"Column delimiter, also used in the output (default: {DEFAULT_DELIM!r})",
    )
    parser.add_argument(
        "-s",
        "--skip-header",
        action="store_true",
        default=None,
        help="Skip the first row of the input",
    )
    parser.add_argument(
        "-n",
        "--num-bins",
        type=int,
        help=f"Number of bins (default: {DEFAULT_NUM_BINS})",
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        help=(
            "edges: lower, upper, count; labels: bin midpoint, count "
            f"(default: {DEFAULT_OUTPUT_FORMAT})"
        ),
    )
    parser.add_argument(
        "-p",
        "--precision",
        type=int,
        help=f"Decimal places for bin bounds (default: {DEFAULT_PRECISION})",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="YAML file with defaults for any of the options above",
    )
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Log verbosity")
    parser.add_argument("--log-file", type=str, help="Also write logs to this file")
    parser.add_argument(
        "-V",
        "--version",
        action="store_true",
        help="Print package version and exit",
    )
    return parser


def _build_run_config(args: argparse.Namespace) -> RunConfig:
    run_cfg = RunConfig()
    if args.config:
        run_cfg = run_config_from_mapping(load_config_file(args.config), run_cfg)

    # a value source given on the command line replaces the one from the config
    if args.column is not None:
        run_cfg.expr = None
    if args.expr is not None:
        run_cfg.column = None

    return apply_overrides(
        run_cfg,
        {
            "input_path": args.input,
            "output_path": args.output,
            "column": args.column,
            "expr": args.expr,
            "delim": args.delim,
            "skip_header": args.skip_header,
            "num_bins": args.num_bins,
            "output_format": args.output_format,
            "precision": args.precision,
            "log_level": args.log_level,
            "log_file": args.log_file,
        },
    )


def main(argv: Sequence[str] | None = None) -> int:
    args_list = list(argv) if argv is not None else sys.argv[1:]

    parser = _build_parser()
    args = parser.parse_args(args_list)

    if args.version:
        print(__version__)
        return 0

    try:
        run_cfg = _build_run_config(args)
        run(run_cfg)
    except (HistogramError, OSError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
