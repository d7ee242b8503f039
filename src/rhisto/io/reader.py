"""
Input handling: open a path or stdin and turn rows into samples.
"""

from __future__ import annotations

import math
import sys
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

import numpy as np

from ..core.errors import (
    ConfigError,
    ExpressionError,
    HistogramError,
    InputError,
    at_line,
)
from .columns import ColumnParser
from .expression import RowExpression

STDIO_MARKER = "-"


@dataclass
class ReadStats:
    """Row bookkeeping for one read."""

    rows_read: int = 0
    rows_skipped: int = 0

    @property
    def samples(self) -> int:
        return self.rows_read - self.rows_skipped


def is_stdio(path) -> bool:
    return path is None or str(path).strip() in ("", STDIO_MARKER)


@contextmanager
def open_input(path=None) -> Iterator[TextIO]:
    """Yield a text stream for ``path``; ``None`` or ``"-"`` means stdin."""

    if is_stdio(path):
        yield sys.stdin
        return

    input_path = Path(str(path)).expanduser()
    if not input_path.exists() or not input_path.is_file():
        raise InputError(f"Input file not found: {input_path}")
    try:
        handle = input_path.open("r", encoding="utf-8", newline="")
    except OSError as exc:
        raise InputError(f"Cannot open input file {input_path}: {exc}") from exc
    with handle:
        yield handle


def build_row_reader(
    column: int | None = None, expr: str | None = None, delim: str = ","
) -> Callable[[str], float]:
    """Return a callable mapping one row of text to one sample."""

    if column is not None and expr:
        raise ConfigError("use either a column or an expression, not both")

    if expr:
        expression = RowExpression(expr)
        parser = ColumnParser(expression.columns, delim)

        def _from_expression(row: str) -> float:
            value = expression.evaluate(parser.parse_row(row))
            if not math.isfinite(value):
                raise ExpressionError(
                    f"'{expression.text}' produced a non-finite value {value}"
                )
            return value

        return _from_expression

    parser = ColumnParser.single(1 if column is None else column, delim)

    def _from_column(row: str) -> float:
        return parser.parse_row(row)[0]

    return _from_column


def read_samples(
    lines: Iterable[str],
    row_reader: Callable[[str], float],
    skip_header: bool = False,
    logger=None,
) -> tuple[np.ndarray, ReadStats]:
    """Read every row of ``lines`` into a float array.

    The header (when ``skip_header`` is set) and whitespace-only lines are
    counted as skipped. Errors are re-raised with the 1-based line number.
    """

    stats = ReadStats()
    samples = []
    try:
        for line_no, line in enumerate(lines, start=1):
            stats.rows_read += 1
            if skip_header and line_no == 1:
                stats.rows_skipped += 1
                if logger is not None:
                    logger.debug(f"[READ] skipped header: {line.rstrip()!r}")
                continue
            if not line.strip():
                stats.rows_skipped += 1
                continue
            try:
                samples.append(row_reader(line))
            except HistogramError as exc:
                raise at_line(exc, line_no) from exc
    except UnicodeDecodeError as exc:
        # decoding runs ahead of line splitting, so the failing line is unknown
        raise InputError(
            f"input is not valid {exc.encoding} text "
            f"(read {stats.rows_read} rows before the error): {exc.reason}"
        ) from exc

    if logger is not None:
        logger.info(
            f"[READ] rows={stats.rows_read} skipped={stats.rows_skipped} "
            f"samples={len(samples)}"
        )
    return np.asarray(samples, dtype=float), stats
