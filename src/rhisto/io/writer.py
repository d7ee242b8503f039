"""
Output handling: serialize a histogram to a path or stdout.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

from ..core.errors import ConfigError
from ..core.histogram import Histogram
from .reader import is_stdio

OUTPUT_FORMATS = ("edges", "labels")


@contextmanager
def open_output(path=None) -> Iterator[TextIO]:
    """Yield a writable text stream; ``None`` or ``"-"`` means stdout."""

    if is_stdio(path):
        yield sys.stdout
        sys.stdout.flush()
        return

    output_path = Path(str(path)).expanduser()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8", newline="") as handle:
        yield handle


def format_rows(
    histogram: Histogram,
    delim: str = ",",
    output_format: str = "edges",
    precision: int = 2,
) -> list[str]:
    """Render one line per bin.

    ``edges`` gives ``lower, upper, count``; ``labels`` gives the bin
    midpoint and count.
    """

    if output_format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"output format must be one of {', '.join(OUTPUT_FORMATS)}, "
            f"got '{output_format}'"
        )
    if precision < 0:
        raise ConfigError(f"precision must be >= 0, got {precision}")

    rows = []
    for b in histogram.bins:
        if output_format == "labels":
            fields = [f"{b.label:.{precision}f}"]
        else:
            fields = [f"{b.lower:.{precision}f}", f"{b.upper:.{precision}f}"]
        fields.append(str(b.count))
        rows.append(delim.join(fields))
    return rows


def write_histogram(
    histogram: Histogram,
    stream: TextIO,
    delim: str = ",",
    output_format: str = "edges",
    precision: int = 2,
) -> int:
    """Write ``histogram`` to ``stream`` and return the number of lines."""

    rows = format_rows(histogram, delim, output_format, precision)
    for row in rows:
        stream.write(row + "\n")
    return len(rows)
