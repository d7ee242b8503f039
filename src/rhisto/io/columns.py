"""Delimiter-based extraction of numeric columns from text rows."""

from __future__ import annotations

import math
from collections.abc import Sequence

from ..core.errors import ColumnOutOfRangeError, ConfigError, ParseError


def _parse_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise ParseError(f"failed to parse float from '{text}'") from None
    if not math.isfinite(value):
        raise ParseError(f"value '{text.strip()}' is not a finite number")
    return value


class ColumnParser:
    """Parse the 1-based ``columns`` of a row split on ``delim``."""

    def __init__(self, columns: Sequence[int], delim: str = ","):
        if not delim:
            raise ConfigError("delimiter must not be empty")
        if not columns:
            raise ConfigError("at least one column is required")
        for column in columns:
            if column < 1:
                raise ColumnOutOfRangeError(
                    f"first column index is 1 but got {column}"
                )
        self.columns = tuple(int(c) for c in columns)
        self.delim = delim
        self._width = max(self.columns)

    @classmethod
    def single(cls, column: int, delim: str = ",") -> "ColumnParser":
        return cls([column], delim)

    def parse_row(self, row: str) -> list[float]:
        fields = row.rstrip("\r\n").split(self.delim)
        if len(fields) < self._width:
            missing = next(c for c in self.columns if c > len(fields))
            raise ColumnOutOfRangeError(f"column {missing} out of bounds")
        return [_parse_float(fields[c - 1]) for c in self.columns]
