"""
Error kinds raised by rhisto.
"""


class HistogramError(ValueError):
    """Base class for every failure rhisto reports to the user."""


class EmptyInputError(HistogramError):
    """Raised when there are no samples to bin."""


class InvalidBinCountError(HistogramError):
    """Raised when the bin count is not a positive integer."""


class ParseError(HistogramError):
    """Raised when a field or sample is not a finite number."""


class ColumnOutOfRangeError(HistogramError):
    """Raised when a column index is below 1 or past the end of a row."""


class ExpressionError(HistogramError):
    """Raised when a row expression is malformed or fails on a row."""


class ConfigError(HistogramError):
    """Raised for an invalid option value or config file."""


class InputError(HistogramError):
    """Raised when the input cannot be opened or decoded as text."""


def at_line(exc: HistogramError, line_no: int) -> HistogramError:
    """Return a copy of ``exc`` whose message is prefixed with ``line_no``."""

    return type(exc)(f"line {line_no}: {exc}")
