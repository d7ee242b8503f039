"""
Fixed bin-count histogram construction.

Samples are partitioned into ``num_bins`` equal-width intervals spanning
``[min, max]``. Every bin is closed on the left and open on the right, apart
from the last one which also includes ``max``.

When every sample has the same value the range collapses to a single point.
The width is then 0, every bin reports ``lower == upper == min``, and all
samples are counted in the first bin.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
import pandas as pd

from .errors import EmptyInputError, HistogramError, InvalidBinCountError, ParseError


@dataclass(frozen=True)
class Bin:
    """One histogram interval and the number of samples inside it."""

    lower: float
    upper: float
    count: int

    @property
    def width(self) -> float:
        return self.upper - self.lower

    @property
    def label(self) -> float:
        """Midpoint of the interval."""

        return self.lower + self.width / 2.0


@dataclass(frozen=True)
class Histogram:
    """Ordered, contiguous bins covering ``[minimum, maximum]``."""

    bins: tuple[Bin, ...]
    minimum: float
    maximum: float
    width: float

    @property
    def num_bins(self) -> int:
        return len(self.bins)

    @property
    def total(self) -> int:
        return sum(b.count for b in self.bins)

    @property
    def counts(self) -> list[int]:
        return [b.count for b in self.bins]

    @property
    def edges(self) -> list[float]:
        """``num_bins + 1`` boundaries, first is ``minimum``, last is ``maximum``."""

        return [b.lower for b in self.bins] + [self.bins[-1].upper]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "lower": [b.lower for b in self.bins],
                "upper": [b.upper for b in self.bins],
                "label": [b.label for b in self.bins],
                "count": self.counts,
            }
        )


def _check_num_bins(num_bins) -> int:
    if isinstance(num_bins, bool) or not isinstance(num_bins, numbers.Integral):
        raise InvalidBinCountError(
            f"number of bins must be an integer, got {num_bins!r}"
        )
    if num_bins <= 0:
        raise InvalidBinCountError(f"number of bins must be positive, got {num_bins}")
    return int(num_bins)


def _scaled_width(minimum: float, maximum: float, num_bins: int) -> tuple[float, float]:
    """Return ``(scale, width * scale)`` keeping every intermediate finite.

    Ranges wider than the largest float are halved before subtracting.
    """

    lo, hi = float(minimum), float(maximum)
    scale = 1.0 if math.isfinite(hi - lo) else 0.5
    scaled_width = (hi * scale - lo * scale) / num_bins
    if not math.isfinite(scaled_width / scale):
        raise HistogramError(
            f"range [{lo:g}, {hi:g}] is too wide to split into {num_bins} bin(s)"
        )
    return scale, scaled_width


def bin_index(value: float, minimum: float, maximum: float, num_bins: int) -> int:
    """Return the bin holding ``value`` for the range ``[minimum, maximum]``."""

    n = _check_num_bins(num_bins)
    scale, width = _scaled_width(minimum, maximum, n)
    if width == 0.0:
        return 0
    idx = math.floor((float(value) * scale - float(minimum) * scale) / width)
    return min(max(idx, 0), n - 1)


def bin_label(index: int, minimum: float, maximum: float, num_bins: int) -> float:
    """Return the midpoint of bin ``index``."""

    n = _check_num_bins(num_bins)
    scale, width = _scaled_width(minimum, maximum, n)
    return (index * width + float(minimum) * scale + width / 2.0) / scale


def _as_samples(values: Iterable[float]) -> np.ndarray:
    if isinstance(values, np.ndarray):
        samples = values.astype(float, copy=False).ravel()
    else:
        samples = np.fromiter((float(v) for v in values), dtype=float)
    if samples.size and not np.isfinite(samples).all():
        bad = samples[~np.isfinite(samples)][0]
        raise ParseError(f"sample values must be finite, got {bad}")
    return samples


def build_histogram(values: Iterable[float], num_bins: int) -> Histogram:
    """Count ``values`` into ``num_bins`` equal-width bins.

    Raises:
        InvalidBinCountError: ``num_bins`` is not a positive integer.
        EmptyInputError: ``values`` holds no samples.
        ParseError: a sample is ``nan`` or infinite.
        HistogramError: one bin would be wider than the largest float.
    """

    n = _check_num_bins(num_bins)
    samples = _as_samples(values)
    if samples.size == 0:
        raise EmptyInputError("no samples to build a histogram from")

    lo = float(samples.min())
    hi = float(samples.max())
    scale, scaled_width = _scaled_width(lo, hi, n)
    width = scaled_width / scale

    if scaled_width == 0.0:
        idx = np.zeros(samples.size, dtype=np.int64)
    else:
        idx = np.floor((samples * scale - lo * scale) / scaled_width).astype(np.int64)
        np.clip(idx, 0, n - 1, out=idx)
    counts = np.bincount(idx, minlength=n)

    bins = []
    for i in range(n):
        lower = (lo * scale + i * scaled_width) / scale
        upper = hi if i == n - 1 else (lo * scale + (i + 1) * scaled_width) / scale
        bins.append(Bin(lower=lower, upper=upper, count=int(counts[i])))

    return Histogram(bins=tuple(bins), minimum=lo, maximum=hi, width=width)
