"""Quick local sample run for rhisto."""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np

PROJECT_ROOT = Path(__file__).resolve().parent
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH.exists() and str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from rhisto import HistogramError, build_histogram  # noqa: E402


def main() -> int:
    rng = np.random.default_rng(42)
    samples = rng.normal(loc=50.0, scale=12.0, size=5_000)

    try:
        hist = build_histogram(samples, num_bins=12)
    except HistogramError as exc:
        print(f"[SAMPLE RUN ERROR] {exc}", file=sys.stderr)
        print("Tip: install dependencies with `pip install -e .`", file=sys.stderr)
        return 1

    peak = max(hist.counts)
    for b in hist.bins:
        bar = "#" * round(40 * b.count / peak)
        print(f"{b.lower:8.2f} {b.upper:8.2f} {b.count:6d} {bar}")
    print(
        f"[SAMPLE RUN] bins={hist.num_bins} samples={hist.total} "
        f"min={hist.minimum:.3f} max={hist.maximum:.3f}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
