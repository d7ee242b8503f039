"""
End-to-end histogram run: read samples, bin them, write the result.
"""

from __future__ import annotations

from pathlib import Path

from ..core.histogram import build_histogram
from ..io.reader import build_row_reader, is_stdio, open_input, read_samples
from ..io.writer import open_output, write_histogram
from ..runtime.logging_utils import setup_run_logger
from .config import validate_run_config
from .models import RunConfig, RunResult


def run(run_cfg: RunConfig | None = None, logger=None) -> RunResult:
    """Execute one run described by ``run_cfg``.

    A logger is created from ``run_cfg.log_level``/``run_cfg.log_file`` unless
    one is passed in. Raises :class:`rhisto.core.errors.HistogramError`
    subclasses for invalid options or input.
    """

    run_cfg = validate_run_config(run_cfg or RunConfig())

    log_path = None
    if logger is None:
        logger, log_path = setup_run_logger(
            log_level=run_cfg.log_level, log_file=run_cfg.log_file
        )

    row_reader = build_row_reader(
        column=run_cfg.column, expr=run_cfg.expr, delim=run_cfg.delim
    )
    source = "<stdin>" if is_stdio(run_cfg.input_path) else run_cfg.input_path
    logger.info(f"[READ] source={source} delim={run_cfg.delim!r}")

    with open_input(run_cfg.input_path) as stream:
        samples, stats = read_samples(
            stream, row_reader, skip_header=run_cfg.skip_header, logger=logger
        )

    histogram = build_histogram(samples, run_cfg.num_bins)
    logger.info(
        f"[HISTOGRAM] bins={histogram.num_bins} min={histogram.minimum:g} "
        f"max={histogram.maximum:g} width={histogram.width:g} "
        f"samples={histogram.total}"
    )
    if histogram.width == 0.0:
        logger.warning(
            f"all {histogram.total} samples equal {histogram.minimum:g}; "
            "counted in the first bin"
        )

    with open_output(run_cfg.output_path) as stream:
        lines = write_histogram(
            histogram,
            stream,
            delim=run_cfg.delim,
            output_format=run_cfg.output_format,
            precision=run_cfg.precision,
        )

    output_path = None if is_stdio(run_cfg.output_path) else Path(run_cfg.output_path)
    logger.info(f"[WRITE] lines={lines} output={output_path or '<stdout>'}")

    return RunResult(
        histogram=histogram,
        rows_read=stats.rows_read,
        rows_skipped=stats.rows_skipped,
        output_path=output_path,
        log_path=Path(log_path) if log_path else None,
    )
