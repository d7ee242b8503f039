import io
import logging
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import patch

import rhisto
from rhisto import (
    EmptyInputError,
    HistogramError,
    InputError,
    InvalidBinCountError,
    ParseError,
    RunConfig,
    build_histogram,
    run,
)
from rhisto.core import errors


def _quiet_logger():
    logger = logging.getLogger("rhisto_test_pipeline")
    logger.handlers = [logging.NullHandler()]
    logger.propagate = False
    return logger


class PublicApiTests(unittest.TestCase):
    def test_exports(self):
        for name in rhisto.__all__:
            self.assertTrue(hasattr(rhisto, name), name)
        self.assertTrue(issubclass(EmptyInputError, HistogramError))
        self.assertTrue(issubclass(HistogramError, ValueError))

    def test_error_kinds_are_documented_histogram_errors(self):
        kinds = [
            obj
            for obj in vars(errors).values()
            if isinstance(obj, type) and issubclass(obj, Exception)
        ]
        self.assertEqual(len(kinds), 8)
        for kind in kinds:
            with self.subTest(kind=kind.__name__):
                self.assertTrue(issubclass(kind, HistogramError))
                self.assertTrue((kind.__doc__ or "").strip())

    def test_run_file_to_file(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            input_path = Path(temp_dir) / "data.csv"
            output_path = Path(temp_dir) / "hist.csv"
            rows = ["id;value"] + [f"{i};{i}" for i in range(1, 11)]
            input_path.write_text("\n".join(rows) + "\n", encoding="utf-8")

            result = run(
                RunConfig(
                    input_path=str(input_path),
                    output_path=str(output_path),
                    column=2,
                    delim=";",
                    skip_header=True,
                    num_bins=5,
                ),
                logger=_quiet_logger(),
            )

            written = output_path.read_text(encoding="utf-8").splitlines()

        self.assertEqual(result.histogram.counts, [2, 2, 2, 2, 2])
        self.assertEqual(result.rows_read, 11)
        self.assertEqual(result.rows_skipped, 1)
        self.assertEqual(result.samples, 10)
        self.assertEqual(result.output_path, output_path)
        self.assertEqual(written[0], "1.00;2.80;2")
        self.assertEqual(written[-1], "8.20;10.00;2")

    def test_run_stdin_to_stdout_with_labels(self):
        out = io.StringIO()
        with patch("sys.stdin", io.StringIO("0\n10\n")):
            with redirect_stdout(out):
                result = run(
                    RunConfig(num_bins=2, output_format="labels", precision=1),
                    logger=_quiet_logger(),
                )

        self.assertIsNone(result.output_path)
        self.assertEqual(out.getvalue(), "2.5,1\n7.5,1\n")

    def test_run_with_expression(self):
        out = io.StringIO()
        with patch("sys.stdin", io.StringIO("1,2\n3,4\n")):
            with redirect_stdout(out):
                result = run(
                    RunConfig(expr="?1 * ?2", num_bins=1), logger=_quiet_logger()
                )
        self.assertEqual(result.histogram.minimum, 2.0)
        self.assertEqual(result.histogram.maximum, 12.0)
        self.assertEqual(out.getvalue(), "2.00,12.00,2\n")

    def test_run_degenerate_input(self):
        out = io.StringIO()
        with patch("sys.stdin", io.StringIO("5\n5\n5\n")):
            with redirect_stdout(out):
                result = run(RunConfig(num_bins=4), logger=_quiet_logger())
        self.assertEqual(result.histogram.counts, [3, 0, 0, 0])
        self.assertEqual(out.getvalue().splitlines()[0], "5.00,5.00,3")

    def test_run_errors(self):
        cases = [
            ("", RunConfig(), EmptyInputError),
            ("header\n", RunConfig(skip_header=True), EmptyInputError),
            ("1\n", RunConfig(num_bins=0), InvalidBinCountError),
            ("1\nx\n", RunConfig(), ParseError),
        ]
        for text, run_cfg, error in cases:
            with self.subTest(error=error.__name__, text=text):
                with patch("sys.stdin", io.StringIO(text)):
                    with redirect_stdout(io.StringIO()) as out:
                        with self.assertRaises(error):
                            run(run_cfg, logger=_quiet_logger())
                self.assertEqual(out.getvalue(), "")

    def test_run_missing_input_file(self):
        with self.assertRaises(InputError):
            run(RunConfig(input_path="/no/such/file.csv"), logger=_quiet_logger())

    def test_run_writes_log_file(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            log_path = Path(temp_dir) / "logs" / "run.log"
            with patch("sys.stdin", io.StringIO("1\n2\n")):
                with redirect_stdout(io.StringIO()):
                    result = run(
                        RunConfig(num_bins=2, log_level="error", log_file=str(log_path))
                    )
            logging.getLogger("rhisto").handlers[-1].close()
            text = log_path.read_text(encoding="utf-8")

        self.assertEqual(result.log_path, log_path)
        self.assertIn("[HISTOGRAM] bins=2", text)

    def test_build_histogram_is_exported(self):
        self.assertEqual(build_histogram([1.0, 2.0], 2).counts, [1, 1])


if __name__ == "__main__":
    unittest.main()
