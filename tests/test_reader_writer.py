import io
import logging
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import patch

from rhisto.core.errors import (
    ColumnOutOfRangeError,
    ConfigError,
    ExpressionError,
    InputError,
    ParseError,
)
from rhisto.core.histogram import build_histogram
from rhisto.io.reader import build_row_reader, open_input, read_samples
from rhisto.io.writer import format_rows, open_output, write_histogram


class ReadSamplesTests(unittest.TestCase):
    def test_reads_selected_column(self):
        lines = io.StringIO("a,1.5\nb,2.5\nc,-3\n")
        samples, stats = read_samples(lines, build_row_reader(column=2))

        self.assertEqual(samples.tolist(), [1.5, 2.5, -3.0])
        self.assertEqual(stats.rows_read, 3)
        self.assertEqual(stats.rows_skipped, 0)
        self.assertEqual(stats.samples, 3)

    def test_default_column_is_first(self):
        samples, _stats = read_samples(["4\n", "5\n"], build_row_reader())
        self.assertEqual(samples.tolist(), [4.0, 5.0])

    def test_skip_header_and_blank_lines(self):
        lines = ["name,value\n", "x,1\n", "\n", "   \n", "y,2\n"]
        samples, stats = read_samples(
            lines, build_row_reader(column=2), skip_header=True
        )

        self.assertEqual(samples.tolist(), [1.0, 2.0])
        self.assertEqual(stats.rows_read, 5)
        self.assertEqual(stats.rows_skipped, 3)

    def test_header_is_not_skipped_by_default(self):
        with self.assertRaises(ParseError) as ctx:
            read_samples(["value\n", "1\n"], build_row_reader(column=1))
        self.assertIn("line 1", str(ctx.exception))

    def test_errors_report_line_number(self):
        lines = ["1,2\n", "3,4\n", "5\n"]
        with self.assertRaises(ColumnOutOfRangeError) as ctx:
            read_samples(lines, build_row_reader(column=2))
        self.assertIn("line 3", str(ctx.exception))
        self.assertIn("column 2 out of bounds", str(ctx.exception))

    def test_expression_reader(self):
        lines = ["1,2,3\n", "4,5,6\n"]
        samples, _stats = read_samples(lines, build_row_reader(expr="?1 + ?3 * 10"))
        self.assertEqual(samples.tolist(), [31.0, 64.0])

    def test_expression_failure_reports_line(self):
        with self.assertRaises(ExpressionError) as ctx:
            read_samples(["1,1\n", "1,0\n"], build_row_reader(expr="?1 / ?2"))
        self.assertIn("line 2", str(ctx.exception))

    def test_column_and_expression_are_exclusive(self):
        with self.assertRaises(ConfigError):
            build_row_reader(column=1, expr="?1")

    def test_empty_input_gives_empty_array(self):
        samples, stats = read_samples([], build_row_reader())
        self.assertEqual(samples.size, 0)
        self.assertEqual(stats.rows_read, 0)

    def test_undecodable_stream_raises_input_error(self):
        stream = io.TextIOWrapper(io.BytesIO(b"1\n\xff\xfe\n3\n"), encoding="utf-8")
        with self.assertRaises(InputError) as ctx:
            read_samples(stream, build_row_reader())
        self.assertIn("not valid utf-8 text", str(ctx.exception))
        self.assertIsInstance(ctx.exception.__cause__, UnicodeDecodeError)

    def test_logs_summary_when_logger_given(self):
        with patch("logging.Logger.info") as info:
            read_samples(["1\n"], build_row_reader(), logger=logging.getLogger("t"))
        self.assertTrue(info.called)
        self.assertIn("samples=1", info.call_args.args[0])


class OpenInputTests(unittest.TestCase):
    def test_reads_file(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "data.csv"
            path.write_text("1\n2\n", encoding="utf-8")
            with open_input(str(path)) as stream:
                self.assertEqual(stream.read(), "1\n2\n")

    def test_none_and_dash_mean_stdin(self):
        fake_stdin = io.StringIO("7\n")
        with patch("sys.stdin", fake_stdin):
            with open_input(None) as stream:
                self.assertIs(stream, fake_stdin)
            with open_input("-") as stream:
                self.assertIs(stream, fake_stdin)

    def test_missing_file(self):
        with self.assertRaises(InputError):
            with open_input("/definitely/not/here.csv"):
                pass


class WriterTests(unittest.TestCase):
    def setUp(self):
        self.hist = build_histogram([1, 2, 3, 4, 5, 6, 7, 8, 9, 10], 5)

    def test_edges_format(self):
        rows = format_rows(self.hist, ",", "edges", 2)
        self.assertEqual(
            rows,
            [
                "1.00,2.80,2",
                "2.80,4.60,2",
                "4.60,6.40,2",
                "6.40,8.20,2",
                "8.20,10.00,2",
            ],
        )

    def test_labels_format_uses_bin_midpoints(self):
        rows = format_rows(self.hist, "\t", "labels", 1)
        self.assertEqual(rows, ["1.9\t2", "3.7\t2", "5.5\t2", "7.3\t2", "9.1\t2"])

    def test_precision_zero(self):
        rows = format_rows(build_histogram([0, 10], 2), ";", "edges", 0)
        self.assertEqual(rows, ["0;5;1", "5;10;1"])

    def test_rejects_unknown_format_and_negative_precision(self):
        with self.assertRaises(ConfigError):
            format_rows(self.hist, ",", "json", 2)
        with self.assertRaises(ConfigError):
            format_rows(self.hist, ",", "edges", -1)

    def test_write_histogram_returns_line_count(self):
        buffer = io.StringIO()
        lines = write_histogram(self.hist, buffer, delim=",")
        self.assertEqual(lines, 5)
        self.assertEqual(buffer.getvalue().count("\n"), 5)

    def test_open_output_file_creates_parent_directory(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "nested" / "hist.csv"
            with open_output(str(path)) as stream:
                write_histogram(self.hist, stream)
            self.assertEqual(len(path.read_text(encoding="utf-8").splitlines()), 5)

    def test_open_output_defaults_to_stdout(self):
        out = io.StringIO()
        with redirect_stdout(out):
            with open_output(None) as stream:
                write_histogram(self.hist, stream)
        self.assertTrue(out.getvalue().startswith("1.00,2.80,2\n"))


if __name__ == "__main__":
    unittest.main()
