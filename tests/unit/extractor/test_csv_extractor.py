"""
Unit tests for CsvExtractor.
"""

import csv
import io

import pytest
from plotseries.extractor.column_filter import ExclusionRule
from plotseries.extractor.csv_extractor import CsvExtractor
from plotseries.extractor.models import PlotPoint
from structlog.testing import capture_logs


class TestCsvExtractor:
    """Test cases for CsvExtractor."""

    def test_init(self):
        """Test extractor initialization."""
        extractor = CsvExtractor()
        assert extractor.name == "csv"
        assert extractor.url is None
        assert extractor.rule == ExclusionRule.off()

    def test_header_labels_columns_in_order(self):
        """Test that each cell becomes a point labelled by its header."""
        points = CsvExtractor().extract(b"a,b,c\n1,2,3\n", 1)

        assert points == [
            PlotPoint("1", "", "a"),
            PlotPoint("2", "", "b"),
            PlotPoint("3", "", "c"),
        ]

    def test_trailing_delimiter_creates_no_point(self):
        """Test that an empty trailing cell is skipped."""
        points = CsvExtractor().extract(b"a,b,c,d\n1,2,3,\n", 1)

        assert len(points) == 3
        assert [p.label for p in points] == ["a", "b", "c"]

    def test_whitespace_cells_are_skipped(self):
        """Test that whitespace-only cells are treated as empty."""
        points = CsvExtractor().extract(b"a,b,c\n1,  ,3\n", 1)

        assert [p.label for p in points] == ["a", "c"]

    def test_multiple_rows(self, timings_csv):
        """Test that every data row contributes points."""
        data = timings_csv + b"13,351,8,60\n"
        points = CsvExtractor().extract(data, 1)

        assert len(points) == 8
        assert [p.value for p in points[4:]] == ["13", "351", "8", "60"]

    def test_blank_lines_are_skipped(self):
        """Test that blank lines do not stop parsing."""
        points = CsvExtractor().extract(b"a,b\n1,2\n\n3,4\n", 1)

        assert [p.value for p in points] == ["1", "2", "3", "4"]

    def test_index_label_beyond_header(self):
        """Test that columns past the header are labelled by index."""
        points = CsvExtractor().extract(b"a\n1,2,3\n", 1)

        assert [p.label for p in points] == ["a", "1", "2"]

    def test_index_label_for_empty_header(self):
        """Test that an empty header cell falls back to the column index."""
        points = CsvExtractor().extract(b"a,,c\n1,2,3\n", 1)

        assert [p.label for p in points] == ["a", "1", "c"]

    def test_url_template(self):
        """Test that point urls are built from label, index and build number."""
        extractor = CsvExtractor(url="http://localhost:8080/%name%/%index%/%build%")
        points = extractor.extract(b"a,b\n1,2\n", 17)

        assert points[0].url == "http://localhost:8080/a/0/17"
        assert points[1].url == "http://localhost:8080/b/1/17"

    def test_quoted_cells(self):
        """Test that quoted headers and values are unquoted."""
        points = CsvExtractor().extract(b'"heap, max","gc"\n"512","3"\n', 1)

        assert points == [PlotPoint("512", "", "heap, max"), PlotPoint("3", "", "gc")]

    def test_non_numeric_cell_is_skipped(self):
        """Test that a cell that is not a number produces no point."""
        with capture_logs() as logs:
            points = CsvExtractor().extract(b"a,b,c\n1,n/a,3\n", 1)

        assert [p.label for p in points] == ["a", "c"]
        assert any(log.get("event_type") == "parse_failure" for log in logs)

    def test_header_only(self):
        """Test that a file with only a header yields no points."""
        assert CsvExtractor().extract(b"a,b,c\n", 1) == []

    def test_empty_file(self):
        """Test that an empty file yields no points."""
        assert CsvExtractor().extract(b"", 1) == []

    def test_missing_file(self, tmp_path):
        """Test that a missing file is logged and yields no points."""
        with capture_logs() as logs:
            points = CsvExtractor().extract(tmp_path / "missing.csv", 1)

        assert points == []
        assert any(log.get("event_type") == "data_unavailable" for log in logs)

    def test_reads_from_path(self, tmp_path, timings_csv):
        """Test extraction from a file path."""
        path = tmp_path / "timings.csv"
        path.write_bytes(timings_csv)

        points = CsvExtractor().extract(path, 1)

        assert [p.label for p in points] == ["compile", "test", "package", "deploy"]

    def test_stream_is_closed(self, timings_csv):
        """Test that the caller's stream is closed after extraction."""
        stream = io.BytesIO(timings_csv)
        CsvExtractor().extract(stream, 1)

        assert stream.closed

    def test_undecodable_input_does_not_raise(self):
        """Test that undecodable bytes degrade to an empty result."""
        with capture_logs() as logs:
            extractor = CsvExtractor(encoding="utf-8")
            points = extractor.extract(b"a,b\n\xff\xfe\xfa,1\n", 1)

        assert points == []
        assert any(log.get("event_type") == "parse_failure" for log in logs)

    def test_malformed_row_keeps_earlier_points(self):
        """Test that a csv error mid-stream returns the points read before it."""
        oversized = "9" * (csv.field_size_limit() + 10)
        data = f"a,b\n1,2\n3,{oversized}\n5,6\n".encode()

        with capture_logs() as logs:
            points = CsvExtractor().extract(data, 1)

        assert [p.value for p in points] == ["1", "2"]
        assert any(log.get("event_type") == "parse_failure" and log.get("points") == 2 for log in logs)

    def test_explicit_encoding(self):
        """Test that the configured encoding is used for headers."""
        data = "température,pression\n21,1013\n".encode("latin-1")
        points = CsvExtractor(encoding="latin-1").extract(data, 1)

        assert points[0].label == "température"


class TestCsvExtractorFiltering:
    """Test cases for CSV column inclusion and exclusion."""

    HEADER_AND_ROW = b"a,b,c,d\n1,2,3,4\n"

    @pytest.mark.parametrize(
        "mode,values,expected",
        [
            ("OFF", "b", ["a", "b", "c", "d"]),
            ("INCLUDE_BY_STRING", "b,d", ["b", "d"]),
            ("EXCLUDE_BY_STRING", "b,d", ["a", "c"]),
            ("INCLUDE_BY_COLUMN", "0,2", ["a", "c"]),
            ("EXCLUDE_BY_COLUMN", "1", ["a", "c", "d"]),
        ],
    )
    def test_modes(self, mode, values, expected):
        """Test each exclusion mode against a four column file."""
        extractor = CsvExtractor(rule=ExclusionRule.parse(mode, values))
        points = extractor.extract(self.HEADER_AND_ROW, 1)

        assert [p.label for p in points] == expected

    @pytest.mark.parametrize("row_length", [2, 3, 5, 9])
    def test_exclude_column_one_for_any_row_length(self, row_length):
        """Test that column 1 is always omitted and others retained."""
        header = ",".join(f"c{i}" for i in range(row_length))
        row = ",".join(str(i) for i in range(row_length))
        data = f"{header}\n{row}\n".encode()

        extractor = CsvExtractor(rule=ExclusionRule.parse("exclude-by-column", "1"))
        points = extractor.extract(data, 1)

        assert [p.label for p in points] == [f"c{i}" for i in range(row_length) if i != 1]

    def test_label_filter_matches_index_labels(self):
        """Test that label rules see index labels for unlabelled columns."""
        extractor = CsvExtractor(rule=ExclusionRule.parse("include-by-label", "2"))
        points = extractor.extract(b"a\n1,2,3\n", 1)

        assert points == [PlotPoint("3", "", "2")]
