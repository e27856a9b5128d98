"""
CSV series extractor.

The first row of the file is the header and supplies the point labels;
every non-empty cell of every following row becomes one point.
"""

from __future__ import annotations

import csv
from typing import List, Sequence

import structlog

from ..exceptions import DataUnavailable, ParseFailure
from .column_filter import ExclusionRule, should_exclude
from .models import PlotPoint
from .numeric import is_number
from .streams import SeriesContent, describe, open_text
from .url_template import apply_url_template

logger = structlog.get_logger(__name__)


class CsvExtractor:
    """Extract one point per CSV cell, labelled by the header row."""

    name = "csv"

    def __init__(
        self,
        rule: ExclusionRule | None = None,
        url: str | None = None,
        encoding: str | None = None,
    ) -> None:
        self.rule = rule or ExclusionRule.off()
        self.url = url
        self.encoding = encoding
        self.logger = logger.bind(component="CsvExtractor")

    def extract(self, content: SeriesContent, build_number: int) -> List[PlotPoint]:
        """Read CSV *content* and return its points in row/column order.

        Missing files and malformed input are logged and yield whatever
        points were read before the problem, possibly none.
        """
        source = describe(content)
        points: List[PlotPoint] = []

        try:
            with open_text(content, self.encoding) as stream:
                reader = csv.reader(stream)
                header = next(reader, None)
                if header is None:
                    self.logger.info("CSV series file is empty", source=source)
                    return points

                self.logger.debug("Loaded CSV header", source=source, columns=len(header))
                for row in reader:
                    if _is_blank(row):
                        continue
                    self._add_row(points, header, row, build_number, reader.line_num, source)

        except DataUnavailable as e:
            self.logger.warning(
                "CSV series data unavailable",
                event_type=DataUnavailable.event_type,
                source=source,
                error=str(e),
            )
        except (csv.Error, UnicodeDecodeError) as e:
            self.logger.warning(
                "Malformed CSV series data, keeping points read so far",
                event_type=ParseFailure.event_type,
                source=source,
                points=len(points),
                error=str(e),
            )
        except OSError as e:
            self.logger.error(
                "Failed reading CSV series data",
                event_type=DataUnavailable.event_type,
                source=source,
                error=str(e),
            )

        return points

    def _add_row(
        self,
        points: List[PlotPoint],
        header: Sequence[str],
        row: Sequence[str],
        build_number: int,
        line_num: int,
        source: str,
    ) -> None:
        for index, cell in enumerate(row):
            # empty cells come from trailing commas
            if not cell.strip():
                continue

            label = header[index] if index < len(header) else ""
            if not label:
                label = str(index)

            if should_exclude(label, index, self.rule):
                self.logger.debug("Excluded CSV column", column=index, label=label)
                continue

            value = cell.strip()
            if not is_number(value):
                self.logger.warning(
                    "Skipping non-numeric CSV value",
                    event_type=ParseFailure.event_type,
                    source=source,
                    line=line_num,
                    column=index,
                    label=label,
                    value=value,
                )
                continue

            point = PlotPoint(value, apply_url_template(self.url, label, index, build_number), label)
            self.logger.debug("CSV point", line=line_num, column=index, point=str(point))
            points.append(point)


def _is_blank(row: Sequence[str]) -> bool:
    return not row or (len(row) == 1 and not row[0].strip())
