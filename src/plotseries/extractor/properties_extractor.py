"""
Java properties series extractor.

A properties series file holds a single point::

    YVALUE=42.5
    URL=http://ci.example.com/report.html

``YVALUE`` is required; ``URL`` is optional.
"""

from __future__ import annotations

import re
from typing import Dict, Iterator, List

import structlog

from ..exceptions import DataUnavailable, ParseFailure
from .models import MISSING_LABEL, PlotPoint
from .numeric import is_number
from .streams import SeriesContent, describe, open_text

logger = structlog.get_logger(__name__)

VALUE_KEY = "YVALUE"
URL_KEY = "URL"

# java.util.Properties reads byte streams as ISO 8859-1
PROPERTIES_ENCODING = "latin-1"

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_ESCAPE = re.compile(r"\\(u[0-9a-fA-F]{4}|u|.)", re.DOTALL)
_ESCAPED_CHARS = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def parse_properties(text: str) -> Dict[str, str]:
    """Parse Java ``.properties`` text into a dict.

    Supports ``#``/``!`` comments, ``=``, ``:`` or whitespace separators,
    backslash line continuations and the ``\\t \\n \\r \\f \\uXXXX`` escapes.
    Later keys override earlier ones.

    Raises:
        ParseFailure: on a malformed ``\\uXXXX`` escape.
    """
    properties: Dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_entry(line)
        properties[key] = value
    return properties


def _logical_lines(text: str) -> Iterator[str]:
    pending: str | None = None
    for raw_line in _LINE_BREAK.split(text):
        line = raw_line.lstrip(_WHITESPACE)
        if pending is None and (not line or line[0] in "#!"):
            continue

        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending = (pending or "") + line[:-1]
            continue

        yield (pending or "") + line
        pending = None

    if pending:
        yield pending


def _split_entry(line: str) -> tuple[str, str]:
    end = 0
    while end < len(line):
        char = line[end]
        if char == "\\":
            end += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        end += 1

    start = end
    while start < len(line) and line[start] in _WHITESPACE:
        start += 1
    if start < len(line) and line[start] in _SEPARATORS:
        start += 1
    while start < len(line) and line[start] in _WHITESPACE:
        start += 1

    return _unescape(line[:end]), _unescape(line[start:])


def _unescape(text: str) -> str:
    def replace(match: re.Match[str]) -> str:
        escaped = match.group(1)
        if escaped == "u":
            raise ParseFailure(f"Malformed \\uxxxx encoding in {text!r}")
        if len(escaped) == 5:
            return chr(int(escaped[1:], 16))
        return _ESCAPED_CHARS.get(escaped, escaped)

    return _ESCAPE.sub(replace, text)


class PropertiesExtractor:
    """Extract a single point from a ``YVALUE``/``URL`` properties file."""

    name = "properties"

    def __init__(self, label: str | None = None, encoding: str = PROPERTIES_ENCODING) -> None:
        self.label = label or MISSING_LABEL
        self.encoding = encoding
        self.logger = logger.bind(component="PropertiesExtractor")

    def extract(self, content: SeriesContent, build_number: int) -> List[PlotPoint]:
        """Return a one-point list, or an empty list if no valid value is found."""
        source = describe(content)
        try:
            with open_text(content, self.encoding) as stream:
                properties = parse_properties(stream.read())
        except DataUnavailable as e:
            self.logger.warning(
                "Properties series data unavailable",
                event_type=DataUnavailable.event_type,
                source=source,
                error=str(e),
            )
            return []
        except (ParseFailure, UnicodeDecodeError) as e:
            self.logger.warning(
                "Malformed properties series data",
                event_type=ParseFailure.event_type,
                source=source,
                error=str(e),
            )
            return []
        except OSError as e:
            self.logger.error(
                "Failed reading properties series data",
                event_type=DataUnavailable.event_type,
                source=source,
                error=str(e),
            )
            return []

        value = properties.get(VALUE_KEY)
        url = properties.get(URL_KEY, "")
        if value is None or not is_number(value):
            self.logger.info(
                "Not creating point without a numeric value",
                event_type=ParseFailure.event_type,
                source=source,
                value=value,
                label=self.label,
                url=url,
            )
            return []

        self.logger.debug("Loaded properties series", source=source, build_number=build_number)
        return [PlotPoint(value.strip(), url, self.label)]
