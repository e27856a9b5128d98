"""
Error taxonomy for plot series extraction.

Extraction never fails a build: extractors raise these internally, log them
and degrade to "no new point for this build". Configuration-time helpers
(result kind parsing, config validation) let them propagate.
"""

from __future__ import annotations


class PlotSeriesError(Exception):
    """Base class for all plotseries errors."""

    event_type = "plot_series_error"


class DataUnavailable(PlotSeriesError):
    """Raised when a series data file is missing or cannot be opened."""

    event_type = "data_unavailable"


class ParseFailure(PlotSeriesError, ValueError):
    """Raised when a row, record or document is malformed."""

    event_type = "parse_failure"


class ConfigurationError(PlotSeriesError, ValueError):
    """Raised for unknown modes, result kinds or malformed exclusion tokens."""

    event_type = "configuration_error"


class QueryEvaluationError(PlotSeriesError):
    """Raised when an XPath expression is invalid or cannot be evaluated."""

    event_type = "query_evaluation_error"
