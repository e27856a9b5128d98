"""Configuration models for plotseries."""

from .config import (
    CsvSeriesConfig,
    MonitoringConfig,
    PropertiesSeriesConfig,
    SeriesConfig,
    Settings,
    XmlSeriesConfig,
    series_from_form,
    series_list_from_form,
)

__all__ = [
    "CsvSeriesConfig",
    "MonitoringConfig",
    "PropertiesSeriesConfig",
    "SeriesConfig",
    "Settings",
    "XmlSeriesConfig",
    "series_from_form",
    "series_list_from_form",
]
