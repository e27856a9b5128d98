"""
plotseries - Build-artifact plot point extraction.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Settings
from .extractor import CsvExtractor, PlotPoint, PropertiesExtractor, XmlExtractor
from .loader import SeriesLoader

__all__ = [
    "__version__",
    "CsvExtractor",
    "PlotPoint",
    "PropertiesExtractor",
    "SeriesLoader",
    "Settings",
    "XmlExtractor",
]
