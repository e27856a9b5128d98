"""
plotseries extraction module.

One extractor per series file format, all returning lists of PlotPoint:

- CsvExtractor: header-labelled columns with include/exclude filtering
- PropertiesExtractor: a single ``YVALUE``/``URL`` point
- XmlExtractor: XPath queries with node-set label/value coalescing
"""

from .column_filter import ExclusionRule, should_exclude
from .csv_extractor import CsvExtractor
from .models import MISSING_LABEL, PlotPoint
from .properties_extractor import PropertiesExtractor, parse_properties
from .protocols import SeriesExtractor
from .url_template import apply_url_template
from .xml_extractor import XmlExtractor

__all__ = [
    "CsvExtractor",
    "ExclusionRule",
    "MISSING_LABEL",
    "PlotPoint",
    "PropertiesExtractor",
    "SeriesExtractor",
    "XmlExtractor",
    "apply_url_template",
    "parse_properties",
    "should_exclude",
]
