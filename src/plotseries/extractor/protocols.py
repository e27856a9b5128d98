"""
Protocols for pluggable series extraction strategies.
"""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from .models import PlotPoint
from .streams import SeriesContent


@runtime_checkable
class SeriesExtractor(Protocol):
    """Data-file-to-points strategy for one series file format."""

    name: str

    def extract(self, content: SeriesContent, build_number: int) -> List[PlotPoint]:
        """Extract plot points from a series data file.

        Args:
            content: Raw bytes, an open binary stream or a file path
            build_number: Number of the build the file was produced by

        Returns:
            Freshly allocated list of points, empty when nothing usable was found
        """
        ...
