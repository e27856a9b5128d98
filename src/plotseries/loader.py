"""
Series loading for a finished build.

The SeriesLoader is what a build host calls once per build: it finds each
configured series file in the build workspace, hands it to the extractor
for its format and collects the points. Missing or broken files never fail
the build; they simply contribute no points.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import structlog

from .config.config import CsvSeriesConfig, PropertiesSeriesConfig, SeriesConfig, Settings, XmlSeriesConfig
from .exceptions import DataUnavailable
from .extractor.csv_extractor import CsvExtractor
from .extractor.models import PlotPoint
from .extractor.properties_extractor import PropertiesExtractor
from .extractor.protocols import SeriesExtractor
from .extractor.xml_extractor import XmlExtractor
from .protocols import FileType

logger = structlog.get_logger(__name__)


class SeriesLoader:
    """
    Loads plot points for configured series from a build workspace.

    Features:
    - Glob-based lookup of series files relative to the workspace
    - Dispatch on the series variant to the matching extractor
    - Best-effort error handling: data problems are logged, never raised
    - Per-format load metrics
    """

    def __init__(self, workspace: Path | str, settings: Optional[Settings] = None) -> None:
        """
        Initialize the SeriesLoader.

        Args:
            workspace: Root directory of the build workspace
            settings: Loader settings; defaults are used when omitted
        """
        self.workspace = Path(workspace)
        self.settings = settings or Settings()
        self.logger = logger.bind(component="SeriesLoader", workspace=str(self.workspace))

        self._metrics: Dict[str, Dict[str, int]] = {
            file_type.value: {"attempts": 0, "points": 0, "unavailable": 0} for file_type in FileType
        }

    def locate(self, pattern: str) -> Path:
        """
        Find the data file for a series.

        Args:
            pattern: Workspace-relative glob, ``**`` allowed

        Returns:
            The first matching file in sorted order

        Raises:
            DataUnavailable: if the workspace cannot be listed or nothing matches
        """
        if os.path.isabs(pattern):
            raise DataUnavailable(f"Series file pattern must be relative to the workspace: {pattern}")
        try:
            matches = sorted(path for path in self.workspace.glob(pattern) if path.is_file())
        except (OSError, ValueError) as e:
            raise DataUnavailable(f"Cannot list series files {pattern!r} in {self.workspace}: {e}") from e

        if not matches:
            raise DataUnavailable(f"No plot data file found: {self.workspace} {pattern}")
        return matches[0]

    def build_extractor(self, config: SeriesConfig) -> SeriesExtractor:
        """Create the extractor for a series configuration."""
        match config:
            case CsvSeriesConfig():
                return CsvExtractor(rule=config.rule, url=config.url, encoding=self.settings.encoding)
            case PropertiesSeriesConfig():
                return PropertiesExtractor(label=config.label)
            case XmlSeriesConfig():
                return XmlExtractor(config.xpath, config.node_type, url=config.url, label=config.label)
        raise TypeError(f"Unsupported series configuration: {type(config).__name__}")

    def load(self, config: SeriesConfig, build_number: int) -> List[PlotPoint]:
        """
        Load the points of one series for a build.

        Args:
            config: Series configuration
            build_number: Number of the build being recorded

        Returns:
            The extracted points, empty if the data file is missing or unusable
        """
        metrics = self._metrics[config.file_type]
        metrics["attempts"] += 1

        with structlog.contextvars.bound_contextvars(build_number=build_number):
            try:
                path = self.locate(config.file)
            except DataUnavailable as e:
                metrics["unavailable"] += 1
                self.logger.info(
                    "Series data unavailable",
                    event_type=DataUnavailable.event_type,
                    file=config.file,
                    error=str(e),
                )
                return []

            self.logger.debug("Loading plot series data", file=str(path), file_type=config.file_type)
            extractor = self.build_extractor(config)
            points = extractor.extract(path, build_number)

        metrics["points"] += len(points)
        self.logger.info(
            "Loaded plot series",
            file=str(path),
            file_type=config.file_type,
            points=len(points),
        )
        return points

    def load_all(self, configs: Iterable[SeriesConfig] | None, build_number: int) -> Dict[str, List[PlotPoint]]:
        """
        Load every series for a build.

        Args:
            configs: Series to load; the configured ``settings.series`` when None
            build_number: Number of the build being recorded

        Returns:
            Points keyed by series file pattern; patterns configured twice
            have their points concatenated in configuration order
        """
        results: Dict[str, List[PlotPoint]] = {}
        for config in self.settings.series if configs is None else configs:
            results.setdefault(config.file, []).extend(self.load(config, build_number))
        return results

    def get_metrics(self) -> Dict[str, Dict[str, int]]:
        """
        Get load metrics.

        Returns:
            Copy of the per-format attempt, point and unavailable counters
        """
        return {file_type: dict(counters) for file_type, counters in self._metrics.items()}
