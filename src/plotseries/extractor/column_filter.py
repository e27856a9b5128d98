"""
Column inclusion/exclusion rules for CSV series.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet

import structlog

from ..exceptions import ConfigurationError
from ..protocols import ExclusionMode

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ExclusionRule:
    """A mode plus the labels or zero-based column indices it applies to."""

    mode: ExclusionMode = ExclusionMode.OFF
    labels: FrozenSet[str] = field(default_factory=frozenset)
    columns: FrozenSet[int] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.mode.by_label and self.columns:
            raise ConfigurationError(f"{self.mode.value} rule cannot hold column indices")
        if self.mode.by_column and self.labels:
            raise ConfigurationError(f"{self.mode.value} rule cannot hold labels")

    @classmethod
    def off(cls) -> ExclusionRule:
        return cls()

    @classmethod
    def parse(cls, mode: str | ExclusionMode | None, values: str | None) -> ExclusionRule:
        """Build a rule from a mode string and a comma-separated value list.

        Never raises: an unknown mode or a missing value list disables
        filtering, and tokens that are not integers are dropped from column
        rules. Each case is logged as a configuration error.
        """
        try:
            parsed_mode = ExclusionMode.parse(mode)
        except ConfigurationError as e:
            logger.warning(
                "Disabling column filter",
                event_type=ConfigurationError.event_type,
                mode=mode,
                error=str(e),
            )
            return cls.off()

        if parsed_mode is ExclusionMode.OFF:
            return cls.off()
        if values is None:
            logger.warning(
                "No exclusion values configured, disabling column filter",
                event_type=ConfigurationError.event_type,
                mode=parsed_mode.value,
            )
            return cls.off()

        tokens = [token for token in values.split(",") if token]

        if parsed_mode.by_label:
            for token in tokens:
                logger.debug("Configured CSV column", mode=parsed_mode.value, column=token)
            return cls(mode=parsed_mode, labels=frozenset(tokens))

        columns = set()
        for token in tokens:
            try:
                columns.add(int(token.strip()))
            except ValueError:
                logger.warning(
                    "Dropping non-integer column index",
                    event_type=ConfigurationError.event_type,
                    mode=parsed_mode.value,
                    token=token,
                )
                continue
            logger.debug("Configured CSV column", mode=parsed_mode.value, column=token)
        return cls(mode=parsed_mode, columns=frozenset(columns))


def should_exclude(label: str, index: int, rule: ExclusionRule | None) -> bool:
    """Return True if the column at *index* labelled *label* is filtered out."""
    if rule is None:
        return False

    match rule.mode:
        case ExclusionMode.OFF:
            excluded = False
        case ExclusionMode.INCLUDE_BY_LABEL:
            excluded = label not in rule.labels
        case ExclusionMode.EXCLUDE_BY_LABEL:
            excluded = label in rule.labels
        case ExclusionMode.INCLUDE_BY_COLUMN:
            excluded = index not in rule.columns
        case ExclusionMode.EXCLUDE_BY_COLUMN:
            excluded = index in rule.columns

    if rule.mode is not ExclusionMode.OFF:
        logger.debug(
            "Filtered CSV column",
            column=index,
            label=label,
            excluded=excluded,
        )
    return excluded
