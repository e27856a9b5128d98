"""
Data models for extracted plot points.
"""

from __future__ import annotations

from dataclasses import dataclass

from .numeric import is_number

MISSING_LABEL = "Missing label"


@dataclass(slots=True, frozen=True)
class PlotPoint:
    """One (label, value, url) sample taken from a single build's data file."""

    value: str
    url: str | None = ""
    label: str = ""

    def __post_init__(self) -> None:
        """Normalize the url and validate the value."""
        if self.url is None or not self.url.strip():
            object.__setattr__(self, "url", "")
        if self.label is None:
            object.__setattr__(self, "label", "")
        if not is_number(self.value):
            raise ValueError(f"Point value must be a finite number, got {self.value!r}")

    @property
    def numeric_value(self) -> float:
        return float(self.value)

    def __str__(self) -> str:
        return f"{self.label} {self.url} {self.value}"
