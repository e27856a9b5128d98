"""
Shared enums for plot series configuration.

Both enums are parsed from free-form configuration strings. Parsing is
total: every input either maps to a member or raises ConfigurationError.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict

from .exceptions import ConfigurationError


class FileType(Enum):
    """Data file formats a series can be read from."""

    CSV = "csv"
    PROPERTIES = "properties"
    XML = "xml"


class ExclusionMode(Enum):
    """How a CSV series selects the columns it plots."""

    OFF = "off"
    INCLUDE_BY_LABEL = "include-by-label"
    EXCLUDE_BY_LABEL = "exclude-by-label"
    INCLUDE_BY_COLUMN = "include-by-column"
    EXCLUDE_BY_COLUMN = "exclude-by-column"

    @property
    def by_label(self) -> bool:
        return self in (ExclusionMode.INCLUDE_BY_LABEL, ExclusionMode.EXCLUDE_BY_LABEL)

    @property
    def by_column(self) -> bool:
        return self in (ExclusionMode.INCLUDE_BY_COLUMN, ExclusionMode.EXCLUDE_BY_COLUMN)

    @classmethod
    def parse(cls, text: str | ExclusionMode | None) -> ExclusionMode:
        """Parse a mode string.

        Accepts the canonical values (``include-by-label``), their
        underscore/upper-case spellings, and the legacy ``*_BY_STRING``
        names used by older job configurations. ``None`` and the empty
        string mean OFF.
        """
        if isinstance(text, ExclusionMode):
            return text
        if text is None or not text.strip():
            return cls.OFF
        key = text.strip().lower().replace("_", "-")
        key = _LEGACY_MODE_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ConfigurationError(f"Unknown exclusion mode: {text!r}") from None


_LEGACY_MODE_ALIASES: Dict[str, str] = {
    "include-by-string": "include-by-label",
    "exclude-by-string": "exclude-by-label",
}


class XPathResultKind(Enum):
    """Shape an XPath expression result is coerced to."""

    BOOLEAN = "boolean"
    NUMBER = "number"
    NODE = "node"
    NODESET = "nodeset"
    STRING = "string"

    @classmethod
    def parse(cls, text: str | XPathResultKind) -> XPathResultKind:
        """Parse a result kind name such as ``NODESET`` or ``node-set``."""
        if isinstance(text, XPathResultKind):
            return text
        if not isinstance(text, str):
            raise ConfigurationError(f"XPath result kind must be a string, got {type(text).__name__}")
        key = text.strip().lower().replace("-", "").replace("_", "")
        try:
            return cls(key)
        except ValueError:
            raise ConfigurationError(f"Unknown XPath result kind: {text!r}") from None
