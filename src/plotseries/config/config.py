"""
Configuration management for plotseries using Pydantic.

A series is configured as one of three variants, discriminated by
``file_type``. Field names follow Python conventions; the camelCase names
used by job configuration forms (``inclusionFlag``, ``nodeType``...) are
accepted as aliases.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any, List, Literal, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from plotseries.extractor.column_filter import ExclusionRule
from plotseries.protocols import FileType, XPathResultKind

# --- Setup Logging ---
log = logging.getLogger(__name__)

# --- Series Configuration Models ---


class _SeriesBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    file: str = Field(description="Workspace-relative glob of the series data file.")

    @field_validator("file")
    @classmethod
    def validate_file(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("file pattern must not be empty")
        return v


class CsvSeriesConfig(_SeriesBase):
    """A series read from a CSV file with a header row."""

    file_type: Literal["csv"] = "csv"
    url: Optional[str] = Field(default=None, description="Point url template.")
    inclusion_flag: str = Field(default="OFF", alias="inclusionFlag", description="Column exclusion mode.")
    exclusion_values: Optional[str] = Field(
        default=None, alias="exclusionValues", description="Comma-separated labels or column indices."
    )
    display_table: bool = Field(default=False, alias="displayTableFlag")

    @field_validator("inclusion_flag", mode="before")
    @classmethod
    def default_inclusion_flag(cls, v: Any) -> Any:
        return "OFF" if v is None else v

    @property
    def rule(self) -> ExclusionRule:
        return ExclusionRule.parse(self.inclusion_flag, self.exclusion_values)


class PropertiesSeriesConfig(_SeriesBase):
    """A series read from a ``YVALUE``/``URL`` properties file."""

    file_type: Literal["properties"] = "properties"
    label: Optional[str] = Field(default=None, description="Legend label of the series.")


class XmlSeriesConfig(_SeriesBase):
    """A series read from an XML file through an XPath query."""

    file_type: Literal["xml"] = "xml"
    xpath: str
    node_type: XPathResultKind = Field(alias="nodeType")
    url: Optional[str] = Field(default=None, description="Point url template.")
    label: Optional[str] = Field(default=None, description="Label for scalar query results.")

    @field_validator("node_type", mode="before")
    @classmethod
    def parse_node_type(cls, v: Any) -> XPathResultKind:
        return XPathResultKind.parse(v)


SeriesConfig = Annotated[
    Union[CsvSeriesConfig, PropertiesSeriesConfig, XmlSeriesConfig],
    Field(discriminator="file_type"),
]

_SERIES_ADAPTER: TypeAdapter[SeriesConfig] = TypeAdapter(SeriesConfig)
SERIES_TYPES = frozenset(file_type.value for file_type in FileType)


def series_from_form(data: Mapping[str, Any]) -> SeriesConfig | None:
    """Create a series config from submitted form data.

    Accepts both the nested form shape::

        {"file": "out.csv", "fileType": {"value": "csv", "inclusionFlag": "OFF"}}

    and a flat mapping with a ``file_type`` key. Returns None for an
    unknown file type.

    Raises:
        ValidationError: if the fields do not fit the selected variant.
    """
    payload = dict(data)
    file_type = payload.pop("fileType", None)
    if isinstance(file_type, Mapping):
        nested = dict(file_type)
        nested["file"] = payload.get("file")
        nested["file_type"] = nested.pop("value", None)
        payload = nested
    elif file_type is not None:
        payload.setdefault("file_type", file_type)

    if payload.get("file_type") not in SERIES_TYPES:
        log.warning("Ignoring series with unknown file type: %r", payload.get("file_type"))
        return None
    return _SERIES_ADAPTER.validate_python(payload)


def series_list_from_form(data: Any) -> List[SeriesConfig]:
    """Create series configs from a single form mapping or a list of them."""
    if data is None:
        return []
    items = data if isinstance(data, list) else [data]
    series = []
    for item in items:
        config = series_from_form(item)
        if config is not None:
            series.append(config)
    return series


# --- Ambient Configuration ---


class MonitoringConfig(BaseModel):
    """Configuration for logging."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(
        default=None,
        description="Path to log file. If None, logs to console.",
    )

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Settings(BaseSettings):
    project_name: str = "plotseries"
    encoding: str | None = Field(
        default=None, description="Charset for CSV files. None uses the platform default."
    )
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)
    series: List[SeriesConfig] = Field(default_factory=list)

    model_config = SettingsConfigDict(env_prefix="PLOTSERIES_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Settings:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)


__all__ = [
    "CsvSeriesConfig",
    "MonitoringConfig",
    "PropertiesSeriesConfig",
    "SeriesConfig",
    "Settings",
    "ValidationError",
    "XmlSeriesConfig",
    "series_from_form",
    "series_list_from_form",
]
