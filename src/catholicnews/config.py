"""Configuration models and helpers for the Catholic News aggregator."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Iterable, List

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, ValidationError, field_validator

__all__ = [
    "AppConfig",
    "SourceConfig",
    "FeedServiceConfig",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_SOURCES",
    "ALL_SOURCES",
]

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "data" / "sources.json"

#: Filter value selecting every registered source.
ALL_SOURCES = "all"

DEFAULT_ENDPOINT = "https://api.rss2json.com/v1/api.json"
DEFAULT_API_KEY = "public"
DEFAULT_ITEM_COUNT = 20


class SourceConfig(BaseModel):
    """A single news feed the aggregator pulls from."""

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(..., min_length=1, description="Short stable key naming the feed")
    name: str = Field(..., description="Human friendly source name")
    url: HttpUrl = Field(..., description="RSS feed URL")

    @property
    def feed_url(self) -> str:
        return str(self.url)


class FeedServiceConfig(BaseModel):
    """Settings for the RSS-to-JSON conversion service."""

    endpoint: str = Field(
        default_factory=lambda: os.environ.get("RSS2JSON_ENDPOINT", DEFAULT_ENDPOINT),
        description="Conversion service endpoint",
    )
    api_key: str = Field(
        default_factory=lambda: os.environ.get("RSS2JSON_API_KEY", DEFAULT_API_KEY),
        description="Token passed as the ``api_key`` query parameter",
    )
    count: int = Field(default=DEFAULT_ITEM_COUNT, ge=1, description="Items requested per feed")
    timeout: float = Field(default=15.0, gt=0, description="Per-request timeout in seconds")


DEFAULT_SOURCES = (
    SourceConfig(identifier="vatican", name="Vatican News", url="https://www.vaticannews.va/en.rss.xml"),
    SourceConfig(identifier="cna", name="Catholic News Agency", url="https://www.catholicnewsagency.com/rss"),
    SourceConfig(
        identifier="ncr",
        name="National Catholic Register",
        url="https://www.ncregister.com/feeds/general-news.xml",
    ),
    SourceConfig(identifier="ewtn", name="EWTN News", url="https://www.ewtnnews.com/rss"),
)


class AppConfig(BaseModel):
    """Registry of :class:`SourceConfig` entries plus the conversion service settings."""

    sources: List[SourceConfig] = Field(default_factory=lambda: list(DEFAULT_SOURCES))
    service: FeedServiceConfig = Field(default_factory=FeedServiceConfig)

    @field_validator("sources")
    @classmethod
    def _unique_identifiers(cls, sources: List[SourceConfig]) -> List[SourceConfig]:
        seen: set[str] = set()
        for source in sources:
            if source.identifier in seen:
                raise ValueError(f"Duplicate source identifier: {source.identifier}")
            if source.identifier == ALL_SOURCES:
                raise ValueError(f"'{ALL_SOURCES}' is reserved and cannot name a source")
            seen.add(source.identifier)
        return sources

    @classmethod
    def from_file(cls, path: Path | str | None = None) -> "AppConfig":
        """Load configuration data from a JSON file."""

        config_path = Path(path) if path else DEFAULT_CONFIG_PATH
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise FileNotFoundError(f"Configuration file not found: {config_path}") from exc
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in configuration file: {config_path}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Configuration file is invalid: {config_path}\n{exc}") from exc

    @classmethod
    def load(cls, path: Path | str | None = None) -> "AppConfig":
        """Like :meth:`from_file` but fall back to the built-in sources when no file exists."""

        try:
            return cls.from_file(path)
        except FileNotFoundError:
            return cls()

    def dump(self, path: Path | str | None = None) -> None:
        """Persist the configuration back to disk as JSON."""

        config_path = Path(path) if path else DEFAULT_CONFIG_PATH
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(self.model_dump_json(indent=2), encoding="utf-8")

    def iter_sources(self) -> Iterable[SourceConfig]:
        """Iterate over registered sources in configuration order."""

        return iter(self.sources)

    def get_source(self, identifier: str) -> SourceConfig | None:
        return next((source for source in self.sources if source.identifier == identifier), None)

    def display_name(self, identifier: str) -> str:
        """Return the readable name for ``identifier``, or its uppercased form when unknown."""

        source = self.get_source(identifier)
        if source is None:
            return identifier.upper()
        return source.name
