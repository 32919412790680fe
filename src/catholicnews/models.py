"""Domain models used across the application."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from catholicnews.config import ALL_SOURCES
from catholicnews.utils.dates import parse_pub_date


class Article(BaseModel):
    """A normalized feed item ready for display."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    source: str
    source_name: str
    title: str = ""
    link: str = ""
    pub_date: Optional[str] = None
    description: str = ""
    thumbnail: str = ""

    @property
    def published_at(self) -> datetime | None:
        """``pub_date`` as an aware UTC datetime, ``None`` when missing or invalid."""

        return parse_pub_date(self.pub_date)


class DisplaySurface(BaseModel):
    """The three page regions driven by the aggregator and renderer."""

    loading: bool = False
    error: bool = False
    content: str = ""


class AppState(BaseModel):
    """Shared state for one running application: the loaded articles and the active filter."""

    articles: List[Article] = Field(default_factory=list)
    current_filter: str = ALL_SOURCES
    display: DisplaySurface = Field(default_factory=DisplaySurface)
