"""Fan out over every configured feed, merge the results, and drive the display state."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Iterable, List

from catholicnews.config import ALL_SOURCES, AppConfig, SourceConfig
from catholicnews.models import AppState, Article, DisplaySurface
from catholicnews.services.fetcher import FeedFetcher
from catholicnews.services.renderer import render_articles

__all__ = ["Aggregator", "collect_articles", "sort_articles"]

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def sort_articles(articles: Iterable[Article]) -> List[Article]:
    """Newest first; articles without a usable date go last."""

    return sorted(articles, key=lambda article: article.published_at or _OLDEST, reverse=True)


async def collect_articles(fetcher: FeedFetcher, sources: Iterable[SourceConfig]) -> List[Article]:
    """Fetch every source concurrently and return the merged, sorted articles.

    All fetches are awaited to completion; a source whose fetch raises
    contributes nothing and does not disturb the others.
    """

    sources = list(sources)
    outcomes = await asyncio.gather(
        *(fetcher.fetch(source.identifier, source.feed_url) for source in sources),
        return_exceptions=True,
    )

    merged: List[Article] = []
    for source, outcome in zip(sources, outcomes):
        if isinstance(outcome, BaseException):
            logger.error("Fetching %s failed: %s", source.identifier, outcome)
            continue
        merged.extend(outcome)

    return sort_articles(merged)


class Aggregator:
    """Owns the application state and runs aggregation passes over the registry."""

    def __init__(
        self,
        config: AppConfig | None = None,
        fetcher: FeedFetcher | None = None,
        state: AppState | None = None,
    ) -> None:
        self.config = config or AppConfig()
        self.fetcher = fetcher or FeedFetcher(self.config)
        self.state = state or AppState()

    @property
    def display(self) -> DisplaySurface:
        return self.state.display

    @property
    def articles(self) -> List[Article]:
        return self.state.articles

    @property
    def current_filter(self) -> str:
        return self.state.current_filter

    async def load_all(self) -> None:
        """Run one aggregation pass and update the display regions."""

        display = self.state.display
        display.loading = True
        display.content = ""
        display.error = False

        try:
            articles = await collect_articles(self.fetcher, self.config.iter_sources())
            self.state.articles = articles

            display.loading = False
            if articles:
                logger.info("Loaded %d articles from %d sources", len(articles), len(self.config.sources))
                self.render()
            else:
                logger.warning("No articles were loaded from any source")
                display.error = True
        except Exception:
            logger.exception("Error loading feeds")
            display.loading = False
            display.error = True

    async def refresh(self) -> None:
        """Manual refresh: re-run the full aggregation pass."""

        await self.load_all()

    def set_filter(self, source_filter: str = ALL_SOURCES) -> str:
        """Select a single source (or ``"all"``) and re-render without fetching."""

        self.state.current_filter = source_filter
        return self.render()

    def render(self, now: datetime | None = None) -> str:
        content = render_articles(self.state.articles, self.state.current_filter, now=now)
        self.state.display.content = content
        return content
