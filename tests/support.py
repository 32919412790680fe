"""Shared test helpers: a fixed clock, article factory, and a fake fetcher."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Dict, List

from catholicnews.models import Article

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def make_article(source: str, hours_ago: float, title: str | None = None) -> Article:
    published = NOW - timedelta(hours=hours_ago)
    return Article(
        source=source,
        source_name=source.upper(),
        title=title or f"{source} {hours_ago}h",
        link=f"https://{source}.example.com/{int(hours_ago * 60)}",
        pub_date=published.strftime("%Y-%m-%d %H:%M:%S"),
        description=f"Summary from {source}",
    )


class FakeFetcher:
    """Stands in for :class:`FeedFetcher`, returning canned articles or raising per source."""

    def __init__(self, results: Dict[str, object]) -> None:
        self.results = results
        self.calls: List[tuple[str, str]] = []

    async def fetch(self, source: str, feed_url: str) -> List[Article]:
        self.calls.append((source, feed_url))
        outcome = self.results.get(source, [])
        if isinstance(outcome, BaseException):
            raise outcome
        return list(outcome)
