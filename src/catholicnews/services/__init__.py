"""Service layer entry points for Catholic News."""

from __future__ import annotations

from .aggregator import Aggregator, collect_articles  # noqa: F401
from .fetcher import FeedFetcher, TransportError  # noqa: F401
from .renderer import render_articles, select_articles  # noqa: F401

__all__ = [
    "Aggregator",
    "FeedFetcher",
    "TransportError",
    "collect_articles",
    "render_articles",
    "select_articles",
]
