"""Fetch a single feed through the RSS-to-JSON service and normalize its items."""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Mapping

import requests
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from catholicnews.config import AppConfig
from catholicnews.models import Article
from catholicnews.services.text import strip_html, truncate

__all__ = [
    "FeedError",
    "FeedFetcher",
    "MalformedItem",
    "TransportError",
    "normalize_item",
    "parse_items",
]

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "catholicnews/0.1 (RSS aggregator)",
    "Accept": "application/json",
}


class FeedError(Exception):
    """Base class for problems fetching or normalizing a feed."""


class TransportError(FeedError):
    """The conversion service answered with a non-success HTTP status."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"HTTP error! status: {status_code}")
        self.status_code = status_code


class MalformedItem(FeedError):
    """A feed item could not be turned into an :class:`Article`."""


def _first_text(*values: Any) -> str:
    for value in values:
        if isinstance(value, str) and value:
            return value
    return ""


def _thumbnail(item: Mapping[str, Any]) -> str:
    thumbnail = item.get("thumbnail")
    if isinstance(thumbnail, str) and thumbnail:
        return thumbnail

    enclosure = item.get("enclosure")
    if isinstance(enclosure, Mapping):
        link = enclosure.get("link")
        if isinstance(link, str) and link:
            return link
    return ""


def normalize_item(source: str, item: Any, source_name: str) -> Article:
    """Convert one upstream item into an :class:`Article`.

    Raises :class:`MalformedItem` when ``item`` is not an object or its fields
    have unexpected types.
    """

    if not isinstance(item, Mapping):
        raise MalformedItem(f"Expected an object, got {type(item).__name__}")

    description = truncate(strip_html(_first_text(item.get("description"), item.get("content"))))

    title = item.get("title")
    try:
        return Article(
            source=source,
            source_name=source_name,
            title="" if title is None else title,
            link=item.get("link") or "",
            pub_date=item.get("pubDate"),
            description=description,
            thumbnail=_thumbnail(item),
        )
    except ValidationError as exc:
        raise MalformedItem(str(exc)) from exc


def parse_items(source: str, payload: Any, source_name: str) -> List[Article]:
    """Turn a conversion service response into articles.

    A response that is not ``status == "ok"`` or carries no items yields an empty
    list.  Items that fail normalization are skipped individually.
    """

    if not isinstance(payload, Mapping) or payload.get("status") != "ok":
        logger.debug("Feed %s reported failure status", source)
        return []

    items = payload.get("items")
    if not items:
        logger.debug("Feed %s returned no items", source)
        return []
    if not isinstance(items, list):
        logger.warning("Feed %s returned items of unexpected type %s", source, type(items).__name__)
        return []

    articles: List[Article] = []
    for index, item in enumerate(items):
        try:
            articles.append(normalize_item(source, item, source_name))
        except MalformedItem as exc:
            logger.warning("Skipping malformed item %d from %s: %s", index, source, exc)
    return articles


class FeedFetcher:
    """Retrieve feeds one at a time through the configured conversion service."""

    def __init__(self, config: AppConfig | None = None, session: requests.Session | None = None) -> None:
        self.config = config or AppConfig()
        self._session = session or requests.Session()
        if session is None:
            self._session.headers.update(DEFAULT_HEADERS)

    @property
    def display_name(self) -> Callable[[str], str]:
        return self.config.display_name

    def request_feed(self, feed_url: str) -> Any:
        """Perform the blocking HTTP call and return the decoded JSON payload."""

        service = self.config.service
        params = {"rss_url": feed_url, "api_key": service.api_key, "count": service.count}
        response = self._session.get(service.endpoint, params=params, timeout=service.timeout)
        if not 200 <= response.status_code < 300:
            raise TransportError(response.status_code)
        return response.json()

    async def fetch(self, source: str, feed_url: str) -> List[Article]:
        """Return the normalized articles for one feed, or an empty list on any failure."""

        try:
            payload = await run_in_threadpool(self.request_feed, feed_url)
            articles = parse_items(source, payload, self.display_name(source))
        except TransportError as exc:
            logger.warning("Error fetching %s: HTTP %s", source, exc.status_code)
            return []
        except requests.RequestException as exc:
            logger.warning("Error fetching %s: %s", source, exc)
            return []
        except ValueError as exc:
            logger.warning("Invalid JSON from %s: %s", source, exc)
            return []
        except Exception:
            logger.exception("Unexpected error fetching %s", source)
            return []

        logger.info("Fetched %d articles from %s", len(articles), source)
        return articles
