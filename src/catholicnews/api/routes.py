"""API routes exposing the aggregated feed, source filter, and refresh trigger."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from catholicnews.config import ALL_SOURCES
from catholicnews.models import Article
from catholicnews.services.aggregator import Aggregator
from catholicnews.services.renderer import select_articles

logger = logging.getLogger(__name__)

router = APIRouter()


class SourceEntry(BaseModel):
    identifier: str
    name: str
    url: str


class SourcesResponse(BaseModel):
    sources: List[SourceEntry] = Field(default_factory=list)


class ArticlesResponse(BaseModel):
    source: str
    articles: List[Article] = Field(default_factory=list)


class DisplayResponse(BaseModel):
    loading: bool
    error: bool
    content: str
    current_filter: str
    article_count: int


class FilterRequest(BaseModel):
    source: str = ALL_SOURCES


def get_aggregator(request: Request) -> Aggregator:
    """Return the aggregator attached to the running application."""

    return request.app.state.aggregator


def _ensure_known_source(aggregator: Aggregator, source: str) -> str:
    selected = source.strip()
    if selected == ALL_SOURCES or aggregator.config.get_source(selected) is not None:
        return selected
    raise HTTPException(status_code=404, detail=f"Unknown source: {source}")


def _display_response(aggregator: Aggregator) -> DisplayResponse:
    display = aggregator.display
    return DisplayResponse(
        loading=display.loading,
        error=display.error,
        content=display.content,
        current_filter=aggregator.current_filter,
        article_count=len(aggregator.articles),
    )


@router.get("/sources", response_model=SourcesResponse)
async def list_sources(aggregator: Aggregator = Depends(get_aggregator)) -> SourcesResponse:
    """Return the registered news sources in display order."""

    entries = [
        SourceEntry(identifier=source.identifier, name=source.name, url=source.feed_url)
        for source in aggregator.config.iter_sources()
    ]
    return SourcesResponse(sources=entries)


@router.get("/articles", response_model=ArticlesResponse)
async def list_articles(
    source: str = ALL_SOURCES, aggregator: Aggregator = Depends(get_aggregator)
) -> ArticlesResponse:
    """Return the loaded articles for ``source`` without fetching anything."""

    selected = _ensure_known_source(aggregator, source)
    return ArticlesResponse(source=selected, articles=select_articles(aggregator.articles, selected))


@router.get("/display", response_model=DisplayResponse)
async def current_display(aggregator: Aggregator = Depends(get_aggregator)) -> DisplayResponse:
    return _display_response(aggregator)


@router.post("/filter", response_model=DisplayResponse)
async def apply_filter(
    payload: FilterRequest | None = Body(default=None),
    aggregator: Aggregator = Depends(get_aggregator),
) -> DisplayResponse:
    """Select the active source filter and re-render the loaded articles."""

    request_payload = payload or FilterRequest()
    selected = _ensure_known_source(aggregator, request_payload.source)
    aggregator.set_filter(selected)
    return _display_response(aggregator)


@router.post("/refresh", response_model=DisplayResponse)
async def refresh_feeds(aggregator: Aggregator = Depends(get_aggregator)) -> DisplayResponse:
    """Run a fresh aggregation pass over every source."""

    logger.info("Manual refresh requested")
    await aggregator.refresh()
    return _display_response(aggregator)
