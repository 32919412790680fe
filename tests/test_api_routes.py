"""Tests for the HTTP surface in :mod:`catholicnews.api`."""

from __future__ import annotations

from fastapi.testclient import TestClient

from catholicnews.api.app import create_app
from catholicnews.config import AppConfig, SourceConfig
from catholicnews.services.aggregator import Aggregator
from catholicnews.services.fetcher import TransportError
from catholicnews.services.renderer import EMPTY_MESSAGE

from support import FakeFetcher, make_article


def _client(config, results, *, load_on_startup: bool = False) -> tuple[TestClient, FakeFetcher]:
    fetcher = FakeFetcher(results)
    app = create_app(Aggregator(config, fetcher=fetcher), load_on_startup=load_on_startup)
    return TestClient(app), fetcher


def _results() -> dict:
    return {
        "vatican": TransportError(404),
        "cna": [make_article("cna", hours) for hours in (1, 4, 9, 20, 40)],
        "ncr": [make_article("ncr", hours) for hours in (2, 6, 12)],
    }


def test_list_sources_returns_registry(config) -> None:
    """Sources are listed in configuration order."""

    client, _ = _client(config, {})

    response = client.get("/api/sources")

    assert response.status_code == 200
    identifiers = [entry["identifier"] for entry in response.json()["sources"]]
    assert identifiers == ["vatican", "cna", "ncr"]
    assert response.json()["sources"][1]["name"] == "Catholic News Agency"


def test_refresh_runs_aggregation_pass(config) -> None:
    """A refresh fetches every source and reports the rendered content."""

    client, fetcher = _client(config, _results())

    response = client.post("/api/refresh")

    assert response.status_code == 200
    payload = response.json()
    assert payload["error"] is False
    assert payload["loading"] is False
    assert payload["article_count"] == 8
    assert payload["content"].count('<article class="news-card"') == 8
    assert len(fetcher.calls) == 3


def test_refresh_reports_error_when_nothing_loads(config) -> None:
    """When every source fails the error indicator is set and nothing is rendered."""

    client, _ = _client(config, {"vatican": TransportError(500), "cna": RuntimeError("down"), "ncr": []})

    payload = client.post("/api/refresh").json()

    assert payload["error"] is True
    assert payload["article_count"] == 0
    assert payload["content"] == ""


def test_filter_rerenders_without_refetching(config) -> None:
    """Selecting a filter narrows the rendered cards and does not hit the feeds."""

    client, fetcher = _client(config, _results())
    client.post("/api/refresh")
    calls = len(fetcher.calls)

    response = client.post("/api/filter", json={"source": "ncr"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["current_filter"] == "ncr"
    assert payload["content"].count('data-source="ncr"') == 3
    assert 'data-source="cna"' not in payload["content"]
    assert len(fetcher.calls) == calls

    empty = client.post("/api/filter", json={"source": "vatican"}).json()
    assert EMPTY_MESSAGE in empty["content"]


def test_filter_rejects_unknown_source(config) -> None:
    client, _ = _client(config, {})

    response = client.post("/api/filter", json={"source": "zenit"})

    assert response.status_code == 404
    assert "zenit" in response.json()["detail"]


def test_articles_endpoint_uses_camel_case_fields(config) -> None:
    """Articles are exposed with camelCase field names."""

    client, _ = _client(config, _results())
    client.post("/api/refresh")

    response = client.get("/api/articles", params={"source": "cna"})

    assert response.status_code == 200
    articles = response.json()["articles"]
    assert len(articles) == 5
    assert {"source", "sourceName", "title", "link", "pubDate", "description", "thumbnail"} <= set(articles[0])
    assert all(article["source"] == "cna" for article in articles)
    pub_dates = [article["pubDate"] for article in articles]
    assert pub_dates == sorted(pub_dates, reverse=True)


def test_index_page_renders_regions_and_filters(config) -> None:
    """The page exposes the loading, error and content regions plus one filter per source."""

    client, _ = _client(config, _results())
    client.post("/api/refresh")

    response = client.get("/")

    assert response.status_code == 200
    body = response.text
    assert 'id="loading"' in body
    assert 'id="error" style="display: none"' in body
    assert 'id="news-container"' in body
    assert body.count('class="source-filter') == 4
    assert 'class="source-filter active" data-source="all"' in body
    assert body.count('<article class="news-card"') == 8


def test_startup_loads_feeds(config) -> None:
    """With startup loading enabled the first aggregation pass runs when the app starts."""

    client, fetcher = _client(config, _results(), load_on_startup=True)

    with client:
        payload = client.get("/api/display").json()

    assert len(fetcher.calls) == 3
    assert payload["article_count"] == 8
    assert payload["current_filter"] == "all"


def test_filter_accepts_mixed_case_identifiers() -> None:
    """Identifiers are matched exactly as registered, whatever their case."""

    config = AppConfig(
        sources=[
            SourceConfig(identifier="EWTN", name="EWTN News", url="https://ewtn.example.com/rss"),
            SourceConfig(identifier="cna", name="Catholic News Agency", url="https://cna.example.com/rss"),
        ]
    )
    client, _ = _client(config, {"EWTN": [make_article("EWTN", 1)], "cna": [make_article("cna", 2)]})
    client.post("/api/refresh")

    response = client.post("/api/filter", json={"source": "EWTN"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["current_filter"] == "EWTN"
    assert payload["content"].count('data-source="EWTN"') == 1
    assert 'data-source="cna"' not in payload["content"]

    articles = client.get("/api/articles", params={"source": "EWTN"}).json()["articles"]
    assert [article["source"] for article in articles] == ["EWTN"]
    assert client.post("/api/filter", json={"source": "ewtn"}).status_code == 404
