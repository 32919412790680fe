"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from html import escape
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from catholicnews.api.routes import router
from catholicnews.config import ALL_SOURCES, AppConfig
from catholicnews.services.aggregator import Aggregator

logger = logging.getLogger(__name__)

INDEX_HTML = """
<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Catholic News</title>
    <style>
      body {
        margin: 0 auto;
        max-width: 960px;
        padding: 24px;
        font-family: system-ui, -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif;
        color: #2d2a32;
      }

      .filters {
        display: flex;
        flex-wrap: wrap;
        gap: 8px;
        margin-bottom: 24px;
      }

      .source-filter,
      #refresh {
        border: 1px solid #7a5c99;
        border-radius: 16px;
        background: #fff;
        padding: 6px 14px;
        cursor: pointer;
      }

      .source-filter.active {
        background: #7a5c99;
        color: #fff;
      }

      .news-card {
        border-bottom: 1px solid #e4dcec;
        padding: 16px 0;
      }

      .news-source,
      .news-date {
        color: #6f6678;
        font-size: 0.85rem;
      }

      .news-card-footer {
        display: flex;
        justify-content: space-between;
      }

      .empty {
        text-align: center;
        padding: 2rem;
        color: #666;
      }
    </style>
  </head>
  <body>
    <header>
      <h1>Catholic News</h1>
      <nav class="filters">
        __FILTERS__
        <button type="button" id="refresh">Refresh</button>
      </nav>
    </header>
    <div id="loading" __LOADING_STYLE__>Loading news&hellip;</div>
    <div id="error" __ERROR_STYLE__>Unable to load news right now. Please try again later.</div>
    <main id="news-container">__CONTENT__</main>
    <script>
      window.addEventListener("DOMContentLoaded", () => {
        const loading = document.getElementById("loading");
        const errorDiv = document.getElementById("error");
        const newsContainer = document.getElementById("news-container");
        const refreshButton = document.getElementById("refresh");
        const filters = document.querySelectorAll(".source-filter");

        const applyDisplay = (display) => {
          loading.style.display = display.loading ? "block" : "none";
          errorDiv.style.display = display.error ? "block" : "none";
          newsContainer.innerHTML = display.content;
        };

        const post = async (path, body) => {
          const response = await fetch(path, {
            method: "POST",
            headers: { "Content-Type": "application/json" },
            body: body === undefined ? undefined : JSON.stringify(body),
          });
          if (!response.ok) {
            throw new Error(`HTTP error! status: ${response.status}`);
          }
          return response.json();
        };

        filters.forEach((filter) => {
          filter.addEventListener("click", async () => {
            filters.forEach((f) => f.classList.remove("active"));
            filter.classList.add("active");
            try {
              applyDisplay(await post("/api/filter", { source: filter.dataset.source }));
            } catch (error) {
              console.error("Error applying filter:", error);
            }
          });
        });

        refreshButton.addEventListener("click", async () => {
          applyDisplay({ loading: true, error: false, content: "" });
          try {
            applyDisplay(await post("/api/refresh"));
          } catch (error) {
            console.error("Error refreshing feeds:", error);
            applyDisplay({ loading: false, error: true, content: "" });
          }
        });
      });
    </script>
  </body>
</html>
"""

_HIDDEN = 'style="display: none"'


def _filter_buttons(aggregator: Aggregator) -> str:
    choices = [(ALL_SOURCES, "All Sources")]
    choices.extend((source.identifier, source.name) for source in aggregator.config.iter_sources())

    buttons = []
    for identifier, label in choices:
        active = " active" if identifier == aggregator.current_filter else ""
        buttons.append(
            f'<button type="button" class="source-filter{active}" data-source="{escape(identifier)}">'
            f"{escape(label)}</button>"
        )
    return "\n        ".join(buttons)


def render_index(aggregator: Aggregator) -> str:
    """Fill the page template with the current filter controls and display regions."""

    display = aggregator.display
    return (
        INDEX_HTML.replace("__FILTERS__", _filter_buttons(aggregator))
        .replace("__LOADING_STYLE__", "" if display.loading else _HIDDEN)
        .replace("__ERROR_STYLE__", "" if display.error else _HIDDEN)
        .replace("__CONTENT__", display.content)
    )


def create_app(aggregator: Aggregator | None = None, *, load_on_startup: bool = True) -> FastAPI:
    if aggregator is None:
        aggregator = Aggregator(AppConfig.load())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if load_on_startup:
            logger.info("Loading feeds on startup")
            await app.state.aggregator.load_all()
        yield

    app = FastAPI(title="Catholic News", description="Aggregated Catholic news feeds", lifespan=lifespan)
    app.state.aggregator = aggregator
    app.include_router(router, prefix="/api")

    @app.get("/", response_class=HTMLResponse)
    async def index() -> str:
        return render_index(app.state.aggregator)

    return app


app = create_app()
