"""Project the loaded articles into the HTML of the page's content region."""

from __future__ import annotations

from datetime import datetime
from html import escape
from typing import List, Sequence

from catholicnews.config import ALL_SOURCES
from catholicnews.models import Article
from catholicnews.utils.dates import format_date

__all__ = ["EMPTY_MESSAGE", "render_article", "render_articles", "select_articles"]

EMPTY_MESSAGE = "No articles found for this source."

EMPTY_HTML = f'<p class="empty">{EMPTY_MESSAGE}</p>'

ARTICLE_TEMPLATE = """
<article class="news-card" data-source="{source}">
  <div class="news-card-header">
    <span class="news-source">{source_name}</span>
    <h2 class="news-title">
      <a href="{link}" target="_blank" rel="noopener noreferrer">{title}</a>
    </h2>
    <p class="news-snippet">{description}</p>
  </div>
  <div class="news-card-footer">
    <span class="news-date">{date}</span>
    <a href="{link}" target="_blank" rel="noopener noreferrer" class="read-more">Read More &rarr;</a>
  </div>
</article>
"""


def select_articles(articles: Sequence[Article], source_filter: str = ALL_SOURCES) -> List[Article]:
    """Return the working set for ``source_filter``, preserving input order."""

    if source_filter == ALL_SOURCES:
        return list(articles)
    return [article for article in articles if article.source == source_filter]


def render_article(article: Article, now: datetime | None = None) -> str:
    return ARTICLE_TEMPLATE.format(
        source=escape(article.source),
        source_name=escape(article.source_name),
        link=escape(article.link),
        title=escape(article.title),
        description=escape(article.description),
        date=escape(format_date(article.pub_date, now=now)),
    ).strip()


def render_articles(
    articles: Sequence[Article],
    source_filter: str = ALL_SOURCES,
    now: datetime | None = None,
) -> str:
    """Render one card per article in the working set, or a placeholder when it is empty."""

    working_set = select_articles(articles, source_filter)
    if not working_set:
        return EMPTY_HTML
    return "\n".join(render_article(article, now=now) for article in working_set)
