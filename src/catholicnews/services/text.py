"""Plain-text helpers for feed item descriptions."""

from __future__ import annotations

from bs4 import BeautifulSoup

__all__ = ["strip_html", "truncate", "DESCRIPTION_LIMIT", "ELLIPSIS"]

DESCRIPTION_LIMIT = 200
ELLIPSIS = "..."


def strip_html(html: str | None) -> str:
    """Return the text content of an HTML fragment with every tag removed."""

    if not html:
        return ""
    if "<" not in html and "&" not in html:
        return html

    soup = BeautifulSoup(html, "lxml")
    for element in soup(["script", "style"]):
        element.decompose()
    return soup.get_text()


def truncate(text: str, limit: int = DESCRIPTION_LIMIT) -> str:
    """Cut ``text`` to ``limit`` characters, appending :data:`ELLIPSIS` when shortened."""

    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS
