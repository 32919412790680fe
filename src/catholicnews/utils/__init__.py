"""Small helpers shared across the Catholic News package."""

from __future__ import annotations

from .dates import UNKNOWN_DATE, format_date, parse_pub_date  # noqa: F401

__all__ = ["UNKNOWN_DATE", "format_date", "parse_pub_date"]
