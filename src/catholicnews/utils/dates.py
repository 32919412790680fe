"""Publication date parsing and human friendly formatting."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from dateutil.parser import ParserError, parse as parse_date

__all__ = ["parse_pub_date", "format_date", "UNKNOWN_DATE"]

UNKNOWN_DATE = "Date unavailable"

# Abbreviations seen in RSS ``pubDate`` values that dateutil does not resolve itself.
TZINFOS = {
    "EST": timezone(timedelta(hours=-5)),
    "EDT": timezone(timedelta(hours=-4)),
    "CST": timezone(timedelta(hours=-6)),
    "CDT": timezone(timedelta(hours=-5)),
    "PST": timezone(timedelta(hours=-8)),
    "PDT": timezone(timedelta(hours=-7)),
    "GMT": timezone.utc,
    "UTC": timezone.utc,
    "CET": timezone(timedelta(hours=1)),
    "CEST": timezone(timedelta(hours=2)),
}


def parse_pub_date(value: str | None) -> datetime | None:
    """Parse an upstream ``pubDate`` string into an aware UTC datetime.

    The conversion service reports naive ``YYYY-MM-DD HH:MM:SS`` values in UTC;
    those are tagged as UTC.  ``None`` is returned for missing or unparseable
    values instead of raising.
    """

    if not value or not isinstance(value, str):
        return None

    try:
        parsed = parse_date(value, tzinfos=TZINFOS)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ParserError, ValueError, OverflowError):
        return None


def format_date(value: str | datetime | None, now: datetime | None = None) -> str:
    """Return a relative description such as ``"5 hours ago"`` for ``value``."""

    date = value if isinstance(value, datetime) else parse_pub_date(value)
    if date is None:
        return UNKNOWN_DATE
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)

    current = now or datetime.now(timezone.utc)
    if current.tzinfo is None:
        current = current.replace(tzinfo=timezone.utc)

    elapsed = abs(current - date)
    hours = int(elapsed // timedelta(hours=1))
    days = int(elapsed // timedelta(days=1))

    if hours < 1:
        return "Just now"
    if hours < 24:
        return f"{hours} hour{'s' if hours > 1 else ''} ago"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days} days ago"
    return f"{date:%b} {date.day}, {date.year}"
