"""Display helpers for articles."""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from urllib.parse import quote

from news_tracker.data import Article

logger = logging.getLogger(__name__)

GOOGLE_SEARCH_URL = "https://www.google.com/search?q="
DISPLAY_FORMAT = "%b %d, %Y, %I:%M %p"


def format_published_at(value: str | None, tz: tzinfo | None = None) -> str:
    """Render an ISO 8601 timestamp for display.

    Args:
        value: Timestamp as returned by the API (e.g. "2026-02-01T10:00:00Z").
        tz: Zone to render in. Defaults to the local zone.

    Returns:
        A string like "Feb 01, 2026, 10:00 AM", the raw value if it cannot be
        parsed, or "" for a missing value.
    """
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        logger.debug(f"Unparseable publication timestamp: {value}")
        return str(value)
    if parsed.tzinfo is not None or tz is not None:
        parsed = parsed.astimezone(tz)
    return parsed.strftime(DISPLAY_FORMAT)


def needs_search_fallback(article: Article) -> bool:
    """Whether the article link is likely unusable (consent walls on Yahoo)."""
    source_name = article.source_name or ""
    return "consent.yahoo.com" in article.url or "yahoo" in source_name.lower()


def search_fallback_url(article: Article) -> str:
    """Google search URL for the article's title and source."""
    query = f"{article.title} {article.source_name or ''}".strip()
    return GOOGLE_SEARCH_URL + quote(query, safe="")
