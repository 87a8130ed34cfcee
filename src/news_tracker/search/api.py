"""Client for the news-search HTTP API."""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx

from news_tracker.data import Article, SearchRequest, SearchResponse, SourceRef
from news_tracker.errors import SearchError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://news-dash-api.vercel.app"
SEARCH_PATH = "/api/news"
DEFAULT_ERROR_MESSAGE = "Failed to fetch news articles"


class NewsApiClient:
    """Search for company news through the news-search API.

    Each call issues a single ``POST /api/news``. Every failure mode
    (transport error, non-2xx status, invalid or malformed body) is raised
    as ``SearchError``.

    Args:
        base_url: API root (defaults to NEWS_TRACKER_API_URL env var, then the
            hosted API).
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._base_url = base_url or os.environ.get("NEWS_TRACKER_API_URL") or DEFAULT_API_URL
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    async def search(self, request: SearchRequest) -> SearchResponse:
        """Fetch one page of articles.

        Args:
            request: Query parameters plus page and page size.

        Returns:
            Parsed page of results.

        Raises:
            SearchError: If the request fails for any reason.
        """
        payload = request.to_payload()
        logger.debug(f"POST {SEARCH_PATH} page={request.page} pageSize={request.page_size}")

        async with httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout) as client:
            try:
                response = await client.post(SEARCH_PATH, json=payload)
                response.raise_for_status()
                body = response.json()
            except httpx.HTTPStatusError as e:
                message = _error_message(e.response)
                logger.warning("News search returned %s: %s", e.response.status_code, message)
                raise SearchError(message) from e
            except (httpx.HTTPError, ValueError) as e:
                logger.warning("News search request failed. Error: %s", e)
                raise SearchError(DEFAULT_ERROR_MESSAGE) from e

        return parse_search_response(body)


def _error_message(response: httpx.Response) -> str:
    """Extract the server's ``error`` string, falling back to a generic message."""
    try:
        body = response.json()
    except ValueError:
        return DEFAULT_ERROR_MESSAGE
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, str) and error:
            return error
    return DEFAULT_ERROR_MESSAGE


def parse_search_response(body: Any) -> SearchResponse:
    """Convert a decoded success body into a ``SearchResponse``.

    Raises:
        SearchError: If the body does not have the expected shape.
    """
    try:
        data = body["data"]
        metadata = data.get("metadata") or {}
        sources = metadata.get("sources") or []
        if not isinstance(sources, list):
            raise TypeError(f"metadata.sources must be a list, got {type(sources).__name__}")
        articles = tuple(_parse_article(item) for item in data.get("articles") or [])
        return SearchResponse(
            articles=articles,
            sources=tuple(str(s) for s in sources),
            total_pages=int(metadata.get("totalPages") or 0),
            total_results=int(metadata.get("totalResults") or 0),
        )
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        logger.warning("Malformed news search response. Error: %s", e)
        raise SearchError(DEFAULT_ERROR_MESSAGE) from e


def _parse_article(item: dict[str, Any]) -> Article:
    source = item.get("source")
    source_ref = None
    if isinstance(source, dict) and source.get("name"):
        source_id = source.get("id")
        source_ref = SourceRef(
            name=str(source["name"]),
            id=str(source_id) if source_id is not None else None,
        )
    return Article(
        id=str(item.get("id") or item.get("url", "")),
        title=_text(item.get("title")) or "",
        url=_text(item.get("url")) or "",
        company=_text(item.get("company")) or "",
        description=_text(item.get("description")),
        published_at=_text(item.get("publishedAt")),
        source=source_ref,
    )


def _text(value: Any) -> str | None:
    """Keep string fields as-is; anything else (numbers, objects) is dropped."""
    return value if isinstance(value, str) else None
