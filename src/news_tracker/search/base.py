from typing import Protocol

from news_tracker.data import SearchRequest, SearchResponse


class NewsSearchClient(Protocol):
    """Interface to the external news-search API."""

    async def search(self, request: SearchRequest) -> SearchResponse:
        """Fetch one page of articles matching the request.

        Args:
            request: Query parameters plus page and page size.

        Returns:
            The page of articles and its pagination metadata.

        Raises:
            SearchError: On any transport, HTTP or payload failure.
        """
        ...
