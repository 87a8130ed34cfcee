"""Search session: owns the query, drives paginated fetches, holds results."""

import logging
import time
from collections.abc import Sequence
from dataclasses import replace
from enum import StrEnum

from news_tracker.data import (
    DEFAULT_PAGE_SIZE,
    Article,
    PageMetadata,
    PageToken,
    ResultState,
    SearchRequest,
    SearchResponse,
)
from news_tracker.errors import SearchError
from news_tracker.filters import filter_by_sources
from news_tracker.pagination import compute_window
from news_tracker.query import QueryState
from news_tracker.run_logger import RequestOutcome, RunLogger
from news_tracker.search.base import NewsSearchClient

logger = logging.getLogger(__name__)


class ErrorPolicy(StrEnum):
    """What happens to the displayed results when a search fails."""

    RETAIN_RESULTS = "retain_results"
    CLEAR_RESULTS = "clear_results"


class SearchSession:
    """Controller for a paginated news search.

    Only the most recently started search is current. Every call to
    ``search`` takes a new request token; a response whose token is no
    longer current is discarded on arrival, whether it succeeded or failed.

    Args:
        client: Search API client.
        query: Initial query state.
        page_size: Articles per page.
        error_policy: Whether a failed search keeps the previous results
            on display (the default) or clears them.
        run_logger: Optional RunLogger recording every request.
    """

    def __init__(
        self,
        client: NewsSearchClient,
        *,
        query: QueryState | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        error_policy: ErrorPolicy = ErrorPolicy.RETAIN_RESULTS,
        run_logger: RunLogger | None = None,
    ) -> None:
        self._client = client
        self._query = query or QueryState()
        self._page_size = page_size
        self._error_policy = error_policy
        self._run_logger = run_logger
        self._result = ResultState(metadata=PageMetadata(page_size=page_size))
        self._loading = False
        self._error: str | None = None
        self._token = 0

    @property
    def query(self) -> QueryState:
        return self._query

    @property
    def result(self) -> ResultState:
        return self._result

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def can_search(self) -> bool:
        return self._query.has_companies

    @property
    def can_export(self) -> bool:
        return self._result.metadata.total_results > 0

    @property
    def page_window(self) -> list[PageToken]:
        metadata = self._result.metadata
        return compute_window(metadata.current_page, metadata.total_pages)

    @property
    def filtered_articles(self) -> Sequence[Article]:
        return filter_by_sources(self._result.articles, self._query.selected_sources)

    # -- Query transitions --

    def add_company(self, name: str) -> None:
        self._query = self._query.add_company(name)

    def remove_company(self, name: str) -> None:
        self._query = self._query.remove_company(name)

    def toggle_source(self, name: str) -> None:
        self._query = self._query.toggle_source(name)

    def toggle_domain(self, value: str) -> None:
        self._query = self._query.toggle_domain(value)

    def set_time_range(self, days: int) -> None:
        self._query = self._query.set_time_range(days)

    # -- Fetching --

    async def search(self, page: int = 1) -> bool:
        """Fetch a page of results for the current query.

        Args:
            page: Page number to request.

        Returns:
            True if the response was applied to the result state. False if
            the search was rejected, failed, or was superseded by a newer one.
        """
        if not self.can_search or page < 1:
            logger.debug(f"Search rejected: companies={self._query.companies} page={page}")
            self._log("search", None, RequestOutcome.REJECTED)
            return False

        self._token += 1
        token = self._token
        self._loading = True
        self._error = None

        request = self._query.to_request(page=page, page_size=self._page_size)
        logger.info(f"Searching page {page} for {', '.join(request.companies)}")

        t0 = time.monotonic()
        try:
            response = await self._client.search(request)
        except SearchError as e:
            duration = time.monotonic() - t0
            if token != self._token:
                logger.debug(f"Discarding stale error for page {page}")
                self._log("search", request, RequestOutcome.STALE, error=str(e), duration=duration)
                return False
            self._error = str(e)
            if self._error_policy is ErrorPolicy.CLEAR_RESULTS:
                self._result = ResultState(metadata=PageMetadata(page_size=self._page_size))
            logger.warning(f"Search for page {page} failed: {e}")
            self._log("search", request, RequestOutcome.ERROR, error=str(e), duration=duration)
            return False
        finally:
            if token == self._token:
                self._loading = False

        duration = time.monotonic() - t0
        if token != self._token:
            logger.debug(f"Discarding stale response for page {page}")
            self._log(
                "search",
                request,
                RequestOutcome.STALE,
                article_count=len(response.articles),
                duration=duration,
            )
            return False

        self._apply(response, page)
        self._log(
            "search",
            request,
            RequestOutcome.OK,
            article_count=len(response.articles),
            duration=duration,
        )
        return True

    def _apply(self, response: SearchResponse, page: int) -> None:
        self._result = ResultState(
            articles=response.articles,
            sources=response.sources,
            metadata=replace(
                self._result.metadata,
                current_page=page,
                total_pages=response.total_pages,
                total_results=response.total_results,
                page_size=self._page_size,
            ),
        )
        logger.info(
            f"Page {page}/{response.total_pages}: {len(response.articles)} articles "
            f"of {response.total_results}"
        )

    def _log(
        self,
        kind: str,
        request: SearchRequest | None,
        outcome: RequestOutcome,
        *,
        article_count: int = 0,
        error: str | None = None,
        duration: float = 0.0,
    ) -> None:
        if self._run_logger:
            self._run_logger.log_request(
                kind,
                request,
                outcome,
                article_count=article_count,
                error=error,
                duration_seconds=duration,
            )

    # -- Navigation --

    async def go_to_page(self, page: int) -> bool:
        """Navigate to a page of the current result set.

        Out-of-range pages and the current page are ignored.

        Returns:
            True if the new page was fetched and applied.
        """
        metadata = self._result.metadata
        if not 1 <= page <= metadata.total_pages or page == metadata.current_page:
            return False
        return await self.search(page)

    async def next_page(self) -> bool:
        return await self.go_to_page(self._result.metadata.current_page + 1)

    async def previous_page(self) -> bool:
        return await self.go_to_page(self._result.metadata.current_page - 1)
