"""Shared fixtures for News Tracker tests."""

from __future__ import annotations

import pytest

from news_tracker.data import Article, SearchRequest, SearchResponse, SourceRef


def make_article(
    index: int,
    *,
    company: str = "Acme",
    source: str | None = "Reuters",
    page: int = 1,
) -> Article:
    """Create a test article with a unique id per page and index."""
    return Article(
        id=f"p{page}-{index}",
        title=f"Article {page}.{index}",
        url=f"https://example.com/{page}/{index}",
        company=company,
        description=f"Description {page}.{index}",
        published_at="2026-02-01T10:00:00Z",
        source=SourceRef(name=source) if source else None,
    )


def make_page(
    page: int,
    count: int,
    *,
    total_pages: int = 3,
    total_results: int = 55,
    sources: tuple[str, ...] = ("Reuters", "AP"),
) -> SearchResponse:
    """Create a page of alternating Reuters/AP articles."""
    articles = tuple(
        make_article(i, page=page, source=sources[i % len(sources)]) for i in range(count)
    )
    return SearchResponse(
        articles=articles,
        sources=sources,
        total_pages=total_pages,
        total_results=total_results,
    )


class FakeSearchClient:
    """In-memory search client that records requests.

    Responses are looked up by page; ``page_size`` equal to the full total
    returns every article across all pages.
    """

    def __init__(self, pages: dict[int, SearchResponse] | None = None) -> None:
        self.pages = pages or {}
        self.requests: list[SearchRequest] = []
        self.error: Exception | None = None

    async def search(self, request: SearchRequest) -> SearchResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.pages[request.page]


@pytest.fixture
def three_pages() -> dict[int, SearchResponse]:
    """55 results over three pages of 20/20/15."""
    return {1: make_page(1, 20), 2: make_page(2, 20), 3: make_page(3, 15)}


@pytest.fixture
def fake_client(three_pages: dict[int, SearchResponse]) -> FakeSearchClient:
    return FakeSearchClient(three_pages)
