"""Core data models for News Tracker."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

DEFAULT_PAGE_SIZE = 20
MISSING_SOURCE_NAME = "N/A"


@dataclass(frozen=True)
class SourceRef:
    """The news provider an article came from."""

    name: str
    id: str | None = None


@dataclass(frozen=True)
class Article:
    """A news article returned by the search API."""

    id: str
    title: str
    url: str
    company: str
    description: str | None = None
    published_at: str | None = None
    source: SourceRef | None = None

    @property
    def source_name(self) -> str | None:
        return self.source.name if self.source else None


@dataclass(frozen=True)
class SearchRequest:
    """One page request to the search API.

    Page and page size travel with the query but are not part of it.
    """

    companies: tuple[str, ...]
    time_range_days: int
    sources: tuple[str, ...] = ()
    domains: tuple[str, ...] = ()
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON body expected by the API."""
        return {
            "companies": list(self.companies),
            "timeRange": self.time_range_days,
            "sources": list(self.sources),
            "domains": list(self.domains),
            "page": self.page,
            "pageSize": self.page_size,
        }


@dataclass(frozen=True)
class SearchResponse:
    """A successful page of results with its pagination metadata."""

    articles: tuple[Article, ...]
    sources: tuple[str, ...]
    total_pages: int
    total_results: int


@dataclass(frozen=True)
class PageMetadata:
    """Pagination state reported by the server for the displayed page."""

    current_page: int = 1
    total_pages: int = 0
    total_results: int = 0
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class ResultState:
    """The last successfully fetched page.

    Replaced wholesale on each applied fetch; pages are never merged.
    """

    articles: tuple[Article, ...] = ()
    sources: tuple[str, ...] = ()
    metadata: PageMetadata = field(default_factory=PageMetadata)


class PageTokenKind(StrEnum):
    """Kind of entry in a page-window control."""

    NUMBER = "number"
    ELLIPSIS = "ellipsis"


@dataclass(frozen=True)
class PageToken:
    """One entry of a page-window control.

    Ellipsis tokens carry a synthetic value (the midpoint of the gap they
    stand for) that is only meant as a stable list key.
    """

    value: int
    label: str
    kind: PageTokenKind = PageTokenKind.NUMBER

    @property
    def navigable(self) -> bool:
        return self.kind is PageTokenKind.NUMBER


EXPORT_COLUMNS = ("Title", "Description", "Company", "Source", "PublishedDate", "URL")


@dataclass(frozen=True)
class ExportRecord:
    """A flat spreadsheet row for one article."""

    title: str
    description: str
    company: str
    source: str
    published_date: str
    url: str

    def as_row(self) -> dict[str, str]:
        """Return the record keyed by its spreadsheet column names."""
        return dict(
            zip(
                EXPORT_COLUMNS,
                (
                    self.title,
                    self.description,
                    self.company,
                    self.source,
                    self.published_date,
                    self.url,
                ),
                strict=True,
            )
        )
