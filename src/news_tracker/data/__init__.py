"""Data models for News Tracker."""

from news_tracker.data.models import (
    DEFAULT_PAGE_SIZE,
    EXPORT_COLUMNS,
    MISSING_SOURCE_NAME,
    Article,
    ExportRecord,
    PageMetadata,
    PageToken,
    PageTokenKind,
    ResultState,
    SearchRequest,
    SearchResponse,
    SourceRef,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "EXPORT_COLUMNS",
    "MISSING_SOURCE_NAME",
    "Article",
    "ExportRecord",
    "PageMetadata",
    "PageToken",
    "PageTokenKind",
    "ResultState",
    "SearchRequest",
    "SearchResponse",
    "SourceRef",
]
