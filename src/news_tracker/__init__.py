"""News Tracker: paginated company news search with spreadsheet export."""

from news_tracker.config import NewsTrackerConfig, create_from_config, load_config
from news_tracker.data import (
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
from news_tracker.errors import ExportError, NewsTrackerError, SearchError
from news_tracker.export import (
    ExcelExportWriter,
    ExportReconciler,
    ExportWriter,
    build_export_filename,
    to_export_record,
)
from news_tracker.filters import filter_by_sources
from news_tracker.formatting import format_published_at, needs_search_fallback, search_fallback_url
from news_tracker.pagination import compute_window
from news_tracker.query import QueryState
from news_tracker.run_logger import RunLogger
from news_tracker.search import NewsApiClient, NewsSearchClient
from news_tracker.session import ErrorPolicy, SearchSession

__all__ = [
    # Models
    "Article",
    "ExportRecord",
    "PageMetadata",
    "PageToken",
    "PageTokenKind",
    "ResultState",
    "SearchRequest",
    "SearchResponse",
    "SourceRef",
    # Errors
    "ExportError",
    "NewsTrackerError",
    "SearchError",
    # Functions
    "build_export_filename",
    "compute_window",
    "filter_by_sources",
    "format_published_at",
    "needs_search_fallback",
    "search_fallback_url",
    "to_export_record",
    # Protocols
    "ExportWriter",
    "NewsSearchClient",
    # State and controllers
    "ErrorPolicy",
    "ExportReconciler",
    "QueryState",
    "SearchSession",
    # Clients and writers
    "ExcelExportWriter",
    "NewsApiClient",
    # Logging
    "RunLogger",
    # Config
    "NewsTrackerConfig",
    "create_from_config",
    "load_config",
]
