"""Factory functions to create components from configuration."""

from pathlib import Path

from news_tracker.config.models import (
    ApiConfig,
    ExportConfig,
    NewsTrackerConfig,
    SearchConfig,
)
from news_tracker.export import ExcelExportWriter, ExportReconciler
from news_tracker.query import QueryState
from news_tracker.run_logger import RunLogger
from news_tracker.search import NewsApiClient, NewsSearchClient
from news_tracker.session import SearchSession


def create_client(config: ApiConfig) -> NewsApiClient:
    """Create the news-search API client from config."""
    return NewsApiClient(base_url=config.base_url, timeout=config.timeout)


def create_writer(config: ExportConfig) -> ExcelExportWriter:
    """Create the spreadsheet writer from config."""
    return ExcelExportWriter(
        config.output_dir,
        sheet_name=config.sheet_name,
        column_widths=tuple(config.column_widths),
    )


def create_query(config: SearchConfig) -> QueryState:
    """Create an empty query with the configured time-range options."""
    return QueryState(
        time_range_days=config.default_time_range,
        time_range_options=tuple(config.time_ranges),
    )


def create_session(
    config: SearchConfig,
    client: NewsSearchClient,
    run_logger: RunLogger | None = None,
) -> SearchSession:
    """Create a search session from config."""
    return SearchSession(
        client,
        query=create_query(config),
        page_size=config.page_size,
        error_policy=config.error_policy,
        run_logger=run_logger,
    )


def create_from_config(
    config: NewsTrackerConfig,
    *,
    client: NewsSearchClient | None = None,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
    output_dir_override: str | None = None,
) -> tuple[SearchSession, ExportReconciler, RunLogger | None]:
    """Create a session and its exporter from root config.

    Args:
        config: Root configuration.
        client: Search client to use instead of the configured API client.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.
        output_dir_override: Override the config's export.output_dir setting.

    Returns:
        Tuple of (session, exporter, run_logger).
        run_logger is None if logging is disabled.
    """
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)

    run_logger: RunLogger | None = None
    if log_enabled:
        run_logger = RunLogger(log_dir=log_dir, enabled=True)

    export_config = config.export
    if output_dir_override is not None:
        export_config = export_config.model_copy(update={"output_dir": output_dir_override})

    search_client = client or create_client(config.api)
    session = create_session(config.search, search_client, run_logger=run_logger)
    exporter = ExportReconciler(
        session,
        search_client,
        create_writer(export_config),
        run_logger=run_logger,
    )
    return (session, exporter, run_logger)
