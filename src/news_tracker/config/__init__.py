"""Configuration module for News Tracker."""

from news_tracker.config.factory import (
    create_client,
    create_from_config,
    create_query,
    create_session,
    create_writer,
)
from news_tracker.config.loader import get_default_config_path, load_config
from news_tracker.config.models import (
    ApiConfig,
    DomainOptionConfig,
    ExportConfig,
    LoggingConfig,
    NewsTrackerConfig,
    SearchConfig,
)

__all__ = [
    "ApiConfig",
    "DomainOptionConfig",
    "ExportConfig",
    "LoggingConfig",
    "NewsTrackerConfig",
    "SearchConfig",
    "create_client",
    "create_from_config",
    "create_query",
    "create_session",
    "create_writer",
    "get_default_config_path",
    "load_config",
]
