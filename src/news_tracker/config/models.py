"""Pydantic configuration models for News Tracker."""

from pydantic import BaseModel, Field, model_validator

from news_tracker.data import DEFAULT_PAGE_SIZE
from news_tracker.export.excel import DEFAULT_COLUMN_WIDTHS, DEFAULT_SHEET_NAME
from news_tracker.query import DEFAULT_TIME_RANGE, DEFAULT_TIME_RANGES
from news_tracker.session import ErrorPolicy

# ============================================================
# API Config
# ============================================================


class ApiConfig(BaseModel):
    """Configuration for the news-search API client."""

    # None resolves to NEWS_TRACKER_API_URL, then the hosted API.
    base_url: str | None = None
    timeout: float = Field(default=30.0, gt=0)

    model_config = {"frozen": True}


# ============================================================
# Search Config
# ============================================================


class DomainOptionConfig(BaseModel):
    """A selectable domain filter."""

    label: str
    value: str

    model_config = {"frozen": True}


def _default_domains() -> list[DomainOptionConfig]:
    return [
        DomainOptionConfig(label="MarketWatch", value="marketwatch.com"),
        DomainOptionConfig(label="Yahoo", value="yahoo.com"),
    ]


class SearchConfig(BaseModel):
    """Configuration for paginated searches."""

    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    time_ranges: list[int] = Field(default_factory=lambda: list(DEFAULT_TIME_RANGES))
    default_time_range: int = DEFAULT_TIME_RANGE
    domains: list[DomainOptionConfig] = Field(default_factory=_default_domains)
    error_policy: ErrorPolicy = ErrorPolicy.RETAIN_RESULTS

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def default_time_range_must_be_an_option(self) -> "SearchConfig":
        if self.default_time_range not in self.time_ranges:
            raise ValueError(
                f"default_time_range {self.default_time_range} is not one of {self.time_ranges}"
            )
        return self


# ============================================================
# Export Config
# ============================================================


class ExportConfig(BaseModel):
    """Configuration for spreadsheet export."""

    output_dir: str = "exports"
    sheet_name: str = DEFAULT_SHEET_NAME
    column_widths: list[int] = Field(default_factory=lambda: list(DEFAULT_COLUMN_WIDTHS))

    model_config = {"frozen": True}


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for the JSON request log."""

    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class NewsTrackerConfig(BaseModel):
    """Root configuration for News Tracker."""

    api: ApiConfig = Field(default_factory=ApiConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
