"""Export of the full result set behind a paginated search."""

import logging
import re
import time
from datetime import datetime, tzinfo
from pathlib import Path

from news_tracker.data import MISSING_SOURCE_NAME, Article, ExportRecord
from news_tracker.errors import ExportError, SearchError
from news_tracker.export.base import ExportWriter
from news_tracker.formatting import format_published_at
from news_tracker.run_logger import RequestOutcome, RunLogger
from news_tracker.search.base import NewsSearchClient
from news_tracker.session import SearchSession

logger = logging.getLogger(__name__)

EXPORT_FAILED_MESSAGE = "Export failed"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w.-]+")


def to_export_record(article: Article, tz: tzinfo | None = None) -> ExportRecord:
    """Flatten an article into a spreadsheet row."""
    return ExportRecord(
        title=article.title,
        description=article.description or "",
        company=article.company,
        source=article.source_name or MISSING_SOURCE_NAME,
        published_date=format_published_at(article.published_at, tz),
        url=article.url,
    )


def build_export_filename(companies: tuple[str, ...] | list[str], now: datetime) -> str:
    """Name the workbook after the tracked companies and the generation time.

    Example: ``news_results_Acme_Globex_1767225600000.xlsx``.
    """
    names = "_".join(_UNSAFE_FILENAME_CHARS.sub("-", c) for c in companies)
    millis = int(now.timestamp() * 1000)
    return f"news_results_{names}_{millis}.xlsx"


class ExportReconciler:
    """Re-run the session's current query in one page and export every match.

    The export fetch is independent of the paginated results on display: it
    reads the session's query and last reported total but never writes to the
    session. Its own ``exporting``/``error``/``last_path`` state reports the
    outcome, and a failed export can be retried by calling ``export_all`` again.

    Args:
        session: The search session whose query is exported.
        client: Search API client for the full fetch.
        writer: Export collaborator producing the file.
        tz: Zone for formatting publication timestamps (default: local).
        run_logger: Optional RunLogger recording the export request.
    """

    def __init__(
        self,
        session: SearchSession,
        client: NewsSearchClient,
        writer: ExportWriter,
        *,
        tz: tzinfo | None = None,
        run_logger: RunLogger | None = None,
    ) -> None:
        self._session = session
        self._client = client
        self._writer = writer
        self._tz = tz
        self._run_logger = run_logger
        self._in_flight = 0
        self._error: str | None = None
        self._last_path: Path | None = None
        self._last_count = 0

    @property
    def available(self) -> bool:
        return self._session.can_export and self._session.can_search

    @property
    def exporting(self) -> bool:
        return self._in_flight > 0

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def last_path(self) -> Path | None:
        return self._last_path

    @property
    def last_count(self) -> int:
        """Number of records in the last successful export."""
        return self._last_count

    async def export_all(self) -> Path | None:
        """Fetch every article matching the current query and write them out.

        Returns:
            Path of the written file, or None if export is unavailable (no
            results reported yet) or failed.
        """
        if not self.available:
            logger.debug("Export unavailable: no results reported for the current query")
            return None

        query = self._session.query
        total = self._session.result.metadata.total_results
        request = query.to_request(page=1, page_size=total)

        self._in_flight += 1
        self._error = None
        logger.info(f"Exporting {total} articles for {', '.join(query.companies)}")

        t0 = time.monotonic()
        try:
            response = await self._client.search(request)
            records = [to_export_record(a, self._tz) for a in response.articles]
            filename = build_export_filename(query.companies, datetime.now(tz=self._tz))
            path = self._writer.write(records, filename)
        except (SearchError, ExportError, OSError) as e:
            self._error = f"{EXPORT_FAILED_MESSAGE}: {e}"
            logger.warning(self._error)
            if self._run_logger:
                self._run_logger.log_request(
                    "export",
                    request,
                    RequestOutcome.ERROR,
                    error=str(e),
                    duration_seconds=time.monotonic() - t0,
                )
            return None
        finally:
            self._in_flight -= 1

        if len(records) != total:
            # Live data may have changed since the paginated search.
            logger.info(f"Export returned {len(records)} articles; search reported {total}")

        if self._run_logger:
            self._run_logger.log_request(
                "export",
                request,
                RequestOutcome.OK,
                article_count=len(records),
                duration_seconds=time.monotonic() - t0,
            )
        self._last_path = path
        self._last_count = len(records)
        return path
