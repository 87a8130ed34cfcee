"""Tests for the export reconciler and spreadsheet writer."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from conftest import FakeSearchClient, make_article, make_page
from openpyxl import load_workbook

from news_tracker.data import EXPORT_COLUMNS, Article, ExportRecord, SearchRequest, SearchResponse
from news_tracker.errors import ExportError, SearchError
from news_tracker.export import (
    ExcelExportWriter,
    ExportReconciler,
    build_export_filename,
    to_export_record,
)
from news_tracker.run_logger import RequestOutcome, RunLogger
from news_tracker.session import SearchSession


class ExportAwareClient(FakeSearchClient):
    """Serves paginated pages, or every article when asked for one big page."""

    def __init__(self, pages: dict[int, SearchResponse], full: SearchResponse) -> None:
        super().__init__(pages)
        self.full = full
        self.export_error: Exception | None = None

    async def search(self, request: SearchRequest) -> SearchResponse:
        if request.page_size > 20:
            self.requests.append(request)
            if self.export_error is not None:
                raise self.export_error
            return self.full
        return await super().search(request)


@pytest.fixture
def full_result(three_pages: dict[int, SearchResponse]) -> SearchResponse:
    articles = tuple(a for page in (1, 2, 3) for a in three_pages[page].articles)
    return SearchResponse(
        articles=articles,
        sources=("Reuters", "AP"),
        total_pages=1,
        total_results=len(articles),
    )


@pytest.fixture
def client(three_pages: dict, full_result: SearchResponse) -> ExportAwareClient:
    return ExportAwareClient(three_pages, full_result)


@pytest.fixture
def session(client: ExportAwareClient) -> SearchSession:
    session = SearchSession(client)
    session.add_company("Acme")
    return session


@pytest.fixture
def writer() -> MagicMock:
    writer = MagicMock()
    writer.write.side_effect = lambda records, filename: Path("/tmp") / filename
    return writer


@pytest.fixture
def exporter(
    session: SearchSession, client: ExportAwareClient, writer: MagicMock
) -> ExportReconciler:
    return ExportReconciler(session, client, writer, tz=UTC)


class TestExportReconciler:
    async def test_unavailable_before_search(
        self, exporter: ExportReconciler, client: ExportAwareClient, writer: MagicMock
    ) -> None:
        assert not exporter.available
        assert await exporter.export_all() is None
        assert client.requests == []
        writer.write.assert_not_called()
        assert exporter.error is None

    async def test_exports_full_result_set_in_one_request(
        self,
        session: SearchSession,
        exporter: ExportReconciler,
        client: ExportAwareClient,
        writer: MagicMock,
    ) -> None:
        await session.search(1)
        await session.go_to_page(2)

        path = await exporter.export_all()

        request = client.requests[-1]
        assert request.page == 1
        assert request.page_size == 55
        assert request.companies == ("Acme",)

        records, filename = writer.write.call_args.args
        assert len(records) == 55
        assert all(isinstance(r, ExportRecord) for r in records)
        assert filename.startswith("news_results_Acme_")
        assert filename.endswith(".xlsx")
        assert path == Path("/tmp") / filename
        assert exporter.last_path == path
        assert exporter.last_count == 55
        assert not exporter.exporting

    async def test_export_uses_current_query(
        self,
        session: SearchSession,
        exporter: ExportReconciler,
        client: ExportAwareClient,
    ) -> None:
        await session.search(1)
        session.add_company("Globex")
        session.toggle_domain("yahoo.com")

        await exporter.export_all()

        request = client.requests[-1]
        assert request.companies == ("Acme", "Globex")
        assert request.domains == ("yahoo.com",)

    async def test_export_does_not_touch_session_state(
        self,
        session: SearchSession,
        exporter: ExportReconciler,
    ) -> None:
        await session.search(1)
        displayed = session.result

        await exporter.export_all()

        assert session.result is displayed
        assert session.result.metadata.current_page == 1
        assert session.error is None

    async def test_failed_export_is_isolated_and_retryable(
        self,
        session: SearchSession,
        exporter: ExportReconciler,
        client: ExportAwareClient,
        writer: MagicMock,
    ) -> None:
        await session.search(1)
        displayed = session.result

        client.export_error = SearchError("Gateway timeout")
        assert await exporter.export_all() is None
        assert exporter.error is not None
        assert "Gateway timeout" in exporter.error
        assert session.error is None
        assert session.result is displayed
        writer.write.assert_not_called()

        client.export_error = None
        assert await exporter.export_all() is not None
        assert exporter.error is None

    async def test_write_failure_is_reported(
        self,
        session: SearchSession,
        exporter: ExportReconciler,
        writer: MagicMock,
    ) -> None:
        await session.search(1)
        writer.write.side_effect = PermissionError("read-only")

        assert await exporter.export_all() is None
        assert exporter.error is not None
        assert "read-only" in exporter.error
        assert exporter.last_path is None

    async def test_writer_error_is_reported(
        self,
        session: SearchSession,
        exporter: ExportReconciler,
        writer: MagicMock,
    ) -> None:
        await session.search(1)
        writer.write.side_effect = ExportError("bad cell")

        assert await exporter.export_all() is None
        assert exporter.error is not None
        assert "bad cell" in exporter.error
        assert not exporter.exporting

    async def test_control_characters_are_exported(
        self,
        session: SearchSession,
        client: ExportAwareClient,
        tmp_path: Path,
    ) -> None:
        article = Article(id="x", title="Acme Q3\x0b results", url="u", company="Acme")
        client.full = SearchResponse(
            articles=(article,), sources=(), total_pages=1, total_results=1
        )
        exporter = ExportReconciler(session, client, ExcelExportWriter(tmp_path), tz=UTC)
        await session.search(1)

        path = await exporter.export_all()

        assert path is not None
        assert exporter.error is None
        rows = list(load_workbook(path)["News Results"].iter_rows(values_only=True))
        assert rows[1][0] == "Acme Q3 results"

    async def test_overlapping_exports_stay_exporting_until_both_finish(
        self,
        session: SearchSession,
        client: ExportAwareClient,
        writer: MagicMock,
    ) -> None:
        gates = [asyncio.Event(), asyncio.Event()]
        calls = 0
        original = client.search

        async def gated_search(request: SearchRequest) -> SearchResponse:
            nonlocal calls
            if request.page_size > 20:
                gate = gates[calls]
                calls += 1
                await gate.wait()
            return await original(request)

        client.search = gated_search  # type: ignore[method-assign]
        exporter = ExportReconciler(session, client, writer, tz=UTC)
        await session.search(1)

        first = asyncio.create_task(exporter.export_all())
        second = asyncio.create_task(exporter.export_all())
        await asyncio.sleep(0)
        assert exporter.exporting

        gates[0].set()
        assert await first is not None
        assert exporter.exporting

        gates[1].set()
        assert await second is not None
        assert not exporter.exporting

    async def test_export_reflects_live_result_count(
        self,
        session: SearchSession,
        exporter: ExportReconciler,
        client: ExportAwareClient,
        writer: MagicMock,
    ) -> None:
        await session.search(1)
        client.full = make_page(1, 57, total_pages=1, total_results=57)

        await exporter.export_all()

        records, _ = writer.write.call_args.args
        assert len(records) == 57

    async def test_export_concurrent_with_search(
        self,
        session: SearchSession,
        exporter: ExportReconciler,
    ) -> None:
        await session.search(1)

        path, applied = await asyncio.gather(exporter.export_all(), session.go_to_page(2))

        assert path is not None
        assert applied is True
        assert session.result.metadata.current_page == 2
        assert exporter.last_count == 55

    async def test_export_logs_request(
        self,
        session: SearchSession,
        client: ExportAwareClient,
        writer: MagicMock,
        tmp_path: Path,
    ) -> None:
        run_logger = RunLogger(log_dir=tmp_path)
        run_logger.start_run(session.query)
        exporter = ExportReconciler(session, client, writer, run_logger=run_logger)
        await session.search(1)

        await exporter.export_all()

        record = run_logger.records[-1]
        assert record.kind == "export"
        assert record.outcome == RequestOutcome.OK
        assert record.article_count == 55


def test_to_export_record() -> None:
    record = to_export_record(make_article(3, company="Globex", source="AP"), UTC)
    assert record == ExportRecord(
        title="Article 1.3",
        description="Description 1.3",
        company="Globex",
        source="AP",
        published_date="Feb 01, 2026, 10:00 AM",
        url="https://example.com/1/3",
    )


def test_to_export_record_missing_fields() -> None:
    article = Article(id="x", title="t", url="u", company="Acme")
    record = to_export_record(article)
    assert record.source == "N/A"
    assert record.description == ""
    assert record.published_date == ""


def test_build_export_filename() -> None:
    now = datetime(2026, 1, 1, tzinfo=UTC)
    assert build_export_filename(("Acme", "Globex"), now) == (
        "news_results_Acme_Globex_1767225600000.xlsx"
    )


def test_build_export_filename_sanitizes_names() -> None:
    now = datetime(2026, 1, 1, tzinfo=UTC)
    name = build_export_filename(["AT&T", "Procter / Gamble"], now)
    assert "/" not in name
    assert name == "news_results_AT-T_Procter-Gamble_1767225600000.xlsx"


class TestExcelExportWriter:
    @pytest.fixture
    def records(self) -> list[ExportRecord]:
        return [to_export_record(make_article(i), UTC) for i in range(3)]

    def test_writes_workbook(self, tmp_path: Path, records: list[ExportRecord]) -> None:
        writer = ExcelExportWriter(tmp_path / "out")

        path = writer.write(records, "news.xlsx")

        assert path == tmp_path / "out" / "news.xlsx"
        workbook = load_workbook(path)
        assert workbook.sheetnames == ["News Results"]
        rows = list(workbook["News Results"].iter_rows(values_only=True))
        assert rows[0] == EXPORT_COLUMNS
        assert len(rows) == 4
        assert rows[1][0] == "Article 1.0"
        assert rows[1][3] == "Reuters"
        assert rows[1][5] == "https://example.com/1/0"

    def test_sets_column_widths(self, tmp_path: Path, records: list[ExportRecord]) -> None:
        writer = ExcelExportWriter(tmp_path)
        path = writer.write(records, "news.xlsx")

        sheet = load_workbook(path)["News Results"]
        assert sheet.column_dimensions["A"].width == 40
        assert sheet.column_dimensions["B"].width == 60
        assert sheet.column_dimensions["F"].width == 50

    def test_empty_records_write_header_only(self, tmp_path: Path) -> None:
        writer = ExcelExportWriter(tmp_path, sheet_name="Export")
        path = writer.write([], "empty.xlsx")

        rows = list(load_workbook(path)["Export"].iter_rows(values_only=True))
        assert rows == [EXPORT_COLUMNS]

    def test_strips_control_characters(self, tmp_path: Path) -> None:
        record = ExportRecord(
            title="Acme\x0b Q3\x00",
            description="ok\x1f",
            company="Acme",
            source="AP",
            published_date="",
            url="https://example.com/a1",
        )
        path = ExcelExportWriter(tmp_path).write([record], "news.xlsx")

        rows = list(load_workbook(path)["News Results"].iter_rows(values_only=True))
        assert rows[1][:2] == ("Acme Q3", "ok")
