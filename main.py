#!/usr/bin/env python
"""CLI for News Tracker."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, field_validator

from news_tracker import (
    SearchSession,
    format_published_at,
    needs_search_fallback,
    search_fallback_url,
)
from news_tracker.config import create_from_config, get_default_config_path, load_config
from news_tracker.data import PageTokenKind

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    companies: list[str]
    config: Path
    time_range: int | None = None
    sources: list[str] = []
    domains: list[str] = []
    page: int = 1
    export: bool = False
    output_dir: str | None = None
    log: bool = False
    log_dir: str = "logs"

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v

    @field_validator("page")
    @classmethod
    def page_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Page must be 1 or greater, got {v}")
        return v


def render_page(session: SearchSession) -> None:
    """Log the displayed articles and the pagination control."""
    metadata = session.result.metadata
    articles = session.filtered_articles

    logger.info(
        f"\nPage {metadata.current_page} of {metadata.total_pages} "
        f"({metadata.total_results} results, showing {len(articles)}):\n"
    )
    for i, article in enumerate(articles, 1):
        logger.info(f"{i}. {article.title}")
        logger.info(f"   Company: {article.company}")
        logger.info(f"   Source: {article.source_name or 'N/A'}")
        logger.info(f"   URL: {article.url}")
        if needs_search_fallback(article):
            logger.info(f"   Search: {search_fallback_url(article)}")
        if article.published_at:
            logger.info(f"   Published: {format_published_at(article.published_at)}")

    if session.result.sources:
        logger.info(f"\nSources: {', '.join(session.result.sources)}")

    window = " ".join(
        f"[{t.label}]" if t.value == metadata.current_page and t.kind is PageTokenKind.NUMBER
        else t.label
        for t in session.page_window
    )
    if window:
        logger.info(f"Pages: {window}")


async def open_requested_page(session: SearchSession, page: int) -> None:
    """Move from the first page to the page asked for on the command line."""
    if page == 1:
        return
    total_pages = session.result.metadata.total_pages
    if page > total_pages:
        logger.warning(f"Ignoring page {page}; results have {total_pages} pages")
        return
    await session.go_to_page(page)


async def run(args: CLIArgs) -> int:
    """Run a search (and optionally an export) with the given configuration.

    Args:
        args: Validated CLI arguments.

    Returns:
        Process exit code.
    """
    config = load_config(args.config)
    session, exporter, run_logger = create_from_config(
        config,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir if args.log_dir != "logs" else None,
        output_dir_override=args.output_dir,
    )

    for company in args.companies:
        session.add_company(company)
    if args.time_range is not None:
        if args.time_range not in config.search.time_ranges:
            logger.warning(
                f"Ignoring time range {args.time_range}; options are {config.search.time_ranges}"
            )
        session.set_time_range(args.time_range)
    for source in args.sources:
        session.toggle_source(source)

    known_domains = {d.value for d in config.search.domains}
    for domain in args.domains:
        if domain not in known_domains:
            logger.warning(f"Ignoring unknown domain {domain}; options are {sorted(known_domains)}")
            continue
        session.toggle_domain(domain)

    if not session.can_search:
        logger.error("Add at least one company to search")
        return 1

    if run_logger:
        run_logger.start_run(session.query)

    logger.info(f"Tracking: {', '.join(session.query.companies)}")
    logger.info(f"Time range: last {session.query.time_range_days} days")

    await session.search(1)
    if session.error is None:
        await open_requested_page(session, args.page)

    exit_code = 0
    if session.error:
        logger.error(f"Error: {session.error}")
        exit_code = 1
    else:
        render_page(session)

    export_path = None
    if args.export:
        export_path = await exporter.export_all()
        if export_path:
            logger.info(f"\nExported {exporter.last_count} articles to {export_path}")
        elif exporter.error:
            logger.error(exporter.error)
            exit_code = 1
        else:
            logger.info("\nNothing to export")

    if run_logger:
        run_logger.finish_run(export_path)
        if run_logger.last_log_path:
            logger.info(f"\nRun log written to: {run_logger.last_log_path}")

    return exit_code


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Track news coverage for a set of companies.")
    parser.add_argument(
        "companies",
        nargs="+",
        help="Company names to track",
    )
    parser.add_argument(
        "--time-range",
        "-t",
        type=int,
        default=None,
        help="Look-back window in days (default: from config)",
    )
    parser.add_argument(
        "--source",
        "-s",
        dest="sources",
        action="append",
        default=[],
        help="Only show articles from this source (repeatable)",
    )
    parser.add_argument(
        "--domain",
        "-d",
        dest="domains",
        action="append",
        default=[],
        help="Restrict the search to this domain, e.g. yahoo.com (repeatable)",
    )
    parser.add_argument(
        "--page",
        "-p",
        type=int,
        default=1,
        help="Page of results to show (default: 1)",
    )
    parser.add_argument(
        "--export",
        "-e",
        action="store_true",
        default=False,
        help="Export every matching article to an .xlsx file",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory for exported spreadsheets (default: from config)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Record every API request to a JSON file",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs/)",
    )

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()
    config_path: Path = ns.config if ns.config else get_default_config_path()

    try:
        args = CLIArgs(
            companies=ns.companies,
            config=config_path,
            time_range=ns.time_range,
            sources=ns.sources,
            domains=ns.domains,
            page=ns.page,
            export=ns.export,
            output_dir=ns.output_dir,
            log=ns.log,
            log_dir=ns.log_dir,
        )
    except Exception as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        sys.exit(asyncio.run(run(args)))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
