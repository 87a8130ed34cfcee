"""Run logger for recording search and export requests to JSON files."""

import dataclasses
import uuid
from datetime import UTC, datetime
from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from news_tracker.data import SearchRequest


class RequestOutcome(StrEnum):
    """How a request to the search API ended."""

    OK = "ok"
    ERROR = "error"
    STALE = "stale"
    REJECTED = "rejected"


class RequestRecord(BaseModel):
    """Record of a single request issued by the session or the exporter."""

    kind: str
    request: dict[str, Any] | None = None
    outcome: RequestOutcome
    article_count: int = 0
    error: str | None = None
    timestamp: str = ""
    duration_seconds: float = 0.0


class RunRecord(BaseModel):
    """Record of a complete CLI run."""

    run_id: str
    query: dict[str, Any]
    started_at: str
    completed_at: str | None = None
    requests: list[RequestRecord] = []
    export_path: str | None = None


def _serialize(obj: Any) -> Any:
    """Serialize an object to JSON-compatible format.

    Handles dataclasses, frozensets, tuples, Pydantic models, and primitives.
    Search requests are recorded in their wire form.
    """
    if obj is None:
        return None
    if isinstance(obj, SearchRequest):
        return obj.to_payload()
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: _serialize(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, BaseModel):
        return obj.model_dump()
    if isinstance(obj, frozenset | set):
        return sorted(_serialize(item) for item in obj)
    if isinstance(obj, list | tuple):
        return [_serialize(item) for item in obj]
    if isinstance(obj, dict):
        return {k: _serialize(v) for k, v in obj.items()}
    if isinstance(obj, Path):
        return str(obj)
    return obj


class RunLogger:
    """Accumulates request records and writes a JSON log file per run.

    When ``enabled=False``, all methods are no-ops.

    Args:
        log_dir: Directory to write JSON log files.
        enabled: If False, all methods become no-ops.
    """

    def __init__(self, log_dir: Path, *, enabled: bool = True) -> None:
        self._log_dir = log_dir
        self._enabled = enabled
        self._record: RunRecord | None = None
        self._last_log_path: Path | None = None

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def last_log_path(self) -> Path | None:
        """Path to the last written log file, or None."""
        return self._last_log_path

    @property
    def records(self) -> list[RequestRecord]:
        """Requests recorded in the current run."""
        return list(self._record.requests) if self._record else []

    def start_run(self, query: Any) -> None:
        """Initialize a new run record.

        Args:
            query: The query state the run starts from.
        """
        if not self._enabled:
            return

        self._record = RunRecord(
            run_id=str(uuid.uuid4()),
            query=_serialize(query),
            started_at=datetime.now(tz=UTC).isoformat(),
        )

    def log_request(
        self,
        kind: str,
        request: SearchRequest | None,
        outcome: RequestOutcome,
        *,
        article_count: int = 0,
        error: str | None = None,
        duration_seconds: float = 0.0,
    ) -> None:
        """Append a request record to the current run.

        Args:
            kind: "search" or "export".
            request: The request sent, or None if it was rejected before sending.
            outcome: How the request ended.
            article_count: Articles received.
            error: Error message for failed requests.
            duration_seconds: Wall-clock time spent awaiting the response.
        """
        if not self._enabled or self._record is None:
            return

        self._record.requests.append(
            RequestRecord(
                kind=kind,
                request=_serialize(request),
                outcome=outcome,
                article_count=article_count,
                error=error,
                timestamp=datetime.now(tz=UTC).isoformat(),
                duration_seconds=round(duration_seconds, 4),
            )
        )

    def finish_run(self, export_path: Path | None = None) -> Path | None:
        """Write the run record to a JSON file.

        Args:
            export_path: Spreadsheet written during the run, if any.

        Returns:
            Path to the written JSON file, or None if logging is disabled.
        """
        if not self._enabled or self._record is None:
            return None

        self._record.completed_at = datetime.now(tz=UTC).isoformat()
        self._record.export_path = str(export_path) if export_path else None

        self._log_dir.mkdir(parents=True, exist_ok=True)

        # run_2026-02-12T14-30-00.json
        ts = self._record.started_at.replace(":", "-")
        ts = ts.split(".")[0].split("+")[0]
        filepath = self._log_dir / f"run_{ts}.json"

        filepath.write_text(self._record.model_dump_json(indent=2))
        self._last_log_path = filepath
        return filepath
