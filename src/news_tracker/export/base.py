from pathlib import Path
from typing import Protocol

from news_tracker.data import ExportRecord


class ExportWriter(Protocol):
    """Interface for turning export records into a downloadable file."""

    def write(self, records: list[ExportRecord], filename: str) -> Path:
        """Write the records to a single file.

        Args:
            records: Rows in display order.
            filename: Suggested file name (no directory).

        Returns:
            Path of the written file.

        Raises:
            ExportError: If the records cannot be turned into a file.
            OSError: If the file cannot be written.
        """
        ...
