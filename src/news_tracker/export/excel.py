"""Spreadsheet export using pandas and openpyxl."""

import logging
from pathlib import Path

import pandas as pd
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import IllegalCharacterError

from news_tracker.data import EXPORT_COLUMNS, ExportRecord
from news_tracker.errors import ExportError

logger = logging.getLogger(__name__)

DEFAULT_SHEET_NAME = "News Results"
# Title, Description, Company, Source, PublishedDate, URL
DEFAULT_COLUMN_WIDTHS: tuple[int, ...] = (40, 60, 20, 20, 20, 50)


class ExcelExportWriter:
    """Write export records to an ``.xlsx`` workbook with a single sheet.

    Args:
        output_dir: Directory the workbook is written to (created if missing).
        sheet_name: Worksheet title.
        column_widths: Character widths for the columns, in column order.
    """

    def __init__(
        self,
        output_dir: Path | str = ".",
        *,
        sheet_name: str = DEFAULT_SHEET_NAME,
        column_widths: tuple[int, ...] = DEFAULT_COLUMN_WIDTHS,
    ) -> None:
        self._output_dir = Path(output_dir)
        self._sheet_name = sheet_name
        self._column_widths = column_widths

    def write(self, records: list[ExportRecord], filename: str) -> Path:
        """Write the records to ``output_dir / filename``.

        Control characters that worksheets cannot hold are stripped from
        every cell.

        Raises:
            OSError: If the file cannot be written.
            ExportError: If the records cannot be stored in a worksheet.
        """
        self._output_dir.mkdir(parents=True, exist_ok=True)
        path = self._output_dir / filename

        rows = [{k: _clean_cell(v) for k, v in r.as_row().items()} for r in records]
        df = pd.DataFrame(rows, columns=list(EXPORT_COLUMNS))
        try:
            with pd.ExcelWriter(path, engine="openpyxl") as writer:
                df.to_excel(writer, sheet_name=self._sheet_name, index=False)
                worksheet = writer.sheets[self._sheet_name]
                for i, width in enumerate(self._column_widths, start=1):
                    worksheet.column_dimensions[get_column_letter(i)].width = width
        except (IllegalCharacterError, ValueError) as e:
            raise ExportError(f"Could not write {path.name}: {e}") from e

        logger.info(f"Wrote {len(records)} rows to {path}")
        return path


def _clean_cell(value: str) -> str:
    return ILLEGAL_CHARACTERS_RE.sub("", value)
