from news_tracker.export.base import ExportWriter
from news_tracker.export.excel import DEFAULT_COLUMN_WIDTHS, DEFAULT_SHEET_NAME, ExcelExportWriter
from news_tracker.export.reconciler import (
    EXPORT_FAILED_MESSAGE,
    ExportReconciler,
    build_export_filename,
    to_export_record,
)

__all__ = [
    "DEFAULT_COLUMN_WIDTHS",
    "DEFAULT_SHEET_NAME",
    "EXPORT_FAILED_MESSAGE",
    "ExcelExportWriter",
    "ExportReconciler",
    "ExportWriter",
    "build_export_filename",
    "to_export_record",
]
