"""Export a Google Sheets range to CSV using a cached OAuth token."""

from sheet_export.config import ExportConfig
from sheet_export.exceptions import DataShapeError, OutputWriteError, SheetExportError
from sheet_export.export import ExportResult, run_export

__all__ = [
    "ExportConfig",
    "ExportResult",
    "run_export",
    "SheetExportError",
    "DataShapeError",
    "OutputWriteError",
]
