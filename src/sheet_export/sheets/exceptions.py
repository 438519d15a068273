"""Google Sheets API exceptions."""

from sheet_export.exceptions import SheetExportError


class ApiCallError(SheetExportError):
    """Raised when the Sheets API call fails (transport, auth, quota)."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
