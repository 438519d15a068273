"""Google Sheets API client.

Usage:
    from sheet_export.sheets import SheetsClient

    client = SheetsClient(service)
    values = client.fetch_range(spreadsheet_id, "Sheet1!A1:C10")
"""

from __future__ import annotations

from sheet_export.sheets.client import SheetsClient
from sheet_export.sheets.exceptions import ApiCallError

__all__ = ["SheetsClient", "ApiCallError"]
