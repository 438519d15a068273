"""Google Sheets API client implementation."""

from __future__ import annotations

import logging
from typing import Any

import httplib2
from google.auth import exceptions as google_auth_exceptions
from googleapiclient.errors import HttpError

from sheet_export.sheets.exceptions import ApiCallError

logger = logging.getLogger(__name__)


class SheetsClient:
    """Read-only Google Sheets client.

    Wraps a ``sheets v4`` discovery service. Each call issues exactly one
    request; failures are raised, never retried.

    Usage:
        auth = GoogleOAuth(load_client_config("client_secret.json"))
        client = SheetsClient(auth.build_service(token))
        rows = client.fetch_range(spreadsheet_id, "A3:F6")
    """

    def __init__(self, service: Any) -> None:
        """Initialize Sheets client.

        Args:
            service: Sheets API service from ``googleapiclient.discovery.build``.
        """
        self._service = service

    def fetch_range(
        self,
        spreadsheet_id: str,
        range_a1: str,
        value_render_option: str = "FORMATTED_VALUE",
    ) -> list[list[Any]]:
        """Read values from a range.

        Args:
            spreadsheet_id: Spreadsheet ID.
            range_a1: A1 notation (e.g., "Sheet1!A1:C10").
            value_render_option: How to render values ("FORMATTED_VALUE", "UNFORMATTED_VALUE", "FORMULA").

        Returns:
            2D list of cell values; empty when the range holds no data.

        Raises:
            ApiCallError: On any transport, authorization or API error.
        """
        logger.info(f"Fetching {range_a1} from spreadsheet {spreadsheet_id}")
        try:
            result = (
                self._service.spreadsheets()
                .values()
                .get(
                    spreadsheetId=spreadsheet_id,
                    range=range_a1,
                    valueRenderOption=value_render_option,
                )
                .execute(num_retries=0)
            )
        except HttpError as e:
            status = getattr(e.resp, "status", None)
            raise ApiCallError(
                f"Unable to retrieve data from sheet: {e.reason or e}",
                status_code=int(status) if status else None,
            ) from e
        except google_auth_exceptions.GoogleAuthError as e:
            raise ApiCallError(f"Unable to retrieve data from sheet: {e}") from e
        except (httplib2.HttpLib2Error, OSError) as e:
            raise ApiCallError(f"Unable to retrieve data from sheet: {e}") from e

        values = result.get("values", [])
        logger.debug(f"Range {result.get('range', range_a1)} returned {len(values)} rows")
        return values
