"""Tests for the Sheets client."""

import httplib2
import pytest
from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError

from sheet_export.sheets import ApiCallError, SheetsClient


class TestFetchRange:
    """Test reading a range."""

    def test_returns_values(self, make_service):
        """Should return the rows from the values response."""
        service = make_service([["Alice", "A"], ["Bob", "B"]])
        client = SheetsClient(service)

        rows = client.fetch_range("sheet-id", "A3:F6")

        assert rows == [["Alice", "A"], ["Bob", "B"]]
        service.spreadsheets.return_value.values.return_value.get.assert_called_once_with(
            spreadsheetId="sheet-id",
            range="A3:F6",
            valueRenderOption="FORMATTED_VALUE",
        )

    def test_empty_range(self, make_service):
        """Should return an empty list when the response has no values."""
        client = SheetsClient(make_service(None))
        assert client.fetch_range("sheet-id", "A3:F6") == []

    def test_single_request_no_retry(self, make_service):
        """Should execute exactly once without retries."""
        service = make_service([["x"]])
        SheetsClient(service).fetch_range("sheet-id", "A1")

        execute = service.spreadsheets.return_value.values.return_value.get.return_value.execute
        execute.assert_called_once_with(num_retries=0)

    def test_http_error(self, make_service):
        """Should raise ApiCallError with the HTTP status."""
        service = make_service()
        resp = httplib2.Response({"status": 403})
        content = b'{"error": {"code": 403, "message": "The caller does not have permission"}}'
        execute = service.spreadsheets.return_value.values.return_value.get.return_value.execute
        execute.side_effect = HttpError(resp, content)

        with pytest.raises(ApiCallError, match="does not have permission") as exc_info:
            SheetsClient(service).fetch_range("sheet-id", "A3:F6")
        assert exc_info.value.status_code == 403
        assert exc_info.value.kind == "ApiCallError"

    def test_auth_error(self, make_service):
        """Should raise ApiCallError when credentials are rejected."""
        service = make_service()
        execute = service.spreadsheets.return_value.values.return_value.get.return_value.execute
        execute.side_effect = RefreshError("token expired")

        with pytest.raises(ApiCallError, match="token expired"):
            SheetsClient(service).fetch_range("sheet-id", "A3:F6")

    def test_transport_error(self, make_service):
        """Should raise ApiCallError on network failures."""
        service = make_service()
        execute = service.spreadsheets.return_value.values.return_value.get.return_value.execute
        execute.side_effect = ConnectionResetError("connection reset")

        with pytest.raises(ApiCallError, match="connection reset") as exc_info:
            SheetsClient(service).fetch_range("sheet-id", "A3:F6")
        assert exc_info.value.status_code is None
