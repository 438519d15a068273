"""Shared test fixtures for sheet-export."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from sheet_export.config import ExportConfig
from sheet_export.google import Token


@pytest.fixture
def mock_credentials(tmp_path: Path) -> Path:
    """Create a mock client-secret file."""
    creds = {
        "installed": {
            "client_id": "test-client-id.apps.googleusercontent.com",
            "client_secret": "test-client-secret",
            "auth_uri": "https://accounts.google.com/o/oauth2/auth",
            "token_uri": "https://oauth2.googleapis.com/token",
            "redirect_uris": ["urn:ietf:wg:oauth:2.0:oob", "http://localhost"],
        }
    }
    creds_path = tmp_path / "client_secret.json"
    with open(creds_path, "w") as f:
        json.dump(creds, f)
    return creds_path


@pytest.fixture
def export_config(tmp_path: Path, mock_credentials: Path) -> ExportConfig:
    """Config with every path inside tmp_path."""
    return ExportConfig(
        secret_path=mock_credentials,
        cache_dir=tmp_path / "credentials",
        output_path=tmp_path / "gsheet_result.csv",
        spreadsheet_id="test-spreadsheet-id",
        range_a1="A3:F6",
    )


@pytest.fixture
def cached_token(export_config: ExportConfig) -> Path:
    """Write a valid token to the config's cache path."""
    token = {
        "access_token": "cached-access-token",
        "token_type": "Bearer",
        "refresh_token": "cached-refresh-token",
        "expiry": "2001-01-01T00:00:00Z",
    }
    path = export_config.token_path
    path.parent.mkdir(parents=True)
    with open(path, "w") as f:
        json.dump(token, f)
    return path


@pytest.fixture
def fresh_token() -> Token:
    return Token(access_token="fresh-access-token", refresh_token="fresh-refresh-token")


def _build_service(rows: list[list] | None = None) -> MagicMock:
    service = MagicMock()
    response = {"range": "Sheet1!A3:F6", "majorDimension": "ROWS"}
    if rows is not None:
        response["values"] = rows
    service.spreadsheets.return_value.values.return_value.get.return_value.execute.return_value = (
        response
    )
    return service


@pytest.fixture
def make_service():
    """Factory for mock Sheets services whose values().get() returns the given rows."""
    return _build_service
