"""Spreadsheet range to CSV export.

Runs the whole flow in order:

    load client secret -> acquire token (cached | interactive)
    -> fetch range -> print rows -> write CSV

Every step raises its ``SheetExportError`` subclass and nothing here
catches it, so the first failure ends the run. The only tolerated failure
is an unreadable token cache, which falls back to interactive
authorization.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from sheet_export.config import ExportConfig
from sheet_export.csv_writer import format_row, write_rows
from sheet_export.google import (
    GoogleOAuth,
    Token,
    TokenCache,
    TokenCacheError,
    load_client_config,
)
from sheet_export.sheets import SheetsClient

logger = logging.getLogger(__name__)


@dataclass
class ExportResult:
    """Outcome of a successful export."""

    rows: list[list[Any]]
    output_path: Path
    rows_written: int
    authorized_interactively: bool


def acquire_token(
    auth: GoogleOAuth,
    cache: TokenCache,
    prompt: Callable[[str], str] = input,
    open_browser: bool = False,
) -> tuple[Token, bool]:
    """Return a cached token, or authorize interactively and cache the result.

    Returns:
        The token and whether the interactive flow ran.

    Raises:
        InteractiveAuthError: If interactive authorization fails.
        TokenCacheError: If the new token cannot be saved.
    """
    try:
        return cache.load(), False
    except TokenCacheError as e:
        logger.info(f"No usable cached token ({e}); starting authorization")

    token = auth.authorize(prompt=prompt, open_browser=open_browser)
    print(f"Saving credential file to: {cache.path}")
    cache.save(token)
    return token, True


def print_rows(rows: list[list[Any]]) -> None:
    """Echo rows to the console."""
    if not rows:
        print("No data found.")
        return
    for row in rows:
        print(format_row(row))


def run_export(
    config: ExportConfig,
    prompt: Callable[[str], str] = input,
    open_browser: bool = False,
) -> ExportResult:
    """Fetch the configured range and write it to the configured CSV file.

    Args:
        config: Paths, spreadsheet and range for this run.
        prompt: Reads the authorization code when no cached token exists.
        open_browser: Open the consent URL in a browser as well as printing it.

    Returns:
        Summary of the export.

    Raises:
        SheetExportError: Subclass naming the step that failed.
    """
    client_config = load_client_config(config.secret_path)
    auth = GoogleOAuth(client_config, scopes=list(config.scopes))
    cache = TokenCache(config.token_path)

    token, interactive = acquire_token(auth, cache, prompt=prompt, open_browser=open_browser)

    client = SheetsClient(auth.build_service(token))
    rows = client.fetch_range(config.spreadsheet_id, config.range_a1)

    print_rows(rows)
    written = write_rows(config.output_path, rows)

    return ExportResult(
        rows=rows,
        output_path=config.output_path,
        rows_written=written,
        authorized_interactively=interactive,
    )
