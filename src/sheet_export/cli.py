"""CLI for sheet-export.

Usage:
    sheet-export                       # Export the configured range to CSV
    sheet-export export                # Same as above
    sheet-export login                 # Authorize and cache a token only
    sheet-export status                # Show config and cached token status
    sheet-export logout                # Delete the cached token

Options (before the command):
    --secret PATH          OAuth client secret (default: client_secret.json)
    --cache-dir PATH       Token cache directory (default: ~/.credentials)
    --output PATH          CSV output file (default: gsheet_result.csv)
    --spreadsheet-id ID    Spreadsheet to read
    --range A1             Range to read (default: A3:F6)
    --browser              Also open the authorization URL in a browser
    -v, --verbose          Debug logging
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from sheet_export.config import ExportConfig
from sheet_export.exceptions import SheetExportError

logger = logging.getLogger(__name__)


def cmd_export(config: ExportConfig, open_browser: bool = False) -> int:
    """Run the export."""
    from sheet_export.export import run_export

    result = run_export(config, open_browser=open_browser)
    print(f"\nWrote {result.rows_written} rows to {result.output_path}")
    return 0


def cmd_login(config: ExportConfig, open_browser: bool = False, force: bool = False) -> int:
    """Authorize and cache a token without calling the Sheets API."""
    from sheet_export.export import acquire_token
    from sheet_export.google import GoogleOAuth, TokenCache, load_client_config

    client_config = load_client_config(config.secret_path)
    auth = GoogleOAuth(client_config, scopes=list(config.scopes))
    cache = TokenCache(config.token_path)

    if force:
        cache.clear()

    _, interactive = acquire_token(auth, cache, open_browser=open_browser)
    if interactive:
        print("\nToken saved successfully!")
    else:
        print(f"Token already cached at {cache.path}")
        print("Run 'sheet-export login --force' to authorize again")
    return 0


def cmd_status(config: ExportConfig) -> int:
    """Show configuration and cached token status."""
    from sheet_export.google import TokenCache, TokenCacheError

    status = config.status()

    print("=" * 60)
    print("SHEET-EXPORT STATUS")
    print("=" * 60)
    print()
    print(f"  client secret:  {'[x]' if status['secret'] else '[ ]'} {status['secret_path']}")
    print(f"  token cache:    {'[x]' if status['token'] else '[ ]'} {status['token_path']}")
    print(f"  output:         {status['output_path']}")
    print(f"  spreadsheet:    {status['spreadsheet_id']}")
    print(f"  range:          {status['range']}")
    print()

    if not status["token"]:
        print("No token found - run 'sheet-export login'")
        return 1

    try:
        token = TokenCache(config.token_path).load()
    except TokenCacheError as e:
        print(f"Token unreadable: {e}")
        return 1

    print(f"Token type    : {token.token_type}")
    print(f"Refresh token : {'yes' if token.refresh_token else 'no'}")
    print(f"Expiry        : {token.expiry.isoformat() if token.expiry else 'unknown'}")
    return 0


def cmd_logout(config: ExportConfig) -> int:
    """Delete the cached token."""
    from sheet_export.google import TokenCache

    if TokenCache(config.token_path).clear():
        print("Token cache cleared")
    else:
        print("No cached token")
    return 0


def build_config(args: argparse.Namespace) -> ExportConfig:
    """Apply command-line overrides on top of the environment config."""
    config = ExportConfig.from_env()
    overrides = {}
    if args.secret:
        overrides["secret_path"] = Path(args.secret)
    if args.cache_dir:
        overrides["cache_dir"] = Path(args.cache_dir)
    if args.output:
        overrides["output_path"] = Path(args.output)
    if args.spreadsheet_id:
        overrides["spreadsheet_id"] = args.spreadsheet_id
    if args.range:
        overrides["range_a1"] = args.range
    return dataclasses.replace(config, **overrides)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sheet-export",
        description="Export a Google Sheets range to CSV",
    )
    parser.add_argument("--secret", help="Path to OAuth client secret JSON")
    parser.add_argument("--cache-dir", help="Directory for the cached OAuth token")
    parser.add_argument("--output", help="CSV output path")
    parser.add_argument("--spreadsheet-id", help="Spreadsheet ID to read")
    parser.add_argument("--range", help="Range in A1 notation")
    parser.add_argument(
        "--browser",
        action="store_true",
        help="Open the authorization URL in a browser",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command")
    subparsers.add_parser("export", help="Export the range to CSV (default)")
    login_parser = subparsers.add_parser("login", help="Authorize and cache a token")
    login_parser.add_argument(
        "--force",
        action="store_true",
        help="Discard any cached token first",
    )
    subparsers.add_parser("status", help="Show config and token status")
    subparsers.add_parser("logout", help="Delete the cached token")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = build_config(args)
        if args.command == "login":
            return cmd_login(config, args.browser, args.force)
        if args.command == "status":
            return cmd_status(config)
        if args.command == "logout":
            return cmd_logout(config)
        return cmd_export(config, args.browser)
    except SheetExportError as e:
        logger.debug(f"{e.kind} raised", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
