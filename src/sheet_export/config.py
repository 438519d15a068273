"""Export configuration.

Every path the export touches is an explicit field of ``ExportConfig``:

    secret_path   - OAuth client secret from Google Cloud Console
    cache_dir     - directory holding the cached OAuth token
    cache_file    - token file name inside cache_dir
    output_path   - CSV file written on each run

Defaults match a plain run from the working directory. ``from_env`` applies
``SHEET_EXPORT_*`` overrides, reading a ``.env`` file first if one exists.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import quote_plus

from sheet_export.exceptions import EnvFileError

DEFAULT_SECRET = Path("client_secret.json")
DEFAULT_CACHE_DIR = Path("~/.credentials")
DEFAULT_CACHE_FILE = quote_plus("sheets.googleapis.com-python-quickstart.json")
DEFAULT_OUTPUT = Path("gsheet_result.csv")
DEFAULT_SPREADSHEET_ID = "1zFjra05ZGfaVgKNorPdvAU-bh0QDkOn-CVoXjWtiw2w"
DEFAULT_RANGE = "A3:F6"
DEFAULT_SCOPES = ("sheets_readonly",)

ENV_PREFIX = "SHEET_EXPORT_"


def _read_env_overrides(env_path: Path) -> dict[str, str]:
    """Read ``SHEET_EXPORT_*`` assignments from a .env file.

    Other keys are ignored. Variables already set in the environment win
    over the file; surrounding quotes on values are dropped.

    Raises:
        EnvFileError: If the file exists but cannot be read as UTF-8 text.
    """
    if not env_path.is_file():
        return {}

    try:
        text = env_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise EnvFileError(str(env_path), str(e)) from e

    overrides = {}
    for line in text.splitlines():
        key, sep, value = line.strip().partition("=")
        key = key.removeprefix("export ").strip()
        if not sep or not key.startswith(ENV_PREFIX):
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        if key not in os.environ:
            overrides[key] = value
    return overrides


@dataclass(frozen=True)
class ExportConfig:
    """Resolved settings for one export run."""

    secret_path: Path = DEFAULT_SECRET
    cache_dir: Path = DEFAULT_CACHE_DIR
    cache_file: str = DEFAULT_CACHE_FILE
    output_path: Path = DEFAULT_OUTPUT
    spreadsheet_id: str = DEFAULT_SPREADSHEET_ID
    range_a1: str = DEFAULT_RANGE
    scopes: tuple[str, ...] = field(default=DEFAULT_SCOPES)

    @property
    def token_path(self) -> Path:
        """Full path of the token cache file."""
        return self.cache_dir.expanduser() / self.cache_file

    @classmethod
    def from_env(cls, env_file: Path | None = Path(".env")) -> ExportConfig:
        """Build a config from defaults and ``SHEET_EXPORT_*`` variables.

        Raises:
            EnvFileError: If ``env_file`` exists but cannot be read.
        """
        env = dict(os.environ)
        if env_file is not None:
            env.update(_read_env_overrides(env_file))

        def get(name: str, default):
            return env.get(ENV_PREFIX + name) or default

        return cls(
            secret_path=Path(get("SECRET", DEFAULT_SECRET)),
            cache_dir=Path(get("CACHE_DIR", DEFAULT_CACHE_DIR)),
            output_path=Path(get("OUTPUT", DEFAULT_OUTPUT)),
            spreadsheet_id=get("SPREADSHEET_ID", DEFAULT_SPREADSHEET_ID),
            range_a1=get("RANGE", DEFAULT_RANGE),
        )

    def status(self) -> dict:
        """Summarize where the config points and what exists there."""
        return {
            "secret_path": str(self.secret_path),
            "secret": self.secret_path.exists(),
            "token_path": str(self.token_path),
            "token": self.token_path.exists(),
            "output_path": str(self.output_path),
            "spreadsheet_id": self.spreadsheet_id,
            "range": self.range_a1,
        }
