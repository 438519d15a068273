"""On-disk cache for the OAuth token.

The cache file holds one JSON object:

    {
      "access_token": "...",
      "token_type": "Bearer",
      "refresh_token": "...",
      "expiry": "2024-01-01T00:00:00+00:00"
    }

Files written by ``google.oauth2.credentials.Credentials.to_json()`` (which
use ``token`` and ``type``) are accepted as well.

A token read from the cache is returned as-is: expiry is not checked.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from sheet_export.google.exceptions import (
    TokenCacheError,
    TokenNotFoundError,
    TokenParseError,
)

logger = logging.getLogger(__name__)

DIR_MODE = 0o700
FILE_MODE = 0o600


@dataclass(frozen=True)
class Token:
    """OAuth2 token as obtained from the token endpoint."""

    access_token: str
    token_type: str = "Bearer"
    refresh_token: str | None = None
    expiry: datetime | None = None

    @classmethod
    def from_authlib(cls, token: dict[str, Any]) -> Token:
        """Build a Token from an Authlib token dict."""
        expires_at = token.get("expires_at")
        expiry = None
        if expires_at:
            expiry = datetime.fromtimestamp(float(expires_at), tz=timezone.utc)

        return cls(
            access_token=token["access_token"],
            token_type=token.get("token_type") or "Bearer",
            refresh_token=token.get("refresh_token"),
            expiry=expiry,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Token:
        """Build a Token from its cached JSON form.

        Raises:
            ValueError: If the access token is missing or a field has the wrong type.
        """
        access_token = data.get("access_token", data.get("token"))
        if not isinstance(access_token, str) or not access_token:
            raise ValueError("missing access token")

        token_type = data.get("token_type", data.get("type")) or "Bearer"
        refresh_token = data.get("refresh_token")
        if not isinstance(token_type, str):
            raise ValueError("token_type must be a string")
        if refresh_token is not None and not isinstance(refresh_token, str):
            raise ValueError("refresh_token must be a string")

        expiry = data.get("expiry")
        if expiry and isinstance(expiry, str):
            expiry = datetime.fromisoformat(expiry.replace("Z", "+00:00"))
        elif isinstance(expiry, (int, float)):
            try:
                expiry = datetime.fromtimestamp(expiry, tz=timezone.utc)
            except (OverflowError, OSError, ValueError) as e:
                raise ValueError(f"expiry out of range: {expiry}") from e
        else:
            expiry = None

        return cls(
            access_token=access_token,
            token_type=token_type,
            refresh_token=refresh_token or None,
            expiry=expiry,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the cached JSON form."""
        return {
            "access_token": self.access_token,
            "token_type": self.token_type,
            "refresh_token": self.refresh_token,
            "expiry": self.expiry.isoformat() if self.expiry else None,
        }


class TokenCache:
    """Read and write the OAuth token cache file.

    Example:
        >>> cache = TokenCache(Path("~/.credentials/token.json").expanduser())
        >>> try:
        ...     token = cache.load()
        ... except TokenCacheError:
        ...     token = None
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> Token:
        """Load the cached token.

        Returns:
            The cached token, without any expiry validation.

        Raises:
            TokenNotFoundError: If the file is missing or unreadable.
            TokenParseError: If the file does not contain a valid token.
        """
        logger.debug(f"Reading token cache {self.path}")
        try:
            with open(self.path, "rb") as f:
                raw = f.read()
        except OSError as e:
            raise TokenNotFoundError(str(self.path), e.strerror or str(e)) from e

        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            token = Token.from_dict(data)
        except ValueError as e:
            raise TokenParseError(str(self.path), f"invalid token data ({e})") from e

        logger.info(f"Loaded cached token from {self.path}")
        return token

    def save(self, token: Token) -> None:
        """Overwrite the cache file with ``token``.

        Creates the cache directory (owner-only) if needed; the file itself
        is created owner read/write only.

        Raises:
            TokenCacheError: If the directory or file cannot be written.
        """
        try:
            self.path.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
            with os.fdopen(fd, "w") as f:
                json.dump(token.to_dict(), f, indent=2)
                f.write("\n")
        except OSError as e:
            raise TokenCacheError(str(self.path), f"cannot save token ({e})") from e

        logger.info(f"Token saved to {self.path}")

    def clear(self) -> bool:
        """Delete the cache file.

        Returns:
            True if a file was removed.
        """
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise TokenCacheError(str(self.path), f"cannot delete token ({e})") from e
        logger.info(f"Token cache {self.path} removed")
        return True
