"""Google authentication exceptions."""

from sheet_export.exceptions import SheetExportError


class GoogleAuthError(SheetExportError):
    """Base exception for Google authentication errors."""

    pass


class ConfigReadError(GoogleAuthError):
    """Raised when the OAuth client-secret file is missing or invalid."""

    def __init__(self, path: str, reason: str | None = None):
        self.path = path
        if reason is None:
            reason = (
                "file not found. "
                "Please download OAuth credentials from Google Cloud Console."
            )
        super().__init__(f"Unable to read client secret file {path}: {reason}")


class TokenCacheError(GoogleAuthError):
    """Raised when the token cache cannot be read or written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Token cache {path}: {reason}")


class TokenNotFoundError(TokenCacheError):
    """Raised when the token cache file is missing or unreadable."""

    pass


class TokenParseError(TokenCacheError):
    """Raised when the token cache file does not hold a token."""

    pass


class InteractiveAuthError(GoogleAuthError):
    """Raised when the authorization code cannot be read or exchanged."""

    pass
