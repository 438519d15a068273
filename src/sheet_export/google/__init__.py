"""Google OAuth authentication and token caching."""

from sheet_export.google.exceptions import (
    ConfigReadError,
    GoogleAuthError,
    InteractiveAuthError,
    TokenCacheError,
    TokenNotFoundError,
    TokenParseError,
)
from sheet_export.google.oauth import ClientConfig, GoogleOAuth, load_client_config
from sheet_export.google.token_cache import Token, TokenCache

__all__ = [
    "ClientConfig",
    "GoogleOAuth",
    "load_client_config",
    "Token",
    "TokenCache",
    "GoogleAuthError",
    "ConfigReadError",
    "TokenCacheError",
    "TokenNotFoundError",
    "TokenParseError",
    "InteractiveAuthError",
]
