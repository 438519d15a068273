"""Google OAuth authorization-code flow using Authlib.

This module provides the interactive half of authentication:
- Loading the OAuth client secret downloaded from Google Cloud Console
- Building the consent URL and exchanging the pasted authorization code
- Wrapping a token in Google credentials for the API client libraries

Tokens are never refreshed here. A token handed to ``get_credentials`` is
used as-is until the API rejects it.
"""

from __future__ import annotations

import json
import logging
import webbrowser
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import requests
from authlib.integrations.requests_client import OAuth2Session
from authlib.oauth2 import OAuth2Error
from google.oauth2.credentials import Credentials as GoogleCredentials
from googleapiclient.discovery import build

from sheet_export.google.exceptions import ConfigReadError, InteractiveAuthError
from sheet_export.google.token_cache import Token

logger = logging.getLogger(__name__)


SCOPES = {
    "sheets_readonly": "https://www.googleapis.com/auth/spreadsheets.readonly",
}

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
OOB_REDIRECT_URI = "urn:ietf:wg:oauth:2.0:oob"

# Fixed state value; the code is pasted by hand so there is no callback to verify.
STATE = "state-token"


def resolve_scopes(scopes: list[str]) -> list[str]:
    """Resolve scope names to full URLs."""
    resolved = []
    for scope in scopes:
        if scope.startswith("https://"):
            resolved.append(scope)
        elif scope in SCOPES:
            resolved.append(SCOPES[scope])
        else:
            raise ValueError(
                f"Unknown scope: {scope}. Use full URL or one of: {list(SCOPES.keys())}"
            )
    return resolved


@dataclass(frozen=True)
class ClientConfig:
    """OAuth client credentials and endpoints."""

    client_id: str
    client_secret: str
    auth_uri: str = AUTHORIZE_URL
    token_uri: str = TOKEN_URL
    redirect_uri: str = OOB_REDIRECT_URI


def load_client_config(path: str | Path) -> ClientConfig:
    """Load OAuth client credentials from a client-secret file.

    Args:
        path: Path to the JSON file downloaded from Google Cloud Console.

    Returns:
        Parsed client configuration.

    Raises:
        ConfigReadError: If the file is missing, unreadable or malformed.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigReadError(str(path))

    try:
        with open(path, "rb") as f:
            creds = json.load(f)
    except OSError as e:
        raise ConfigReadError(str(path), e.strerror or str(e)) from e
    except ValueError as e:
        raise ConfigReadError(str(path), f"invalid JSON ({e})") from e

    # Handle both web and installed app credential formats
    if not isinstance(creds, dict):
        raise ConfigReadError(str(path), "expected a JSON object")
    if "installed" in creds:
        app_creds = creds["installed"]
    elif "web" in creds:
        app_creds = creds["web"]
    else:
        raise ConfigReadError(str(path), "expected 'installed' or 'web' key")
    if not isinstance(app_creds, dict):
        raise ConfigReadError(str(path), "client entry must be a JSON object")

    client_id = app_creds.get("client_id")
    client_secret = app_creds.get("client_secret")
    if not client_id or not client_secret:
        raise ConfigReadError(str(path), "missing client_id or client_secret")

    redirect_uris = app_creds.get("redirect_uris") or [OOB_REDIRECT_URI]
    if not isinstance(redirect_uris, list) or not isinstance(redirect_uris[0], str):
        raise ConfigReadError(str(path), "redirect_uris must be a list of strings")

    return ClientConfig(
        client_id=client_id,
        client_secret=client_secret,
        auth_uri=app_creds.get("auth_uri", AUTHORIZE_URL),
        token_uri=app_creds.get("token_uri", TOKEN_URL),
        redirect_uri=redirect_uris[0],
    )


class GoogleOAuth:
    """Google OAuth authorization-code flow using Authlib.

    Example:
        >>> config = load_client_config("client_secret.json")
        >>> auth = GoogleOAuth(config, scopes=["sheets_readonly"])
        >>> token = auth.authorize()
        >>> service = auth.build_service(token)
    """

    def __init__(self, config: ClientConfig, scopes: list[str] | None = None):
        """Initialize Google OAuth.

        Args:
            config: OAuth client credentials.
            scopes: List of scope names (e.g., ["sheets_readonly"]) or full URLs.
                   If None, defaults to ["sheets_readonly"].
        """
        self.config = config
        self.required_scopes = resolve_scopes(scopes or ["sheets_readonly"])

        self.session = OAuth2Session(
            client_id=config.client_id,
            client_secret=config.client_secret,
            scope=" ".join(self.required_scopes),
            redirect_uri=config.redirect_uri,
            token_endpoint_auth_method="client_secret_post",
        )

    def get_authorization_url(self) -> str:
        """Build the consent URL the user must visit."""
        authorization_url, _ = self.session.create_authorization_url(
            self.config.auth_uri,
            state=STATE,
            access_type="offline",
        )
        return authorization_url

    def exchange_code(self, code: str) -> Token:
        """Exchange an authorization code for a token.

        Raises:
            InteractiveAuthError: If the token endpoint rejects the code or
                cannot be reached.
        """
        logger.info(f"Exchanging authorization code at {self.config.token_uri}")
        try:
            token = self.session.fetch_token(self.config.token_uri, code=code)
        except OAuth2Error as e:
            raise InteractiveAuthError(f"Unable to retrieve token from web: {e}") from e
        except requests.RequestException as e:
            raise InteractiveAuthError(f"Token endpoint unreachable: {e}") from e

        try:
            return Token.from_authlib(token)
        except KeyError as e:
            raise InteractiveAuthError(f"Token response missing {e}") from e

    def authorize(
        self,
        prompt: Callable[[str], str] = input,
        open_browser: bool = False,
    ) -> Token:
        """Run the interactive authorization-code flow.

        Prints the consent URL, then blocks until a line holding the
        authorization code is read.

        Args:
            prompt: Reads one line of console input.
            open_browser: Also open the URL with the default browser.

        Raises:
            InteractiveAuthError: If no code can be read or the exchange fails.
        """
        url = self.get_authorization_url()
        print(
            "Go to the following link in your browser then type the "
            f"authorization code: \n{url}\n"
        )

        if open_browser:
            webbrowser.open(url)

        try:
            code = prompt("Authorization code: ").strip()
        except (EOFError, OSError) as e:
            raise InteractiveAuthError(f"Unable to read authorization code: {e!r}") from e

        if not code:
            raise InteractiveAuthError("Unable to read authorization code: no code entered")

        return self.exchange_code(code)

    def get_credentials(self, token: Token) -> GoogleCredentials:
        """Get Google Credentials object for API client libraries.

        No refresh token or expiry is passed on, so the client libraries
        use the access token exactly as cached.
        """
        return GoogleCredentials(token=token.access_token, scopes=self.required_scopes)

    def build_service(self, token: Token, service_name: str = "sheets", version: str = "v4") -> Any:
        """Build a Google API service with the given token.

        Args:
            token: Access token to authorize requests with.
            service_name: Name of the service.
            version: API version.

        Returns:
            Google API service object.
        """
        creds = self.get_credentials(token)
        return build(service_name, version, credentials=creds, cache_discovery=False)
