"""OAuth2 token acquisition, caching and refresh for the Directory API.

The OAuth2 protocol itself (authorization URL, code exchange, refresh
grant) is handled by Authlib's ``OAuth2Session``; this module decides when
to use which and keeps the token cache file in sync.

States:
    Unauthenticated -> Authenticated: ``authorize()`` loads the cache file,
        or prompts for a verification code and exchanges it.
    Authenticated -> Authenticated: ``refresh()`` after a 401 response.
"""
from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Optional, Protocol

import requests
from authlib.integrations.requests_client import OAuth2Session, OAuthError

from .exceptions import ConfigurationError, DirectoryError, TokenRefreshError
from .models import Token

logger = logging.getLogger(__name__)

OOB_REDIRECT_URI = "urn:ietf:wg:oauth:2.0:oob"

DEFAULT_SCOPES = (
    "https://www.googleapis.com/auth/admin.directory.user",
    "https://www.googleapis.com/auth/admin.directory.group",
    "https://www.googleapis.com/auth/admin.directory.group.member",
    "https://www.googleapis.com/auth/apps.groups.settings",
    "https://apps-apis.google.com/a/feeds/domain/",
)

CodeSupplier = Callable[[str], str]


class TokenProvider(Protocol):
    """Capability the client uses to authenticate requests."""

    def load_cached(self) -> bool:
        """Load a persisted token; return False when none is available."""
        ...

    def authorization_url(self) -> str:
        """URL the operator opens to grant access."""
        ...

    def exchange(self, code: str) -> Token:
        """Exchange a verification code for a token."""
        ...

    def refresh(self) -> Token:
        """Obtain a new access token after the current one was rejected."""
        ...

    def current_token(self) -> Token:
        """Token used to build the Authorization header."""
        ...


@dataclass(frozen=True)
class ClientSecrets:
    """Application credentials from a vendor client secret file."""
    client_id: str
    client_secret: str
    auth_uri: str
    token_uri: str
    redirect_uri: str = OOB_REDIRECT_URI


def load_client_secrets(path: str | Path) -> ClientSecrets:
    """Read an ``installed`` or ``web`` client secret JSON file.

    Raises:
        ConfigurationError: If the file is unreadable or lacks required keys
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Cannot read client secret file {path}: {exc}") from exc

    section = data.get("installed") or data.get("web") if isinstance(data, dict) else None
    if not isinstance(section, dict):
        raise ConfigurationError(f"Client secret file {path} has no 'installed' or 'web' section")

    missing = [key for key in ("client_id", "client_secret", "auth_uri", "token_uri") if not section.get(key)]
    if missing:
        raise ConfigurationError(f"Client secret file {path} is missing {', '.join(missing)}")

    redirect_uris = section.get("redirect_uris") or [OOB_REDIRECT_URI]
    return ClientSecrets(
        client_id=section["client_id"],
        client_secret=section["client_secret"],
        auth_uri=section["auth_uri"],
        token_uri=section["token_uri"],
        redirect_uri=redirect_uris[0],
    )


class TokenCache:
    """JSON token file, read at startup and rewritten on every new token."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> Optional[Token]:
        if not self.exists():
            return None
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            logger.warning(f"Ignoring unreadable token cache {self.path}: {exc}")
            return None
        if not isinstance(data, dict) or not data.get("access_token"):
            logger.warning(f"Ignoring token cache {self.path}: no access_token")
            return None
        return Token.from_dict(data)

    def save(self, token: Token) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        # O_CREAT mode does not apply to a file that already exists
        os.fchmod(fd, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(token.to_dict(), fh)


class OAuth2TokenProvider:
    """Authorization-code token provider backed by Authlib.

    Usage:
        provider = OAuth2TokenProvider.from_client_secrets(
            "client_secret.json", "~/.google_auth.json"
        )
        authorize(provider)
        provider.current_token().authorization
    """

    def __init__(
        self,
        secrets: ClientSecrets,
        cache: TokenCache,
        scopes: Iterable[str] = DEFAULT_SCOPES,
        timeout: Optional[float] = None,
    ):
        self.secrets = secrets
        self.cache = cache
        self.timeout = timeout
        self._oauth = OAuth2Session(
            client_id=secrets.client_id,
            client_secret=secrets.client_secret,
            scope=" ".join(scopes),
            redirect_uri=secrets.redirect_uri,
        )
        self._token: Optional[Token] = None

    @classmethod
    def from_client_secrets(
        cls,
        secret_file: str | Path,
        token_cache_path: str | Path,
        scopes: Iterable[str] = DEFAULT_SCOPES,
        timeout: Optional[float] = None,
    ) -> "OAuth2TokenProvider":
        return cls(load_client_secrets(secret_file), TokenCache(token_cache_path), scopes, timeout)

    @property
    def authenticated(self) -> bool:
        return self._token is not None

    def load_cached(self) -> bool:
        token = self.cache.load()
        if token is None:
            return False
        self._token = token
        logger.info(f"Loaded cached token from {self.cache.path}")
        return True

    def authorization_url(self) -> str:
        # offline access is what makes the server hand out a refresh token
        url, _state = self._oauth.create_authorization_url(
            self.secrets.auth_uri,
            access_type="offline",
            prompt="consent",
        )
        return url

    def exchange(self, code: str) -> Token:
        try:
            raw = self._oauth.fetch_token(self.secrets.token_uri, code=code, timeout=self.timeout)
        except (OAuthError, requests.RequestException) as exc:
            raise TokenRefreshError(f"Authorization code exchange failed: {exc}") from exc
        self._token = Token.from_dict(raw)
        self.cache.save(self._token)
        logger.info(f"Stored new token in {self.cache.path}")
        return self._token

    def refresh(self) -> Token:
        current = self.current_token()
        if not current.refresh_token:
            raise TokenRefreshError("Token has no refresh_token; delete the token cache and authorize again")

        logger.info("Refreshing access token")
        try:
            raw = self._oauth.refresh_token(
                self.secrets.token_uri,
                refresh_token=current.refresh_token,
                timeout=self.timeout,
            )
        except (OAuthError, requests.RequestException) as exc:
            raise TokenRefreshError(f"Token refresh failed: {exc}") from exc

        refreshed = Token.from_dict(raw)
        if not refreshed.refresh_token:
            refreshed.refresh_token = current.refresh_token
        self._token = refreshed
        self.cache.save(refreshed)
        return refreshed

    def current_token(self) -> Token:
        if self._token is None:
            raise DirectoryError("Not authenticated - call authorize() first")
        return self._token


def console_code_supplier(url: str) -> str:
    """Print the authorization URL and block on a verification code from stdin."""
    print("Go to the following link in your browser:")
    print(url)
    return input("Enter verification code: ").strip()


def authorize(provider: TokenProvider, code_supplier: Optional[CodeSupplier] = None) -> Token:
    """Bring a provider to the authenticated state.

    A cached token is used as-is without any network call; otherwise the
    code supplier is asked for a verification code, which is exchanged and
    persisted by the provider.
    """
    if provider.load_cached():
        return provider.current_token()

    supplier = code_supplier or console_code_supplier
    code = supplier(provider.authorization_url())
    if not code:
        raise TokenRefreshError("No verification code supplied")
    return provider.exchange(code)
