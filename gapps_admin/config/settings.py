"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from gapps_admin.core.directory.auth import DEFAULT_SCOPES
from gapps_admin.core.directory.client import DIRECTORY_URL, MAX_PAGES, REQUEST_TIMEOUT, SETTINGS_URL
from gapps_admin.core.directory.exceptions import ConfigurationError

SECRETS_DIR = Path("/run/secrets")


def default_token_cache_path() -> str:
    return str(Path.home() / ".google_auth.json")


@dataclass(frozen=True)
class ClientConfig:
    """Directory client configuration, validated on construction."""
    domain: str
    credential_file: str
    token_cache_path: str = field(default_factory=default_token_cache_path)
    directory_url: str = DIRECTORY_URL
    settings_url: str = SETTINGS_URL
    scopes: Tuple[str, ...] = DEFAULT_SCOPES
    timeout: float = REQUEST_TIMEOUT
    max_pages: int = MAX_PAGES

    def __post_init__(self) -> None:
        if not self.domain or not self.domain.strip():
            raise ConfigurationError("Google Apps domain is required")
        if not self.credential_file or not Path(self.credential_file).expanduser().is_file():
            raise ConfigurationError(f"Client secret file not found: {self.credential_file!r}")
        if self.max_pages < 1:
            raise ConfigurationError("max_pages must be at least 1")


def _find_secret_file(secret_name: str) -> Optional[str]:
    """
    Locate a credential file mounted as a Docker secret.

    Args:
        secret_name: Name of the file in /run/secrets

    Returns:
        Path to the secret file or None if not mounted
    """
    secret_file = SECRETS_DIR / secret_name
    if secret_file.exists() and secret_file.is_file():
        print(f"[settings] ✓ Using {secret_name} from {SECRETS_DIR}", file=sys.stderr)
        return str(secret_file)
    return None


def _env_number(var_name: str, default, cast):
    raw = os.environ.get(var_name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Environment variable {var_name} must be a number, got {raw!r}") from exc


def load_settings(
    domain: Optional[str] = None,
    credential_file: Optional[str] = None,
    token_cache_path: Optional[str] = None,
) -> ClientConfig:
    """Build a ClientConfig from explicit values, the environment and /run/secrets.

    Priority for each value: explicit argument > environment variable >
    /run/secrets (client secret file only) > default.

    Raises:
        ConfigurationError: If the domain or client secret file is missing
    """
    domain = domain or os.environ.get("GAPPS_DOMAIN", "")
    credential_file = (
        credential_file
        or os.environ.get("GAPPS_CLIENT_SECRET_FILE")
        or _find_secret_file("gapps_client_secret.json")
        or ""
    )
    token_cache_path = token_cache_path or os.environ.get("GAPPS_TOKEN_FILE") or default_token_cache_path()

    config = ClientConfig(
        domain=domain.strip(),
        credential_file=os.path.expanduser(credential_file),
        token_cache_path=os.path.expanduser(token_cache_path),
        directory_url=os.environ.get("GAPPS_DIRECTORY_URL", DIRECTORY_URL),
        settings_url=os.environ.get("GAPPS_SETTINGS_URL", SETTINGS_URL),
        timeout=_env_number("GAPPS_REQUEST_TIMEOUT", REQUEST_TIMEOUT, float),
        max_pages=_env_number("GAPPS_MAX_PAGES", MAX_PAGES, int),
    )

    print(f"[settings] domain={config.domain}; token_file={config.token_cache_path}", file=sys.stderr)
    return config
