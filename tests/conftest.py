"""Pytest shared fixtures for Directory client tests."""
import json
import pathlib
import sys

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

from gapps_admin.config import ClientConfig
from gapps_admin.core.directory import DirectoryClient
from tests.helpers import FakeTokenProvider, StubSession


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _block_network(monkeypatch):
    """Fail any test that reaches for the real network through requests."""

    def _refuse(self, method, url, *args, **kwargs):
        raise RuntimeError(f"Unexpected network access in tests: {method} {url}")

    monkeypatch.setattr(requests.Session, "request", _refuse)


# ─────────────────────────────────────────────────────────────────────────────
# Client fixtures
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture()
def secret_file(tmp_path):
    """A valid 'installed' client secret file."""
    path = tmp_path / "client_secret.json"
    path.write_text(json.dumps({
        "installed": {
            "client_id": "abc.apps.googleusercontent.com",
            "client_secret": "s3cret",
            "auth_uri": "https://accounts.google.com/o/oauth2/auth",
            "token_uri": "https://oauth2.googleapis.com/token",
            "redirect_uris": ["urn:ietf:wg:oauth:2.0:oob", "http://localhost"],
        }
    }))
    return path


@pytest.fixture()
def config(secret_file, tmp_path):
    return ClientConfig(
        domain="example.com",
        credential_file=str(secret_file),
        token_cache_path=str(tmp_path / "token.json"),
    )


@pytest.fixture()
def provider():
    return FakeTokenProvider()


@pytest.fixture()
def session():
    return StubSession()


@pytest.fixture()
def client(config, provider, session):
    """DirectoryClient wired to stub transport and token provider."""
    return DirectoryClient(config, token_provider=provider, session=session)
