"""Unit tests for token caching, client secrets and the OAuth2 provider."""
import json
import os

import pytest
from authlib.integrations.requests_client import OAuthError

from gapps_admin.core.directory import (
    ConfigurationError,
    DirectoryError,
    OAuth2TokenProvider,
    Token,
    TokenCache,
    TokenRefreshError,
    authorize,
    console_code_supplier,
    load_client_secrets,
)
from gapps_admin.core.directory.auth import OOB_REDIRECT_URI


class FakeOAuthSession:
    """Records calls made to the Authlib session."""

    def __init__(self, refreshed=None, fetched=None, error=None):
        self.refreshed = refreshed or {}
        self.fetched = fetched or {}
        self.error = error
        self.calls = []

    def create_authorization_url(self, url, **kwargs):
        self.calls.append(("authorize", url, kwargs))
        return f"{url}?client_id=abc&access_type={kwargs.get('access_type')}", "state-1"

    def fetch_token(self, url, **kwargs):
        self.calls.append(("fetch", url, kwargs))
        if self.error:
            raise self.error
        return self.fetched

    def refresh_token(self, url, **kwargs):
        self.calls.append(("refresh", url, kwargs))
        if self.error:
            raise self.error
        return self.refreshed


@pytest.fixture()
def oauth_provider(secret_file, tmp_path):
    return OAuth2TokenProvider.from_client_secrets(secret_file, tmp_path / "cache" / "token.json")


def test_load_client_secrets_installed(secret_file):
    secrets = load_client_secrets(secret_file)
    assert secrets.client_id == "abc.apps.googleusercontent.com"
    assert secrets.token_uri == "https://oauth2.googleapis.com/token"
    assert secrets.redirect_uri == OOB_REDIRECT_URI


def test_load_client_secrets_web_section(tmp_path):
    path = tmp_path / "web.json"
    path.write_text(json.dumps({"web": {
        "client_id": "web-id",
        "client_secret": "web-secret",
        "auth_uri": "https://accounts.google.com/o/oauth2/auth",
        "token_uri": "https://oauth2.googleapis.com/token",
        "redirect_uris": ["https://admin.example.com/callback"],
    }}))
    secrets = load_client_secrets(path)
    assert secrets.client_id == "web-id"
    assert secrets.redirect_uri == "https://admin.example.com/callback"


@pytest.mark.parametrize("content", ["not json", json.dumps({"other": {}}), json.dumps({"installed": {"client_id": "x"}})])
def test_load_client_secrets_rejects_invalid_files(tmp_path, content):
    path = tmp_path / "bad.json"
    path.write_text(content)
    with pytest.raises(ConfigurationError):
        load_client_secrets(path)


def test_token_cache_save_and_load(tmp_path):
    cache = TokenCache(tmp_path / "nested" / "token.json")
    token = Token(token_type="Bearer", access_token="abc", refresh_token="def", expires_at=1700000000)

    cache.save(token)

    assert cache.path.stat().st_mode & 0o777 == 0o600
    assert json.loads(cache.path.read_text())["refresh_token"] == "def"
    assert cache.load() == token


def test_token_cache_created_owner_only(tmp_path, monkeypatch):
    """The cache file is opened with 0600 so the token is never world-readable."""
    opened = []
    real_open = os.open

    def recording_open(path, flags, mode=0o777):
        opened.append(mode)
        return real_open(path, flags, mode)

    monkeypatch.setattr(os, "open", recording_open)
    TokenCache(tmp_path / "token.json").save(Token(token_type="Bearer", access_token="abc"))

    assert opened == [0o600]


def test_token_cache_tightens_existing_file(tmp_path):
    path = tmp_path / "token.json"
    path.write_text("{}")
    path.chmod(0o644)

    TokenCache(path).save(Token(token_type="Bearer", access_token="abc", refresh_token="def"))

    assert path.stat().st_mode & 0o777 == 0o600
    assert json.loads(path.read_text())["access_token"] == "abc"


def test_token_cache_missing_or_corrupt_returns_none(tmp_path):
    cache = TokenCache(tmp_path / "token.json")
    assert cache.load() is None

    cache.path.write_text("{broken")
    assert cache.load() is None


def test_token_authorization_header():
    token = Token.from_dict({"access_token": "ya29.x"})
    assert token.authorization == "Bearer ya29.x"


def test_authorize_uses_cache_without_network(oauth_provider):
    oauth_provider.cache.save(Token(token_type="Bearer", access_token="cached", refresh_token="r"))
    fake = FakeOAuthSession()
    oauth_provider._oauth = fake

    token = authorize(oauth_provider, code_supplier=lambda url: pytest.fail("should not prompt"))

    assert token.access_token == "cached"
    assert fake.calls == []


def test_authorize_exchanges_code_and_persists(oauth_provider):
    fake = FakeOAuthSession(fetched={
        "token_type": "Bearer",
        "access_token": "fresh",
        "refresh_token": "refresh",
        "expires_at": 1700003600,
    })
    oauth_provider._oauth = fake
    prompted = []

    token = authorize(oauth_provider, code_supplier=lambda url: prompted.append(url) or "4/code")

    assert token.access_token == "fresh"
    assert "access_type=offline" in prompted[0]
    assert fake.calls[-1][0] == "fetch"
    assert fake.calls[-1][2]["code"] == "4/code"
    assert oauth_provider.cache.load().access_token == "fresh"


def test_authorize_rejects_empty_code(oauth_provider):
    oauth_provider._oauth = FakeOAuthSession()
    with pytest.raises(TokenRefreshError):
        authorize(oauth_provider, code_supplier=lambda url: "")


def test_refresh_persists_and_keeps_refresh_token(oauth_provider):
    """Refreshed tokens are written back to the cache file."""
    oauth_provider.cache.save(Token(token_type="Bearer", access_token="old", refresh_token="keep-me"))
    oauth_provider.load_cached()
    fake = FakeOAuthSession(refreshed={"token_type": "Bearer", "access_token": "new", "expires_in": 3600})
    oauth_provider._oauth = fake

    token = oauth_provider.refresh()

    assert token.access_token == "new"
    assert token.refresh_token == "keep-me"
    assert fake.calls[0][2]["refresh_token"] == "keep-me"
    cached = oauth_provider.cache.load()
    assert cached.access_token == "new"
    assert cached.refresh_token == "keep-me"


def test_refresh_failure_raises(oauth_provider):
    oauth_provider.cache.save(Token(token_type="Bearer", access_token="old", refresh_token="r"))
    oauth_provider.load_cached()
    oauth_provider._oauth = FakeOAuthSession(error=OAuthError(error="invalid_grant", description="Token has been revoked"))

    with pytest.raises(TokenRefreshError):
        oauth_provider.refresh()


def test_refresh_without_refresh_token_raises(oauth_provider):
    oauth_provider.cache.save(Token(token_type="Bearer", access_token="old"))
    oauth_provider.load_cached()

    with pytest.raises(TokenRefreshError):
        oauth_provider.refresh()


def test_current_token_requires_authorization(oauth_provider):
    with pytest.raises(DirectoryError):
        oauth_provider.current_token()


def test_console_code_supplier_prints_url(monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt: "  4/typed-code \n")

    code = console_code_supplier("https://accounts.google.com/o/oauth2/auth?x=1")

    assert code == "4/typed-code"
    assert "https://accounts.google.com/o/oauth2/auth?x=1" in capsys.readouterr().out
