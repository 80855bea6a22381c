"""HTTP and token-provider doubles shared by the Directory client tests."""
import json
from typing import Optional

from gapps_admin.core.directory import Token


class StubResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(
        self,
        status_code: int = 200,
        payload=None,
        text: Optional[str] = None,
        content_type: Optional[str] = "application/json; charset=UTF-8",
        reason: str = "OK",
    ):
        self.status_code = status_code
        self.reason = reason
        if text is None:
            text = json.dumps(payload) if payload is not None else ""
        self.text = text
        self.content = text.encode("utf-8")
        self.headers = {"Content-Type": content_type} if content_type else {}

    def json(self):
        return json.loads(self.text)


class StubSession:
    """Records every request and answers from a queue of StubResponses."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    def request(self, method, url, params=None, data=None, headers=None, timeout=None):
        self.calls.append({
            "method": method,
            "url": url,
            "params": dict(params) if params else {},
            "data": data,
            "headers": dict(headers or {}),
            "timeout": timeout,
        })
        if not self.responses:
            raise AssertionError(f"Unexpected HTTP {method} {url}")
        return self.responses.pop(0)


class FakeTokenProvider:
    """Token provider double that counts refreshes and never touches the network."""

    def __init__(self, cached: bool = True):
        self.cached = cached
        self.token = Token(token_type="Bearer", access_token="token-1", refresh_token="refresh-1")
        self.refresh_calls = 0
        self.exchanged = []

    def load_cached(self) -> bool:
        return self.cached

    def authorization_url(self) -> str:
        return "https://accounts.example.com/o/oauth2/auth?client_id=abc"

    def exchange(self, code: str) -> Token:
        self.exchanged.append(code)
        return self.token

    def refresh(self) -> Token:
        self.refresh_calls += 1
        self.token = Token(token_type="Bearer", access_token=f"token-{self.refresh_calls + 1}", refresh_token="refresh-1")
        return self.token

    def current_token(self) -> Token:
        return self.token
