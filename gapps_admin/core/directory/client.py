"""Low-level HTTP client for the Google Apps Directory API.

Handles authentication, error classification, content negotiation and
pagination. Every endpoint service goes through ``DirectoryClient.request``.
"""
from __future__ import annotations
import json
import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union
from urllib.parse import quote
from xml.etree.ElementTree import ParseError

import requests

from .atom import parse_atom
from .auth import CodeSupplier, OAuth2TokenProvider, TokenProvider, authorize
from .exceptions import DirectoryError, PaginationError, TransportError
from .models import ApiRequest, ApiResponse, VendorError

if TYPE_CHECKING:
    from gapps_admin.config.settings import ClientConfig

logger = logging.getLogger(__name__)

DIRECTORY_URL = "https://www.googleapis.com/admin/directory/v1"
SETTINGS_URL = "https://apps-apis.google.com/a/feeds/domain/2.0"
REQUEST_TIMEOUT = 30
MAX_PAGES = 10000
USER_AGENT = "gapps-admin"


def path_segment(value: Any) -> str:
    """Quote a caller-supplied value for use as one URL path segment."""
    return quote(str(value), safe="@")


class DirectoryClient:
    """HTTP client for the Directory API with refresh-on-401.

    Features:
    - Cached or interactively authorized OAuth2 token at construction
    - One refresh-and-resend when a request comes back 401
    - Vendor error envelopes returned as ``VendorError`` values
    - JSON / Atom / text responses decoded by content type

    Usage:
        config = ClientConfig(domain="example.com", credential_file="client_secret.json")
        client = DirectoryClient(config)
        user = client.request(client.directory_url("users", "alice@example.com"))
    """

    def __init__(
        self,
        config: "ClientConfig",
        token_provider: Optional[TokenProvider] = None,
        session: Optional[requests.Session] = None,
        code_supplier: Optional[CodeSupplier] = None,
    ):
        """Initialize the client and authenticate.

        Args:
            config: Validated client configuration
            token_provider: Token capability (defaults to an Authlib provider
                built from ``config.credential_file``)
            session: HTTP session to send requests with
            code_supplier: Callable returning a verification code for an
                authorization URL (defaults to a console prompt)
        """
        self.config = config
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = USER_AGENT
        self.session = session
        self.token_provider: TokenProvider = token_provider or OAuth2TokenProvider.from_client_secrets(
            config.credential_file,
            config.token_cache_path,
            scopes=config.scopes,
            timeout=config.timeout,
        )
        authorize(self.token_provider, code_supplier)

    @property
    def domain(self) -> str:
        return self.config.domain

    def directory_url(self, *segments: Any) -> str:
        """Build a Directory API URL from path segments."""
        base = self.config.directory_url.rstrip("/")
        return "/".join([base] + [path_segment(s) for s in segments])

    def settings_url(self, setting: str) -> str:
        """Build a domain settings feed URL for ``general/<setting>``."""
        base = self.config.settings_url.rstrip("/")
        return f"{base}/{path_segment(self.domain)}/general/{setting}"

    def request(
        self,
        url: str,
        method: str = "GET",
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> ApiResponse:
        """Execute an authenticated request.

        Args:
            url: Absolute endpoint URL
            method: HTTP method
            params: Query parameters
            body: JSON payload

        Returns:
            Decoded JSON or Atom payload, raw text, ``True`` for 204, or a
            ``VendorError`` when the API reported an error

        Raises:
            TransportError: On an HTTP error without a vendor error body, or a
                success response whose JSON or Atom body does not decode
            TokenRefreshError: If the token could not be refreshed after a 401
        """
        api_request = ApiRequest(url=url, method=(method or "GET").upper(), params=dict(params or {}), body=body)

        resp = self._send(api_request)
        if resp.status_code == 401:
            logger.info(f"{api_request.method} {url} returned 401; refreshing token and retrying once")
            self.token_provider.refresh()
            resp = self._send(api_request)

        return self._handle_response(api_request, resp)

    def paginate(
        self,
        url: str,
        items_key: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Union[List[Any], VendorError]:
        """Follow ``nextPageToken`` until the last page.

        Returns:
            One entry per page holding that page's ``items_key`` array (pages
            are not flattened), or the ``VendorError`` of the failing page

        Raises:
            PaginationError: If more than ``config.max_pages`` pages are returned
        """
        query = dict(params or {})
        pages: List[Any] = []

        while True:
            response = self.request(url, params=query)
            if isinstance(response, VendorError):
                logger.warning(f"Pagination of {url} stopped after {len(pages)} pages: {response.message}")
                return response
            if not isinstance(response, dict):
                raise DirectoryError(f"{url}: expected a JSON page, got {type(response).__name__}")

            pages.append(response.get(items_key, []))

            page_token = response.get("nextPageToken")
            if not page_token:
                return pages
            if len(pages) >= self.config.max_pages:
                raise PaginationError(url, self.config.max_pages)
            query["pageToken"] = page_token

    def _send(self, api_request: ApiRequest) -> requests.Response:
        headers = {"Authorization": self.token_provider.current_token().authorization}
        data = None
        if api_request.body is not None:
            data = json.dumps(api_request.body)
            headers["Content-Type"] = "application/json"
            headers["Content-Length"] = str(len(data.encode("utf-8")))

        logger.debug(f"{api_request.method} {api_request.url} params={api_request.params}")
        return self.session.request(
            api_request.method,
            api_request.url,
            params=api_request.params or None,
            data=data,
            headers=headers,
            timeout=self.config.timeout,
        )

    def _handle_response(self, api_request: ApiRequest, resp: requests.Response) -> ApiResponse:
        """Centralized classification of HTTP responses."""
        if not 200 <= resp.status_code < 300:
            try:
                payload = resp.json()
            except ValueError:
                payload = None
            if isinstance(payload, dict) and payload.get("error"):
                error = VendorError.from_envelope(payload, resp.status_code)
                logger.warning(f"{api_request.method} {api_request.url} failed: [{error.code}] {error.message}")
                return error
            raise TransportError(resp.status_code, resp.reason or "", api_request.url)

        if resp.status_code == 204:
            return True

        content_type = (resp.headers.get("Content-Type") or "").lower()
        try:
            if content_type.startswith("application/json"):
                return resp.json()
            if content_type.startswith("application/atom+xml"):
                return parse_atom(resp.content)
        except (ValueError, ParseError) as exc:
            logger.warning(f"{api_request.method} {api_request.url}: undecodable {content_type} body: {exc}")
            raise TransportError(resp.status_code, resp.reason or "", api_request.url) from exc
        return resp.text
