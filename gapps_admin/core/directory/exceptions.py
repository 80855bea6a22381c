"""Directory API exceptions for error handling.

Vendor-reported errors are not raised: they come back from
``DirectoryClient.request()`` as ``VendorError`` values (see models.py)
so batch callers can keep going past a single failure.
"""
from __future__ import annotations
from typing import Optional


class DirectoryError(Exception):
    """Base exception for all Directory API operations."""
    pass


class ConfigurationError(DirectoryError):
    """Client configuration is missing or invalid (domain, credential file)."""
    pass


class ValidationError(DirectoryError, ValueError):
    """A required call parameter is missing or invalid.

    Attributes:
        param: Name of the offending parameter
    """

    def __init__(self, param: str, message: Optional[str] = None):
        self.param = param
        super().__init__(message or f"param {param} is required")


class TransportError(DirectoryError):
    """HTTP failure whose body is not a vendor error envelope.

    Attributes:
        status_code: HTTP status code
        reason: HTTP reason phrase
        url: Request URL that failed
    """

    def __init__(self, status_code: int, reason: str, url: str):
        self.status_code = status_code
        self.reason = reason
        self.url = url
        super().__init__(self.status_line)

    @property
    def status_line(self) -> str:
        return f"{self.status_code} {self.reason}".strip()


class TokenRefreshError(DirectoryError):
    """The OAuth2 provider could not exchange or refresh a token."""
    pass


class PaginationError(DirectoryError):
    """A list endpoint kept returning page tokens past the page limit."""

    def __init__(self, url: str, max_pages: int):
        self.url = url
        self.max_pages = max_pages
        super().__init__(f"{url}: still paginating after {max_pages} pages")
