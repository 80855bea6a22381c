"""Value types shared by the Directory API client."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass
class Token:
    """OAuth2 bearer token as held by a token provider."""
    token_type: str
    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Token":
        expires_at = data.get("expires_at")
        return cls(
            token_type=data.get("token_type") or "Bearer",
            access_token=data.get("access_token", ""),
            refresh_token=data.get("refresh_token"),
            expires_at=int(expires_at) if expires_at is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "token_type": self.token_type,
            "access_token": self.access_token,
        }
        if self.refresh_token:
            data["refresh_token"] = self.refresh_token
        if self.expires_at is not None:
            data["expires_at"] = self.expires_at
        return data

    @property
    def authorization(self) -> str:
        """Value for the Authorization header."""
        return f"{self.token_type} {self.access_token}"


@dataclass
class ApiRequest:
    """A single outbound Directory API call."""
    url: str
    method: str = "GET"
    params: Dict[str, Any] = field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None


@dataclass
class VendorError:
    """Error envelope returned by the vendor API.

    Returned (not raised) by ``DirectoryClient.request()`` so callers can
    inspect ``code`` and ``errors`` and decide whether to continue.
    """
    code: Optional[int]
    message: str
    errors: List[Dict[str, Any]] = field(default_factory=list)
    status_code: Optional[int] = None
    payload: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_envelope(cls, payload: Dict[str, Any], status_code: Optional[int] = None) -> "VendorError":
        error = payload.get("error")
        # OAuth endpoints answer {"error": "invalid_grant", "error_description": ...}
        if isinstance(error, dict):
            return cls(
                code=error.get("code", status_code),
                message=str(error.get("message", "")),
                errors=list(error.get("errors") or []),
                status_code=status_code,
                payload=payload,
            )
        return cls(
            code=status_code,
            message=str(payload.get("error_description") or error),
            status_code=status_code,
            payload=payload,
        )


ApiResponse = Union[Dict[str, Any], str, bool, VendorError]


def is_error(result: Any) -> bool:
    """Return True when an API result is a vendor error."""
    return isinstance(result, VendorError)
