"""Input validation helpers for Directory API calls."""
from __future__ import annotations
import logging
from typing import Any, Dict, Mapping

from .exceptions import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_ROLES = ("OWNER", "MANAGER", "MEMBER")


def require(**params: Any) -> None:
    """Check that every named parameter has a value.

    Parameters are checked in the order given, so the first missing one is
    the one reported.

    Raises:
        ValidationError: Naming the first missing parameter
    """
    for name, value in params.items():
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(name)


def validate_role(role: str) -> str:
    """Validate a group membership role.

    Args:
        role: OWNER, MANAGER or MEMBER (any case)

    Returns:
        Upper-cased role

    Raises:
        ValidationError: If the role is missing or not allowed
    """
    require(role=role)
    normalized = role.strip().upper()
    if normalized not in ALLOWED_ROLES:
        raise ValidationError("role", f"role must be one of {', '.join(ALLOWED_ROLES)}, got '{role}'")
    return normalized


def select_params(options: Mapping[str, Any], allowed: Mapping[str, str]) -> Dict[str, Any]:
    """Keep the recognised query options the caller actually supplied.

    Args:
        options: Caller keyword arguments
        allowed: Accepted option name -> API query parameter name

    Returns:
        Query parameters keyed by API name; empty values are dropped
    """
    selected: Dict[str, Any] = {}
    for name, value in options.items():
        api_name = allowed.get(name)
        if api_name is None:
            logger.debug(f"Ignoring unsupported query option '{name}'")
            continue
        if value:
            selected[api_name] = value
    return selected
