"""Domain settings operations (legacy Atom settings feed)."""
from __future__ import annotations
from typing import Any, Dict, Union

from .client import DirectoryClient
from .exceptions import DirectoryError
from .models import VendorError


class DomainSettingsService:
    """Service for reading ``general/*`` domain settings."""

    def __init__(self, client: DirectoryClient):
        """Initialize domain settings service.

        Args:
            client: Authenticated Directory client
        """
        self.client = client

    def get_property(self, setting: str) -> Union[Dict[str, Any], VendorError]:
        """Return the ``apps:property`` element of a setting.

        Args:
            setting: Setting name under ``general/`` (e.g. defaultLanguage)

        Returns:
            Property dict such as ``{"name": "defaultLanguage", "value": "en"}``
        """
        response = self.client.request(self.client.settings_url(setting))
        if isinstance(response, VendorError):
            return response
        if not isinstance(response, dict) or "apps:property" not in response:
            raise DirectoryError(f"Setting '{setting}' response has no apps:property element")
        return response["apps:property"]

    def get_default_language(self) -> Union[Dict[str, Any], VendorError]:
        """Retrieve the domain's default language."""
        return self.get_property("defaultLanguage")

    def get_organization_name(self) -> Union[Dict[str, Any], VendorError]:
        """Retrieve the domain's organization name."""
        return self.get_property("organizationName")

    def get_license_info(self) -> Union[Dict[str, int], VendorError]:
        """Summarize license usage.

        Returns:
            ``{"free": max - current, "maxAccount": max, "curAccount": current}``
        """
        max_users = self._int_value("maximumNumberOfUsers")
        if isinstance(max_users, VendorError):
            return max_users
        cur_users = self._int_value("currentNumberOfUsers")
        if isinstance(cur_users, VendorError):
            return cur_users

        return {
            "free": max_users - cur_users,
            "maxAccount": max_users,
            "curAccount": cur_users,
        }

    def _int_value(self, setting: str) -> Union[int, VendorError]:
        prop = self.get_property(setting)
        if isinstance(prop, VendorError):
            return prop
        try:
            return int(prop["value"])
        except (TypeError, KeyError, ValueError) as exc:
            raise DirectoryError(f"Setting '{setting}' has no numeric value: {prop!r}") from exc
