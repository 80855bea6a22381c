"""Single-object interface over the Directory API services.

Usage:
    from gapps_admin.config import ClientConfig
    from gapps_admin.core.directory import Provisioning

    admin = Provisioning.connect(ClientConfig(domain="example.com", credential_file="client_secret.json"))
    print(admin.get_license_info())
"""
from __future__ import annotations
from typing import TYPE_CHECKING, Any, Optional

import requests

from .auth import CodeSupplier, TokenProvider
from .client import DirectoryClient
from .domain import DomainSettingsService
from .groups import GroupService
from .users import UserService

if TYPE_CHECKING:
    from gapps_admin.config.settings import ClientConfig


class Provisioning:
    """Domain settings, user and group operations on one authenticated client."""

    def __init__(self, client: DirectoryClient):
        self.client = client
        self.domain_settings = DomainSettingsService(client)
        self.users = UserService(client)
        self.groups = GroupService(client)

    @classmethod
    def connect(
        cls,
        config: "ClientConfig",
        token_provider: Optional[TokenProvider] = None,
        session: Optional[requests.Session] = None,
        code_supplier: Optional[CodeSupplier] = None,
    ) -> "Provisioning":
        """Build and authenticate a client for ``config``."""
        return cls(DirectoryClient(config, token_provider=token_provider, session=session, code_supplier=code_supplier))

    # Domain settings
    def get_default_language(self):
        return self.domain_settings.get_default_language()

    def get_organization_name(self):
        return self.domain_settings.get_organization_name()

    def get_license_info(self):
        return self.domain_settings.get_license_info()

    # Users
    def get_all_users(self, **options: Any):
        return self.users.get_all_users(**options)

    def get_user(self, email: str):
        return self.users.get_user(email)

    # Groups
    def get_group_info(self, group: str):
        return self.groups.get_group_info(group)

    def get_all_groups(self):
        return self.groups.get_all_groups()

    def get_member_groups(self, member: str):
        return self.groups.get_member_groups(member)

    def get_group_members(self, group: str):
        return self.groups.get_group_members(group)

    def get_group_member(self, group: str, member: str):
        return self.groups.get_group_member(group, member)

    def add_member_to_group(self, group: str, member: str, role: str):
        return self.groups.add_member_to_group(group, member, role)

    def update_group_membership(self, group: str, member: str, role: str):
        return self.groups.update_group_membership(group, member, role)

    def delete_group_membership(self, group: str, member: str):
        return self.groups.delete_group_membership(group, member)
