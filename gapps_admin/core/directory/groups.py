"""Directory group and group membership operations."""
from __future__ import annotations
from typing import Any, List, Union

from .client import DirectoryClient
from .models import ApiResponse, VendorError
from .validators import require, validate_role

GROUPS_PAGE_SIZE = 500
MEMBERS_PAGE_SIZE = 200


class GroupService:
    """Service for managing directory groups and their members.

    ``group`` may be the group's email address, an alias, or its unique ID.
    """

    def __init__(self, client: DirectoryClient):
        """Initialize group service.

        Args:
            client: Authenticated Directory client
        """
        self.client = client

    def get_group_info(self, group: str) -> ApiResponse:
        """Retrieve a group's information."""
        require(group=group)
        return self.client.request(self.client.directory_url("groups", group))

    def get_all_groups(self) -> Union[List[Any], VendorError]:
        """Retrieve every group of the domain, one list per result page."""
        params = {"domain": self.client.domain, "maxResults": GROUPS_PAGE_SIZE}
        return self.client.paginate(self.client.directory_url("groups"), "groups", params)

    def get_member_groups(self, member: str) -> Union[List[Any], VendorError]:
        """Retrieve the groups a user or group belongs to, one list per page."""
        require(member=member)
        params = {"userKey": member, "maxResults": MEMBERS_PAGE_SIZE, "domain": self.client.domain}
        return self.client.paginate(self.client.directory_url("groups"), "groups", params)

    def get_group_members(self, group: str) -> Union[List[Any], VendorError]:
        """Retrieve the members of a group, one list per page."""
        require(group=group)
        params = {"maxResults": MEMBERS_PAGE_SIZE}
        return self.client.paginate(self.client.directory_url("groups", group, "members"), "members", params)

    def get_group_member(self, group: str, member: str) -> ApiResponse:
        """Retrieve one member's membership of a group."""
        require(group=group, member=member)
        return self.client.request(self.client.directory_url("groups", group, "members", member))

    def add_member_to_group(self, group: str, member: str, role: str) -> ApiResponse:
        """Add a member to a group.

        Args:
            group: Group key
            member: Member email address
            role: OWNER, MANAGER or MEMBER

        Returns:
            Created member resource, or a ``VendorError`` (e.g. duplicate member)

        Raises:
            ValidationError: If a parameter is missing or the role is unknown
        """
        require(role=role, group=group, member=member)
        role = validate_role(role)
        return self.client.request(
            self.client.directory_url("groups", group, "members"),
            method="POST",
            body={"role": role, "email": member},
        )

    def update_group_membership(self, group: str, member: str, role: str) -> ApiResponse:
        """Change a member's role in a group."""
        require(role=role, group=group, member=member)
        role = validate_role(role)
        return self.client.request(
            self.client.directory_url("groups", group, "members", member),
            method="PUT",
            body={"role": role},
        )

    def delete_group_membership(self, group: str, member: str) -> ApiResponse:
        """Remove a member from a group.

        Returns:
            ``True`` on success (204), or a ``VendorError``
        """
        require(group=group, member=member)
        return self.client.request(
            self.client.directory_url("groups", group, "members", member),
            method="DELETE",
        )
