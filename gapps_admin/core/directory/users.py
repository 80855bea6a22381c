"""Directory user operations."""
from __future__ import annotations
from typing import Any, List, Union

from .client import DirectoryClient
from .models import ApiResponse, VendorError
from .validators import require, select_params

USERS_PAGE_SIZE = 500

# Accepted keyword -> users.list query parameter
USER_LIST_OPTIONS = {
    "custom_field_mask": "customFieldMask",
    "customer": "customer",
    "order_by": "orderBy",
    "query": "query",
    "sort_order": "sortOrder",
    "view_type": "viewType",
}
# camelCase spellings are accepted as well
USER_LIST_OPTIONS.update({api: api for api in list(USER_LIST_OPTIONS.values())})


class UserService:
    """Service for reading directory users."""

    def __init__(self, client: DirectoryClient):
        """Initialize user service.

        Args:
            client: Authenticated Directory client
        """
        self.client = client

    def get_all_users(self, **options: Any) -> Union[List[Any], VendorError]:
        """Retrieve every user of the domain, one list per result page.

        Only the users.list options in ``USER_LIST_OPTIONS`` are forwarded,
        and only when given a value; anything else is ignored.

        Example:
            for page in service.get_all_users(order_by="email", sort_order="ASCENDING"):
                for user in page:
                    print(user["primaryEmail"])
        """
        params = {"domain": self.client.domain, "maxResults": USERS_PAGE_SIZE}
        params.update(select_params(options, USER_LIST_OPTIONS))
        return self.client.paginate(self.client.directory_url("users"), "users", params)

    def get_user(self, email: str) -> ApiResponse:
        """Retrieve a user's account information.

        Raises:
            ValidationError: If email is missing
        """
        require(email=email)
        return self.client.request(self.client.directory_url("users", email))
