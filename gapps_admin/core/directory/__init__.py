"""Google Apps Directory API client library.

Architecture:
- client.py: HTTP client with refresh-on-401, content negotiation, pagination
- auth.py: OAuth2 token provider (Authlib), token cache, authorization flow
- atom.py: Atom settings feed -> dict conversion
- domain.py: Domain settings (language, organization, license usage)
- users.py: User listing and lookup
- groups.py: Groups and group membership
- provisioning.py: All of the above on one object
- validators.py: Required-parameter and role checks
- exceptions.py: Typed exceptions for error handling
- models.py: Token, ApiRequest, VendorError

Usage:
    from gapps_admin.config import ClientConfig
    from gapps_admin.core.directory import DirectoryClient, GroupService, is_error

    client = DirectoryClient(ClientConfig(domain="example.com", credential_file="client_secret.json"))
    result = GroupService(client).add_member_to_group("it@example.com", "bob@example.com", "MEMBER")
    if is_error(result):
        print(result.code, result.message)
"""
from .client import (
    DirectoryClient,
    path_segment,
    DIRECTORY_URL,
    SETTINGS_URL,
    REQUEST_TIMEOUT,
    MAX_PAGES,
)
from .auth import (
    TokenProvider,
    OAuth2TokenProvider,
    TokenCache,
    ClientSecrets,
    load_client_secrets,
    authorize,
    console_code_supplier,
    DEFAULT_SCOPES,
)
from .exceptions import (
    DirectoryError,
    ConfigurationError,
    ValidationError,
    TransportError,
    TokenRefreshError,
    PaginationError,
)
from .models import (
    Token,
    ApiRequest,
    ApiResponse,
    VendorError,
    is_error,
)
from .domain import DomainSettingsService
from .users import UserService
from .groups import GroupService
from .provisioning import Provisioning

__all__ = [
    # Client
    "DirectoryClient",
    "path_segment",
    "DIRECTORY_URL",
    "SETTINGS_URL",
    "REQUEST_TIMEOUT",
    "MAX_PAGES",

    # Auth
    "TokenProvider",
    "OAuth2TokenProvider",
    "TokenCache",
    "ClientSecrets",
    "load_client_secrets",
    "authorize",
    "console_code_supplier",
    "DEFAULT_SCOPES",

    # Exceptions
    "DirectoryError",
    "ConfigurationError",
    "ValidationError",
    "TransportError",
    "TokenRefreshError",
    "PaginationError",

    # Models
    "Token",
    "ApiRequest",
    "ApiResponse",
    "VendorError",
    "is_error",

    # Services
    "DomainSettingsService",
    "UserService",
    "GroupService",
    "Provisioning",
]
