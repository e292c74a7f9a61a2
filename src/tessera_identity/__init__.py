"""Tessera Identity - credential and session lifecycle.

This package handles:
- Identity users, refresh tokens, single-use tokens and role assignments
  stored in DynamoDB
- Authentication flows (login, registration, refresh, logout)
- Password change and reset, email confirmation

Every AuthenticationService operation returns a Result; store faults
propagate as exceptions.
"""

from tessera_identity.application.services import (
    AuthenticationOptions,
    AuthenticationService,
)
from tessera_identity.domain.shared import (
    Error,
    ErrorType,
    Result,
    ResultValueError,
    TokenErrors,
    UserErrors,
    ValidationError,
)
from tessera_identity.domain.token import (
    AuthTokens,
    EphemeralToken,
    RefreshToken,
    TokenType,
)
from tessera_identity.domain.user import Email, IdentityUser, UserRole
from tessera_identity.notifications import (
    IdentityNotificationService,
    NullNotificationService,
)
from tessera_identity.repositories import (
    EphemeralTokenRepository,
    IdentityUserRepository,
    RefreshTokenRepository,
    UserRoleRepository,
)

__all__ = [
    # Application Services
    "AuthenticationOptions",
    "AuthenticationService",
    # Domain
    "AuthTokens",
    "Email",
    "EphemeralToken",
    "IdentityUser",
    "RefreshToken",
    "TokenType",
    "UserRole",
    # Results
    "Error",
    "ErrorType",
    "Result",
    "ResultValueError",
    "TokenErrors",
    "UserErrors",
    "ValidationError",
    # Notifications
    "IdentityNotificationService",
    "NullNotificationService",
    # Repositories
    "EphemeralTokenRepository",
    "IdentityUserRepository",
    "RefreshTokenRepository",
    "UserRoleRepository",
]
