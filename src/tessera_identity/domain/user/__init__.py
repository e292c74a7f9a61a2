"""User domain: accounts, email addresses and role assignments."""

from tessera_identity.domain.user.email import (
    EMAIL_PATTERN,
    Email,
    InvalidEmailError,
    normalize_email,
)
from tessera_identity.domain.user.identity_user import IdentityUser
from tessera_identity.domain.user.user_role import NIL_UUID, UserRole

__all__ = [
    "EMAIL_PATTERN",
    "NIL_UUID",
    "Email",
    "IdentityUser",
    "InvalidEmailError",
    "UserRole",
    "normalize_email",
]
