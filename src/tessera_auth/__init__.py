"""Tessera Auth - credential primitives.

This package is independent of storage and of the identity domain. It
handles:
- Password hashing (bcrypt) with a work factor derived from an
  iteration count
- Password policy validation
- JWT access token creation and verification

Usage:
    from tessera_auth import JWTService, PasswordHashingService
"""

from tessera_auth.exceptions import AuthError, InvalidTokenError
from tessera_auth.schemas import TokenPayload
from tessera_auth.services import (
    JWTService,
    PasswordHashingService,
    PasswordPolicy,
    PasswordValidator,
)

__all__ = [
    # Services
    "JWTService",
    "PasswordHashingService",
    "PasswordPolicy",
    "PasswordValidator",
    # Schemas
    "TokenPayload",
    # Exceptions
    "AuthError",
    "InvalidTokenError",
]
