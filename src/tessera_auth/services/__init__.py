"""Authentication services.

Provides password hashing, password policy validation and JWT access
token management.
"""

from tessera_auth.services.jwt_service import JWTService
from tessera_auth.services.password_service import (
    PasswordHashingService,
    work_factor_for,
)
from tessera_auth.services.password_validator import (
    SPECIAL_CHARACTERS,
    PasswordPolicy,
    PasswordValidator,
)

__all__ = [
    "SPECIAL_CHARACTERS",
    "JWTService",
    "PasswordHashingService",
    "PasswordPolicy",
    "PasswordValidator",
    "work_factor_for",
]
