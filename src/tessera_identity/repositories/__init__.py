"""Abstract repository interfaces.

These interfaces define the contract for identity persistence.
Implementations can use DynamoDB or any other key-value store.
"""

from tessera_identity.repositories.ephemeral_token_repository import (
    EphemeralTokenRepository,
)
from tessera_identity.repositories.refresh_token_repository import (
    RefreshTokenRepository,
)
from tessera_identity.repositories.user_repository import IdentityUserRepository
from tessera_identity.repositories.user_role_repository import UserRoleRepository

__all__ = [
    "EphemeralTokenRepository",
    "IdentityUserRepository",
    "RefreshTokenRepository",
    "UserRoleRepository",
]
