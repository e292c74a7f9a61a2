"""DynamoDB persistence for identity records.

Usage:
    from tessera_identity.infrastructure.persistence.dynamodb import (
        IdentityUserRepositoryDynamoDB,
        RefreshTokenRepositoryDynamoDB,
    )
"""

from tessera_identity.infrastructure.persistence.dynamodb.codecs import (
    EMAIL_INDEX,
    TOKEN_INDEX,
    USER_ID_INDEX,
    identity_registry,
)
from tessera_identity.infrastructure.persistence.dynamodb.repositories import (
    EphemeralTokenRepositoryDynamoDB,
    IdentityUserRepositoryDynamoDB,
    RefreshTokenRepositoryDynamoDB,
    UserRoleRepositoryDynamoDB,
)

__all__ = [
    "EMAIL_INDEX",
    "TOKEN_INDEX",
    "USER_ID_INDEX",
    "EphemeralTokenRepositoryDynamoDB",
    "IdentityUserRepositoryDynamoDB",
    "RefreshTokenRepositoryDynamoDB",
    "UserRoleRepositoryDynamoDB",
    "identity_registry",
]
