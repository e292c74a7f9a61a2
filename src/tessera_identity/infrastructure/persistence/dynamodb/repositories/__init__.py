"""DynamoDB repository implementations."""

from tessera_identity.infrastructure.persistence.dynamodb.repositories.ephemeral_token_repository import (  # noqa: E501
    EphemeralTokenRepositoryDynamoDB,
)
from tessera_identity.infrastructure.persistence.dynamodb.repositories.refresh_token_repository import (  # noqa: E501
    RefreshTokenRepositoryDynamoDB,
)
from tessera_identity.infrastructure.persistence.dynamodb.repositories.user_repository import (  # noqa: E501
    IdentityUserRepositoryDynamoDB,
)
from tessera_identity.infrastructure.persistence.dynamodb.repositories.user_role_repository import (  # noqa: E501
    UserRoleRepositoryDynamoDB,
)

__all__ = [
    "EphemeralTokenRepositoryDynamoDB",
    "IdentityUserRepositoryDynamoDB",
    "RefreshTokenRepositoryDynamoDB",
    "UserRoleRepositoryDynamoDB",
]
