"""DynamoDB implementation of IdentityUserRepository."""

import logging

from tessera_identity.domain.user import IdentityUser, normalize_email
from tessera_identity.infrastructure.persistence.dynamodb.codecs import (
    EMAIL_INDEX,
    identity_user_codec,
)
from tessera_identity.repositories import IdentityUserRepository
from tessera_store import DynamoDBRepository, KeyValueStoreClient
from tessera_store.codec import ConverterRegistry

logger = logging.getLogger(__name__)


class IdentityUserRepositoryDynamoDB(
    DynamoDBRepository[IdentityUser],
    IdentityUserRepository,
):
    """DynamoDB implementation of the IdentityUserRepository interface."""

    def __init__(
        self,
        client: KeyValueStoreClient,
        table_name: str,
        registry: ConverterRegistry | None = None,
    ):
        super().__init__(client, table_name, identity_user_codec(registry))

    async def get_by_email(self, email: str) -> IdentityUser | None:
        normalized = normalize_email(email)
        if not normalized:
            return None

        matches = await self._query_index(EMAIL_INDEX, "email", normalized)
        if not matches:
            return None
        if len(matches) > 1:
            logger.warning(
                "Email is not unique: %s (%d users)",
                normalized,
                len(matches),
            )
        return matches[0]

    async def add(self, user: IdentityUser) -> None:
        user.email = normalize_email(user.email)
        await super().add(user)

    async def update(self, user: IdentityUser) -> None:
        user.email = normalize_email(user.email)
        await super().update(user)
