"""DynamoDB implementation of UserRoleRepository."""

import logging
from uuid import UUID

from tessera_identity.domain.user import UserRole
from tessera_identity.infrastructure.persistence.dynamodb.codecs import (
    USER_ID_INDEX,
    user_role_codec,
)
from tessera_identity.repositories import UserRoleRepository
from tessera_store import DynamoDBRepository, KeyValueStoreClient
from tessera_store.codec import ConverterRegistry

logger = logging.getLogger(__name__)


class UserRoleRepositoryDynamoDB(DynamoDBRepository[UserRole], UserRoleRepository):
    """DynamoDB implementation of the UserRoleRepository interface."""

    def __init__(
        self,
        client: KeyValueStoreClient,
        table_name: str,
        registry: ConverterRegistry | None = None,
    ):
        super().__init__(client, table_name, user_role_codec(registry))

    async def get_by_user_id(self, user_id: UUID) -> list[UserRole]:
        return await self._query_index(USER_ID_INDEX, "user_id", user_id)

    async def has_role(self, user_id: UUID, role_name: str) -> bool:
        roles = await self.get_by_user_id(user_id)
        return any(role.role_name == role_name for role in roles)

    async def add_role(
        self,
        user_id: UUID,
        role_name: str,
        assigned_by: UUID | None = None,
    ) -> None:
        if await self.has_role(user_id, role_name):
            logger.debug("User %s already has role %s", user_id, role_name)
            return

        await self.add(UserRole.create(user_id, role_name, assigned_by))
        logger.info("Assigned role %s to user: %s", role_name, user_id)

    async def remove_role(self, user_id: UUID, role_name: str) -> None:
        roles = await self.get_by_user_id(user_id)
        for role in roles:
            if role.role_name == role_name:
                await self.delete(role.id)
                logger.info("Removed role %s from user: %s", role_name, user_id)

    async def get_role_names(self, user_id: UUID) -> list[str]:
        roles = await self.get_by_user_id(user_id)
        return [role.role_name for role in roles]
