"""DynamoDB implementation of RefreshTokenRepository."""

import logging
from datetime import datetime
from uuid import UUID

from tessera_identity.domain.token import RefreshToken
from tessera_identity.infrastructure.persistence.dynamodb.codecs import (
    TOKEN_INDEX,
    refresh_token_codec,
)
from tessera_identity.repositories import RefreshTokenRepository
from tessera_store import DynamoDBRepository, KeyValueStoreClient
from tessera_store.codec import ConverterRegistry

logger = logging.getLogger(__name__)


class RefreshTokenRepositoryDynamoDB(
    DynamoDBRepository[RefreshToken],
    RefreshTokenRepository,
):
    """DynamoDB implementation of the RefreshTokenRepository interface.

    Lookups by token value go through ``TokenIndex``; the table is never
    scanned on the request path.
    """

    def __init__(
        self,
        client: KeyValueStoreClient,
        table_name: str,
        registry: ConverterRegistry | None = None,
    ):
        super().__init__(client, table_name, refresh_token_codec(registry))

    async def store(self, user_id: UUID, token: str, expires_at: datetime) -> None:
        refresh_token = RefreshToken.create(user_id, token, expires_at)
        await self.add(refresh_token)
        logger.info("Stored refresh token %s for user: %s", refresh_token.id, user_id)

    async def is_valid(self, token: str) -> bool:
        refresh_token = await self._find_by_token(token)
        if refresh_token is None:
            return False
        return refresh_token.is_valid

    async def get_owner(self, token: str) -> UUID | None:
        refresh_token = await self._find_by_token(token)
        if refresh_token is None:
            return None
        return refresh_token.user_id

    async def invalidate(self, token: str) -> None:
        refresh_token = await self._find_by_token(token)
        if refresh_token is None:
            logger.debug("Refresh token to invalidate not found")
            return

        await self._update_fields(refresh_token.id, is_revoked=True)
        logger.info(
            "Revoked refresh token %s for user: %s",
            refresh_token.id,
            refresh_token.user_id,
        )

    async def _find_by_token(self, token: str) -> RefreshToken | None:
        if not token:
            return None
        matches = await self._query_index(TOKEN_INDEX, "token", token)
        if not matches:
            return None
        if len(matches) > 1:
            logger.warning("Refresh token value is not unique (%d rows)", len(matches))
        return matches[0]
