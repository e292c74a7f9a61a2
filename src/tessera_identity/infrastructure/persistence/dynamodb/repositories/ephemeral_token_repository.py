"""DynamoDB implementation of EphemeralTokenRepository."""

import logging
from uuid import UUID

from tessera_identity.domain.shared.time import utc_now
from tessera_identity.domain.token import EphemeralToken, TokenType
from tessera_identity.infrastructure.persistence.dynamodb.codecs import (
    TOKEN_INDEX,
    USER_ID_INDEX,
    ephemeral_token_codec,
)
from tessera_identity.repositories import EphemeralTokenRepository
from tessera_store import DynamoDBRepository, KeyValueStoreClient
from tessera_store.codec import ConverterRegistry

logger = logging.getLogger(__name__)


class EphemeralTokenRepositoryDynamoDB(
    DynamoDBRepository[EphemeralToken],
    EphemeralTokenRepository,
):
    """DynamoDB implementation of the EphemeralTokenRepository interface."""

    def __init__(
        self,
        client: KeyValueStoreClient,
        table_name: str,
        registry: ConverterRegistry | None = None,
    ):
        super().__init__(client, table_name, ephemeral_token_codec(registry))

    async def get_by_token_and_type(
        self,
        token: str,
        token_type: TokenType,
    ) -> EphemeralToken | None:
        if not token:
            return None
        matches = await self._query_index(TOKEN_INDEX, "token", token)
        for match in matches:
            if match.type == token_type:
                return match
        return None

    async def get_by_user_and_type(
        self,
        user_id: UUID,
        token_type: TokenType,
    ) -> list[EphemeralToken]:
        tokens = await self._query_index(USER_ID_INDEX, "user_id", user_id)
        return [token for token in tokens if token.type == token_type]

    async def mark_used(self, token_id: UUID) -> None:
        await self._update_fields(token_id, is_used=True)
        logger.debug("Marked ephemeral token used: %s", token_id)

    async def invalidate_all_for_user(self, user_id: UUID, token_type: TokenType) -> int:
        tokens = await self.get_by_user_and_type(user_id, token_type)
        valid_tokens = [token for token in tokens if token.is_valid]

        for token in valid_tokens:
            await self.mark_used(token.id)

        if valid_tokens:
            logger.info(
                "Invalidated %d %s token(s) for user: %s",
                len(valid_tokens),
                token_type.value,
                user_id,
            )
        return len(valid_tokens)

    async def cleanup_expired(self) -> int:
        now = utc_now()
        removed = 0

        async for page in self._scan_pages():
            for token in page:
                if token.is_expired(now):
                    await self.delete(token.id)
                    removed += 1

        logger.info("Removed %d expired token(s) from %s", removed, self.table_name)
        return removed
