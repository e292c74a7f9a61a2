"""Tests for RefreshTokenRepositoryDynamoDB on the in-memory store."""

from datetime import timedelta
from uuid import uuid4

import pytest

from tessera_identity.domain.shared import utc_now
from tessera_identity.infrastructure.persistence.dynamodb.repositories import (
    RefreshTokenRepositoryDynamoDB,
)
from tests.shared.fixtures import InMemoryStoreClient

TOKENS_TABLE = "RefreshTokens"


class TestRefreshTokenRepository:
    """Refresh token storage, validation and revocation."""

    def setup_method(self):
        self.store = InMemoryStoreClient()
        self.repository = RefreshTokenRepositoryDynamoDB(self.store, TOKENS_TABLE)
        self.user_id = uuid4()

    async def _store(self, token: str, lifetime: timedelta = timedelta(days=1)):
        await self.repository.store(self.user_id, token, utc_now() + lifetime)

    @pytest.mark.asyncio
    async def test_stored_token_is_valid(self):
        await self._store("refresh-1")

        assert await self.repository.is_valid("refresh-1")
        assert await self.repository.get_owner("refresh-1") == self.user_id

    @pytest.mark.asyncio
    async def test_unknown_token(self):
        assert not await self.repository.is_valid("missing")
        assert await self.repository.get_owner("missing") is None

    @pytest.mark.asyncio
    async def test_empty_token_does_not_touch_store(self):
        assert not await self.repository.is_valid("")
        assert self.store.calls["query"] == 0

    @pytest.mark.asyncio
    async def test_expired_token_is_invalid(self):
        await self._store("old", lifetime=timedelta(seconds=-1))

        assert not await self.repository.is_valid("old")
        assert await self.repository.get_owner("old") == self.user_id

    @pytest.mark.asyncio
    async def test_invalidate_revokes(self):
        await self._store("refresh-1")

        await self.repository.invalidate("refresh-1")

        assert not await self.repository.is_valid("refresh-1")
        [row] = self.store.tables[TOKENS_TABLE].values()
        assert row["IsRevoked"] == {"BOOL": True}

    @pytest.mark.asyncio
    async def test_invalidate_twice_is_harmless(self):
        await self._store("refresh-1")

        await self.repository.invalidate("refresh-1")
        await self.repository.invalidate("refresh-1")
        await self.repository.invalidate("never-issued")

        assert not await self.repository.is_valid("refresh-1")

    @pytest.mark.asyncio
    async def test_sessions_are_independent(self):
        await self._store("session-a")
        await self._store("session-b")

        await self.repository.invalidate("session-a")

        assert not await self.repository.is_valid("session-a")
        assert await self.repository.is_valid("session-b")

    @pytest.mark.asyncio
    async def test_lookups_use_token_index(self):
        await self._store("refresh-1")

        await self.repository.is_valid("refresh-1")
        await self.repository.get_owner("refresh-1")

        assert self.store.calls["scan"] == 0
        assert self.store.calls["query"] == 2
