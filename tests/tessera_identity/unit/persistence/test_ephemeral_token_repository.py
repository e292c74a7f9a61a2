"""Tests for EphemeralTokenRepositoryDynamoDB on the in-memory store."""

from uuid import uuid4

import pytest

from tessera_identity.domain.token import TokenType
from tessera_identity.infrastructure.persistence.dynamodb.repositories import (
    EphemeralTokenRepositoryDynamoDB,
)
from tests.shared.fixtures import InMemoryStoreClient, TestTokenFactory

TEMPORARY_TABLE = "TemporaryTokens"


class TestEphemeralTokenRepository:
    """Single-use token storage and lifecycle."""

    def setup_method(self):
        self.store = InMemoryStoreClient(page_size=2)
        self.repository = EphemeralTokenRepositoryDynamoDB(
            self.store,
            TEMPORARY_TABLE,
        )
        self.user_id = uuid4()

    @pytest.mark.asyncio
    async def test_get_by_token_and_type(self):
        token = TestTokenFactory.valid(self.user_id, TokenType.PASSWORD_RESET)
        await self.repository.add(token)

        loaded = await self.repository.get_by_token_and_type(
            token.token,
            TokenType.PASSWORD_RESET,
        )

        assert loaded == token
        assert loaded.type is TokenType.PASSWORD_RESET

    @pytest.mark.asyncio
    async def test_type_must_match(self):
        token = TestTokenFactory.valid(self.user_id, TokenType.PASSWORD_RESET)
        await self.repository.add(token)

        loaded = await self.repository.get_by_token_and_type(
            token.token,
            TokenType.EMAIL_CONFIRMATION,
        )

        assert loaded is None

    @pytest.mark.asyncio
    async def test_empty_token(self):
        assert (
            await self.repository.get_by_token_and_type("", TokenType.PASSWORD_RESET)
            is None
        )

    @pytest.mark.asyncio
    async def test_type_stored_by_name(self):
        token = TestTokenFactory.valid(self.user_id, TokenType.EMAIL_CONFIRMATION)

        await self.repository.add(token)

        row = self.store.tables[TEMPORARY_TABLE][str(token.id)]
        assert row["Type"] == {"S": "EmailConfirmation"}

    @pytest.mark.asyncio
    async def test_mark_used(self):
        token = TestTokenFactory.valid(self.user_id)
        await self.repository.add(token)

        await self.repository.mark_used(token.id)

        loaded = await self.repository.get_by_id(token.id)
        assert loaded.is_used
        assert not loaded.is_valid

    @pytest.mark.asyncio
    async def test_get_by_user_and_type_follows_pages(self):
        for index in range(5):
            await self.repository.add(
                TestTokenFactory.valid(self.user_id, token=f"reset-{index}"),
            )
        await self.repository.add(
            TestTokenFactory.valid(self.user_id, TokenType.EMAIL_CONFIRMATION),
        )

        tokens = await self.repository.get_by_user_and_type(
            self.user_id,
            TokenType.PASSWORD_RESET,
        )

        assert len(tokens) == 5
        assert self.store.calls["query"] == 3

    @pytest.mark.asyncio
    async def test_invalidate_all_for_user(self):
        await self.repository.add(TestTokenFactory.valid(self.user_id, token="a"))
        await self.repository.add(TestTokenFactory.valid(self.user_id, token="b"))
        await self.repository.add(TestTokenFactory.used(self.user_id))
        await self.repository.add(TestTokenFactory.expired(self.user_id))
        other_user = TestTokenFactory.valid(uuid4(), token="c")
        await self.repository.add(other_user)

        count = await self.repository.invalidate_all_for_user(
            self.user_id,
            TokenType.PASSWORD_RESET,
        )

        assert count == 2
        remaining = await self.repository.get_by_user_and_type(
            self.user_id,
            TokenType.PASSWORD_RESET,
        )
        assert not any(token.is_valid for token in remaining)
        assert (await self.repository.get_by_id(other_user.id)).is_valid

    @pytest.mark.asyncio
    async def test_invalidate_all_with_nothing_valid(self):
        count = await self.repository.invalidate_all_for_user(
            self.user_id,
            TokenType.EMAIL_CONFIRMATION,
        )

        assert count == 0

    @pytest.mark.asyncio
    async def test_cleanup_expired(self):
        await self.repository.add(TestTokenFactory.valid(self.user_id, token="keep"))
        await self.repository.add(TestTokenFactory.used(self.user_id))
        for index in range(3):
            await self.repository.add(
                TestTokenFactory.expired(self.user_id, token=f"old-{index}"),
            )

        removed = await self.repository.cleanup_expired()

        assert removed == 3
        assert len(self.store.tables[TEMPORARY_TABLE]) == 2

    @pytest.mark.asyncio
    async def test_cleanup_expired_deletes_across_pages(self):
        for index in range(7):
            await self.repository.add(
                TestTokenFactory.expired(self.user_id, token=f"old-{index}"),
            )

        removed = await self.repository.cleanup_expired()

        assert removed == 7
        assert self.store.tables[TEMPORARY_TABLE] == {}
        assert self.store.calls["scan"] == 4

    @pytest.mark.asyncio
    async def test_cleanup_expired_skips_corrupt_rows(self, caplog):
        for index in range(3):
            await self.repository.add(
                TestTokenFactory.expired(self.user_id, token=f"old-{index}"),
            )
        corrupt = self.repository._codec.encode(TestTokenFactory.expired(self.user_id))
        corrupt["ExpiresAt"] = {"S": "not-a-timestamp"}
        self.store.tables[TEMPORARY_TABLE][corrupt["Id"]["S"]] = corrupt

        removed = await self.repository.cleanup_expired()

        assert removed == 3
        assert list(self.store.tables[TEMPORARY_TABLE]) == [corrupt["Id"]["S"]]
        assert "Skipping undecodable" in caplog.text
