"""
Test data factories for creating deterministic test entities.

Use fixed UUIDs and predictable values to ensure reproducibility.

Usage:
    from tests.shared.fixtures.factories import TestUserFactory

    def test_something():
        user = TestUserFactory.alice()
"""

from dataclasses import dataclass
from datetime import timedelta
from uuid import UUID

from tessera_auth.services import PasswordHashingService
from tessera_identity.domain.shared.time import utc_now
from tessera_identity.domain.token import EphemeralToken, TokenType
from tessera_identity.domain.user import IdentityUser

TEST_JWT_SECRET = "test-secret-key-that-is-at-least-32-characters-long"
TEST_PASSWORD = "Str0ng_Passw0rd!"
TEST_NEW_PASSWORD = "An0ther_Passw0rd?"

# Lowest bcrypt cost keeps hashing fast in tests
TEST_ITERATIONS = 1000

_hasher = PasswordHashingService(iterations=TEST_ITERATIONS)


@dataclass(frozen=True)
class TestUserFactory:
    """Factory for creating test users with deterministic IDs."""

    DEFAULT_ID = UUID("12345678-1234-5678-1234-567812345678")
    DEFAULT_EMAIL = "test@example.com"

    ALICE_ID = UUID("aaaaaaaa-aaaa-aaaa-aaaa-aaaaaaaaaaaa")
    ALICE_EMAIL = "alice@example.com"

    BOB_ID = UUID("bbbbbbbb-bbbb-bbbb-bbbb-bbbbbbbbbbbb")
    BOB_EMAIL = "bob@example.com"

    @classmethod
    def default(
        cls,
        password: str = TEST_PASSWORD,
        is_email_confirmed: bool = True,
        is_active: bool = True,
    ) -> IdentityUser:
        return IdentityUser(
            id=cls.DEFAULT_ID,
            email=cls.DEFAULT_EMAIL,
            password_hash=_hasher.hash(password),
            is_email_confirmed=is_email_confirmed,
            is_active=is_active,
        )

    @classmethod
    def alice(cls) -> IdentityUser:
        return IdentityUser(
            id=cls.ALICE_ID,
            email=cls.ALICE_EMAIL,
            password_hash=_hasher.hash(TEST_PASSWORD),
            first_name="Alice",
            is_email_confirmed=True,
        )

    @classmethod
    def bob(cls) -> IdentityUser:
        return IdentityUser(
            id=cls.BOB_ID,
            email=cls.BOB_EMAIL,
            password_hash=_hasher.hash(TEST_PASSWORD),
            first_name="Bob",
            last_name="Builder",
        )


@dataclass(frozen=True)
class TestTokenFactory:
    """Factory for ephemeral tokens in known states."""

    @staticmethod
    def valid(
        user_id: UUID,
        token_type: TokenType = TokenType.PASSWORD_RESET,
        token: str = "valid-token",
    ) -> EphemeralToken:
        return EphemeralToken.create(
            user_id=user_id,
            token=token,
            token_type=token_type,
            expires_at=utc_now() + timedelta(hours=1),
        )

    @staticmethod
    def expired(
        user_id: UUID,
        token_type: TokenType = TokenType.PASSWORD_RESET,
        token: str = "expired-token",
    ) -> EphemeralToken:
        return EphemeralToken.create(
            user_id=user_id,
            token=token,
            token_type=token_type,
            expires_at=utc_now() - timedelta(minutes=5),
        )

    @staticmethod
    def used(
        user_id: UUID,
        token_type: TokenType = TokenType.PASSWORD_RESET,
        token: str = "used-token",
    ) -> EphemeralToken:
        token_record = TestTokenFactory.valid(user_id, token_type, token)
        token_record.is_used = True
        return token_record
