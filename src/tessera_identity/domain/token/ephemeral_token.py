"""Single-use tokens for email confirmation and password reset."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from uuid import UUID, uuid4

from tessera_identity.domain.shared.time import ensure_tz_aware, utc_now
from tessera_identity.domain.user.user_role import NIL_UUID

EPHEMERAL_TOKEN_LIFETIME = timedelta(hours=1)


class TokenType(str, Enum):
    """Purpose of an ephemeral token, stored by name."""

    EMAIL_CONFIRMATION = "EmailConfirmation"
    PASSWORD_RESET = "PasswordReset"


@dataclass
class EphemeralToken:
    """A short-lived, single-use token bound to one user and one purpose."""

    id: UUID = field(default_factory=uuid4)
    user_id: UUID = NIL_UUID
    token: str = ""
    type: TokenType = TokenType.EMAIL_CONFIRMATION
    expires_at: datetime = field(default_factory=utc_now)
    created_at: datetime = field(default_factory=utc_now)
    is_used: bool = False

    @classmethod
    def create(
        cls,
        user_id: UUID,
        token: str,
        token_type: TokenType,
        expires_at: datetime | None = None,
    ) -> "EphemeralToken":
        return cls(
            user_id=user_id,
            token=token,
            type=token_type,
            expires_at=ensure_tz_aware(
                expires_at or utc_now() + EPHEMERAL_TOKEN_LIFETIME,
            ),
        )

    @property
    def is_valid(self) -> bool:
        return not self.is_used and ensure_tz_aware(self.expires_at) > utc_now()

    def is_expired(self, now: datetime | None = None) -> bool:
        return ensure_tz_aware(self.expires_at) < (now or utc_now())
