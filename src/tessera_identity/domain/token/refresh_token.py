"""Refresh token record."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from tessera_identity.domain.shared.time import ensure_tz_aware, utc_now
from tessera_identity.domain.user.user_role import NIL_UUID


@dataclass
class RefreshToken:
    """A persisted refresh token.

    One row per issued token; a user may hold several concurrently
    (multi-session). Revocation is a flag, rows are never deleted here.
    """

    id: UUID = field(default_factory=uuid4)
    user_id: UUID = NIL_UUID
    token: str = ""
    expires_at: datetime = field(default_factory=utc_now)
    is_revoked: bool = False

    @classmethod
    def create(cls, user_id: UUID, token: str, expires_at: datetime) -> "RefreshToken":
        return cls(user_id=user_id, token=token, expires_at=ensure_tz_aware(expires_at))

    @property
    def is_valid(self) -> bool:
        """Neither revoked nor expired."""
        return not self.is_revoked and ensure_tz_aware(self.expires_at) > utc_now()

    def is_expired(self, now: datetime | None = None) -> bool:
        return ensure_tz_aware(self.expires_at) < (now or utc_now())
