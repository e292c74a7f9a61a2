"""Identity user record."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from tessera_identity.domain.shared.time import utc_now
from tessera_identity.domain.user.email import normalize_email


@dataclass
class IdentityUser:
    """A user account as stored in the users table.

    ``email`` is always stored normalized (trimmed, lowercase) and is
    unique across the table via the ``EmailIndex`` lookup.
    """

    id: UUID = field(default_factory=uuid4)
    email: str = ""
    password_hash: str = ""
    first_name: str | None = None
    last_name: str | None = None
    is_active: bool = True
    is_email_confirmed: bool = False
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def create(
        cls,
        email: str,
        password_hash: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> "IdentityUser":
        return cls(
            email=normalize_email(email),
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
        )

    def change_password_hash(self, password_hash: str) -> None:
        self.password_hash = password_hash
        self.updated_at = utc_now()

    def confirm_email(self) -> None:
        self.is_email_confirmed = True
        self.updated_at = utc_now()
