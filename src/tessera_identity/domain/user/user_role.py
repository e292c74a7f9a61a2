"""User role assignment record."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from tessera_identity.domain.shared.time import utc_now

NIL_UUID = UUID(int=0)


@dataclass
class UserRole:
    """Assignment of a named role to a user.

    ``(user_id, role_name)`` is unique by convention; the repository
    checks before inserting.
    """

    id: UUID = field(default_factory=uuid4)
    user_id: UUID = NIL_UUID
    role_name: str = ""
    assigned_at: datetime = field(default_factory=utc_now)
    assigned_by: UUID | None = None

    @classmethod
    def create(
        cls,
        user_id: UUID,
        role_name: str,
        assigned_by: UUID | None = None,
    ) -> "UserRole":
        return cls(user_id=user_id, role_name=role_name, assigned_by=assigned_by)
