"""Abstract repository interface for user role assignments."""

from abc import ABC, abstractmethod
from uuid import UUID

from tessera_identity.domain.user import UserRole


class UserRoleRepository(ABC):
    """Abstract repository for user role assignments."""

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> list[UserRole]:
        """List every role assignment of a user."""

    @abstractmethod
    async def has_role(self, user_id: UUID, role_name: str) -> bool:
        """Check whether a user holds a role."""

    @abstractmethod
    async def add_role(
        self,
        user_id: UUID,
        role_name: str,
        assigned_by: UUID | None = None,
    ) -> None:
        """Assign a role. Assigning a role the user already holds is a no-op.

        Parameters
        ----------
        user_id
            User receiving the role
        role_name
            Name of the role
        assigned_by
            Id of the user who granted it (optional)
        """

    @abstractmethod
    async def remove_role(self, user_id: UUID, role_name: str) -> None:
        """Remove a role assignment if present."""

    @abstractmethod
    async def get_role_names(self, user_id: UUID) -> list[str]:
        """List the names of every role a user holds."""
