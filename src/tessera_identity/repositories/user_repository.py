"""Abstract repository interface for identity users."""

from abc import ABC, abstractmethod
from uuid import UUID

from tessera_identity.domain.user import IdentityUser


class IdentityUserRepository(ABC):
    """Abstract repository for identity users."""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> IdentityUser | None:
        """Get a user by id (strongly consistent read)."""

    @abstractmethod
    async def get_by_email(self, email: str) -> IdentityUser | None:
        """Find a user by email address.

        Parameters
        ----------
        email
            Address in any case or padding; normalized before lookup

        Returns
        -------
        The user, or None if no user has that address
        """

    @abstractmethod
    async def get_all(self, limit: int = 100) -> list[IdentityUser]:
        """List up to ``limit`` users. Full-table scan."""

    @abstractmethod
    async def add(self, user: IdentityUser) -> None:
        """Insert a new user.

        Raises
        ------
        EntityAlreadyExistsError
            If a user with the same id already exists
        """

    @abstractmethod
    async def update(self, user: IdentityUser) -> None:
        """Persist every attribute of an existing user (last writer wins)."""

    @abstractmethod
    async def delete(self, user_id: UUID) -> None:
        """Delete a user; deleting a missing user is not an error."""
