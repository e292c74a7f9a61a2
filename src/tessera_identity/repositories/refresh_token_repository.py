"""Abstract repository interface for refresh tokens."""

from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID


class RefreshTokenRepository(ABC):
    """Abstract repository for refresh tokens.

    Tokens are addressed by their opaque value. Storing a new token never
    touches the user's other tokens.
    """

    @abstractmethod
    async def store(self, user_id: UUID, token: str, expires_at: datetime) -> None:
        """Persist a newly issued refresh token.

        Parameters
        ----------
        user_id
            Owner of the token
        token
            Opaque token value
        expires_at
            When the token stops being accepted
        """

    @abstractmethod
    async def is_valid(self, token: str) -> bool:
        """Check a token exists, is not revoked and has not expired."""

    @abstractmethod
    async def get_owner(self, token: str) -> UUID | None:
        """Return the id of the user a token was issued to.

        Returns
        -------
        The owner's id, or None if the token is unknown
        """

    @abstractmethod
    async def invalidate(self, token: str) -> None:
        """Revoke a token. Unknown or already revoked tokens are ignored."""
