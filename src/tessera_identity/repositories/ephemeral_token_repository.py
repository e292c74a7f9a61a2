"""Abstract repository interface for ephemeral (single-use) tokens."""

from abc import ABC, abstractmethod
from uuid import UUID

from tessera_identity.domain.token import EphemeralToken, TokenType


class EphemeralTokenRepository(ABC):
    """Abstract repository for email confirmation and password reset tokens."""

    @abstractmethod
    async def add(self, token: EphemeralToken) -> None:
        """Insert a newly minted token."""

    @abstractmethod
    async def get_by_token_and_type(
        self,
        token: str,
        token_type: TokenType,
    ) -> EphemeralToken | None:
        """Find a token by its value and purpose.

        Returns
        -------
        The token whatever its validity, or None if there is no match
        """

    @abstractmethod
    async def get_by_user_and_type(
        self,
        user_id: UUID,
        token_type: TokenType,
    ) -> list[EphemeralToken]:
        """List every token of one purpose issued to a user."""

    @abstractmethod
    async def mark_used(self, token_id: UUID) -> None:
        """Mark a token as consumed.

        Parameters
        ----------
        token_id
            The token's unique identifier
        """

    @abstractmethod
    async def invalidate_all_for_user(self, user_id: UUID, token_type: TokenType) -> int:
        """Mark every currently valid token of one purpose as used.

        Returns
        -------
        Number of tokens invalidated
        """

    @abstractmethod
    async def cleanup_expired(self) -> int:
        """Remove expired tokens, used or not. Maintenance only.

        Returns
        -------
        Number of tokens deleted
        """
