"""Auth schemas and data structures."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class TokenPayload:
    """Decoded access token payload.

    Attributes
    ----------
    user_id
        The unique identifier of the user (``sub`` claim)
    email
        The user's email address
    exp
        Token expiration timestamp
    token_type
        Always "access"; refresh tokens are opaque and never decoded
    roles
        Role names granted to the user when the token was minted
    """

    user_id: UUID
    email: str
    exp: datetime
    token_type: str = "access"
    roles: tuple[str, ...] = field(default_factory=tuple)

    def is_expired(self) -> bool:
        """Check if the token has expired."""
        return datetime.now(tz=self.exp.tzinfo) > self.exp

    def is_access_token(self) -> bool:
        return self.token_type == "access"

    def has_role(self, role_name: str) -> bool:
        return role_name in self.roles
