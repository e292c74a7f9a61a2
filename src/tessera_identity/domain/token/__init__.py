"""Token domain: refresh tokens, ephemeral tokens and issued credentials."""

from tessera_identity.domain.token.auth_tokens import AuthTokens
from tessera_identity.domain.token.ephemeral_token import (
    EPHEMERAL_TOKEN_LIFETIME,
    EphemeralToken,
    TokenType,
)
from tessera_identity.domain.token.refresh_token import RefreshToken

__all__ = [
    "EPHEMERAL_TOKEN_LIFETIME",
    "AuthTokens",
    "EphemeralToken",
    "RefreshToken",
    "TokenType",
]
