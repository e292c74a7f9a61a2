"""JWT token service.

Provides access token creation and verification. Refresh tokens are not
JWTs: they are opaque random strings persisted by the identity package.
"""

import secrets
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import jwt

from tessera_auth.exceptions import InvalidTokenError
from tessera_auth.schemas import TokenPayload

REFRESH_TOKEN_BYTES = 64


class JWTService:
    """Service for JWT access token creation and verification.

    Examples
    --------
    >>> service = JWTService(secret_key="a-secret-key-of-at-least-32-chars!")
    >>> token = service.create_access_token(user_id, "user@example.com")
    >>> payload = service.verify_token(token)
    >>> print(payload.user_id)
    """

    DEFAULT_ACCESS_EXPIRE_MINUTES = 15
    ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str,
        access_token_expire_minutes: int = DEFAULT_ACCESS_EXPIRE_MINUTES,
        issuer: str | None = None,
        audience: str | None = None,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        access_token_expire_minutes
            Minutes until an access token expires (default 15)
        issuer
            Value of the ``iss`` claim; checked on verification when set
        audience
            Value of the ``aud`` claim; checked on verification when set
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._access_expire = timedelta(minutes=access_token_expire_minutes)
        # Blank means the claim is neither set nor checked
        self._issuer = issuer or None
        self._audience = audience or None

    def create_access_token(
        self,
        user_id: UUID,
        email: str,
        roles: Sequence[str] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a short-lived access token.

        Parameters
        ----------
        user_id
            The user's unique identifier
        email
            The user's email address
        roles
            Role names to embed in the ``roles`` claim (optional)
        expires_delta
            Custom expiration time (optional)

        Returns
        -------
        The encoded JWT token string
        """
        now = datetime.now(tz=timezone.utc)
        expire = now + (expires_delta or self._access_expire)

        payload: dict = {
            "sub": str(user_id),
            "jti": str(uuid4()),
            "email": email,
            "type": "access",
            "iat": now,
            "exp": expire,
        }
        if self._issuer:
            payload["iss"] = self._issuer
        if self._audience:
            payload["aud"] = self._audience
        if roles:
            payload["roles"] = list(roles)

        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify and decode an access token.

        Parameters
        ----------
        token
            The JWT token string to verify

        Returns
        -------
        TokenPayload containing the decoded data

        Raises
        ------
        InvalidTokenError
            If token is invalid, expired, or malformed
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": ["exp", "sub"]},
            )

            user_id = UUID(payload["sub"])
            email = payload["email"]
            exp = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
            token_type = payload.get("type", "access")
            roles = tuple(payload.get("roles", ()))

        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e

        if token_type != "access":
            raise InvalidTokenError("Not an access token")

        return TokenPayload(
            user_id=user_id,
            email=email,
            exp=exp,
            token_type=token_type,
            roles=roles,
        )

    @staticmethod
    def generate_refresh_token() -> str:
        """Generate an opaque refresh token (64 random bytes, url-safe)."""
        return secrets.token_urlsafe(REFRESH_TOKEN_BYTES)
