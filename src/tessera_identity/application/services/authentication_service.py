"""Authentication service - orchestrates the credential lifecycle.

Login, registration, access token refresh, logout, password change and
reset, and email confirmation. Expected failures are returned as
:class:`Result` values; only store faults propagate as exceptions.

Token values are persisted as SHA-256 hex digests. Callers only ever see
the raw values, which are hashed again before every lookup.

Multi-step flows are not transactional. Invalidating old single-use
tokens and minting the new one are separate writes, and the user record
is persisted before its token is marked used.
"""

import hashlib
import logging
import secrets
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta
from uuid import UUID

from tessera_auth import InvalidTokenError, TokenPayload
from tessera_auth.services import JWTService, PasswordHashingService, PasswordValidator
from tessera_identity.domain.shared import (
    Result,
    TokenErrors,
    UserErrors,
    utc_now,
)
from tessera_identity.domain.token import (
    EPHEMERAL_TOKEN_LIFETIME,
    AuthTokens,
    EphemeralToken,
    TokenType,
)
from tessera_identity.domain.user import (
    Email,
    IdentityUser,
    InvalidEmailError,
    normalize_email,
)
from tessera_identity.notifications import IdentityNotificationService
from tessera_identity.repositories import (
    EphemeralTokenRepository,
    IdentityUserRepository,
    RefreshTokenRepository,
    UserRoleRepository,
)

logger = logging.getLogger(__name__)

EPHEMERAL_TOKEN_BYTES = 32


@dataclass(frozen=True)
class AuthenticationOptions:
    """Behavioural switches of the authentication flows."""

    refresh_token_expire_days: int = 30
    require_email_confirmation: bool = True
    send_welcome_email: bool = True


class AuthenticationService:
    """Application service for authentication operations.

    Examples
    --------
    >>> service = AuthenticationService(
    ...     user_repository=users,
    ...     token_repository=refresh_tokens,
    ...     ephemeral_token_repository=ephemeral_tokens,
    ...     password_service=PasswordHashingService(),
    ...     password_validator=PasswordValidator(),
    ...     jwt_service=JWTService(secret_key),
    ... )
    >>> result = await service.login("user@example.com", "S3cure_password")
    >>> result.value.access_token
    'eyJ...'
    """

    def __init__(  # noqa: PLR0913
        self,
        user_repository: IdentityUserRepository,
        token_repository: RefreshTokenRepository,
        ephemeral_token_repository: EphemeralTokenRepository,
        password_service: PasswordHashingService,
        password_validator: PasswordValidator,
        jwt_service: JWTService,
        notification_service: IdentityNotificationService | None = None,
        role_repository: UserRoleRepository | None = None,
        options: AuthenticationOptions | None = None,
    ):
        self._user_repo = user_repository
        self._token_repo = token_repository
        self._ephemeral_repo = ephemeral_token_repository
        self._password_service = password_service
        self._password_validator = password_validator
        self._jwt_service = jwt_service
        self._notifications = notification_service
        self._role_repo = role_repository
        self._options = options or AuthenticationOptions()

    async def login(self, email: str, password: str) -> Result[AuthTokens]:
        """Authenticate a user with email and password.

        Parameters
        ----------
        email
            Email address, matched case-insensitively
        password
            Plaintext password

        Returns
        -------
        Result carrying AuthTokens on success. Failures:
        User.NotFound, User.InvalidPassword, User.Inactive,
        Users.EmailNotConfirmed (when confirmation is required)
        """
        normalized = normalize_email(email)
        user = await self._user_repo.get_by_email(normalized)
        if user is None:
            logger.debug("Login failed: unknown email %s", normalized)
            return Result.failure(UserErrors.NOT_FOUND)

        if not self._password_service.verify(user.password_hash, password):
            logger.info("Login failed: invalid password for user %s", user.id)
            return Result.failure(UserErrors.INVALID_PASSWORD)

        if not user.is_active:
            logger.info("Login rejected: user %s is inactive", user.id)
            return Result.failure(UserErrors.INACTIVE)

        if self._options.require_email_confirmation and not user.is_email_confirmed:
            logger.info("Login rejected: email of user %s not confirmed", user.id)
            return Result.failure(UserErrors.EMAIL_NOT_CONFIRMED)

        tokens = await self._issue_tokens(user)
        logger.info("User logged in: %s", user.id)
        return Result.success(tokens)

    async def register(self, email: str, password: str) -> Result[AuthTokens]:
        """Register a new user and sign them in.

        Returns
        -------
        Result carrying AuthTokens on success. Failures:
        User.InvalidEmail, User.AlreadyExists, User.InvalidPassword
        (a ValidationError listing every violated password rule)
        """
        normalized = normalize_email(email)
        try:
            Email(normalized)
        except InvalidEmailError:
            return Result.failure(UserErrors.INVALID_EMAIL)

        existing = await self._user_repo.get_by_email(normalized)
        if existing is not None:
            return Result.failure(UserErrors.ALREADY_EXISTS)

        is_valid, violations = self._password_validator.validate_password(password)
        if not is_valid:
            return Result.failure(UserErrors.password_policy_violation(violations))

        user = IdentityUser.create(
            email=normalized,
            password_hash=self._password_service.hash(password),
        )
        await self._user_repo.add(user)
        logger.info("Registered user: %s (email: %s)", user.id, user.email)

        tokens = await self._issue_tokens(user)

        if self._options.send_welcome_email:
            await self._notify(
                "Welcome email",
                lambda notifier: notifier.send_welcome_email(user.id, user.email),
            )

        return Result.success(tokens)

    async def change_password(
        self,
        user_id: UUID,
        old_password: str,
        new_password: str,
    ) -> Result[None]:
        """Change a password after verifying the current one.

        The stored hash is only replaced once both the old password and
        the new password policy check pass.
        """
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            return Result.failure(UserErrors.NOT_FOUND)

        if not self._password_service.verify(user.password_hash, old_password):
            logger.info("Password change rejected for user %s", user.id)
            return Result.failure(UserErrors.INVALID_PASSWORD)

        is_valid, violations = self._password_validator.validate_password(new_password)
        if not is_valid:
            return Result.failure(UserErrors.password_policy_violation(violations))

        user.change_password_hash(self._password_service.hash(new_password))
        await self._user_repo.update(user)
        logger.info("Password changed for user: %s", user.id)

        await self._notify(
            "Password change notification",
            lambda notifier: notifier.send_password_changed(user.id, user.email),
        )
        return Result.success()

    async def refresh_access_token(self, refresh_token: str) -> Result[str]:
        """Mint a new access token from a valid refresh token.

        The refresh token itself is not rotated.
        """
        token_hash = self._hash_token(refresh_token)
        if not await self._token_repo.is_valid(token_hash):
            return Result.failure(TokenErrors.INVALID_REFRESH_TOKEN)

        user_id = await self._token_repo.get_owner(token_hash)
        if user_id is None:
            return Result.failure(TokenErrors.OWNER_NOT_FOUND)

        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            return Result.failure(UserErrors.NOT_FOUND)

        access_token = await self._create_access_token(user)
        logger.debug("Access token refreshed for user: %s", user.id)
        return Result.success(access_token)

    async def send_confirmation_email(self, user_id: UUID) -> Result[None]:
        """Mint a fresh email confirmation token and hand it to the notifier."""
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            return Result.failure(UserErrors.not_found_by_id(user_id))

        raw_token = await self._mint_ephemeral_token(
            user.id,
            TokenType.EMAIL_CONFIRMATION,
        )

        await self._notify(
            "Confirmation email",
            lambda notifier: notifier.send_email_confirmation(
                user.id,
                user.email,
                raw_token,
            ),
        )
        return Result.success()

    async def confirm_email(self, user_id: UUID, token: str) -> Result[None]:
        """Confirm a user's email address with a confirmation token."""
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            return Result.failure(UserErrors.NOT_FOUND)

        confirmation = await self._ephemeral_repo.get_by_token_and_type(
            self._hash_token(token),
            TokenType.EMAIL_CONFIRMATION,
        )
        if not self._is_usable(confirmation, user.id):
            return Result.failure(TokenErrors.INVALID_EMAIL_TOKEN)

        user.confirm_email()
        await self._user_repo.update(user)
        await self._ephemeral_repo.mark_used(confirmation.id)  # type: ignore[union-attr]

        logger.info("Email confirmed for user: %s", user.id)
        return Result.success()

    async def generate_password_reset_token(self, email: str) -> Result[None]:
        """Mint a fresh password reset token and hand it to the notifier."""
        normalized = normalize_email(email)
        user = await self._user_repo.get_by_email(normalized)
        if user is None:
            return Result.failure(UserErrors.NOT_FOUND)

        raw_token = await self._mint_ephemeral_token(user.id, TokenType.PASSWORD_RESET)

        await self._notify(
            "Password reset email",
            lambda notifier: notifier.send_password_reset(
                user.id,
                user.email,
                raw_token,
            ),
        )
        return Result.success()

    async def reset_password(
        self,
        email: str,
        token: str,
        new_password: str,
    ) -> Result[None]:
        """Set a new password using a password reset token."""
        normalized = normalize_email(email)
        user = await self._user_repo.get_by_email(normalized)
        if user is None:
            return Result.failure(UserErrors.NOT_FOUND)

        reset_token = await self._ephemeral_repo.get_by_token_and_type(
            self._hash_token(token),
            TokenType.PASSWORD_RESET,
        )
        if not self._is_usable(reset_token, user.id):
            return Result.failure(TokenErrors.INVALID_RESET_TOKEN)

        is_valid, violations = self._password_validator.validate_password(new_password)
        if not is_valid:
            return Result.failure(UserErrors.password_policy_violation(violations))

        user.change_password_hash(self._password_service.hash(new_password))
        await self._user_repo.update(user)
        await self._ephemeral_repo.mark_used(reset_token.id)  # type: ignore[union-attr]

        logger.info("Password reset completed for user: %s", user.id)
        return Result.success()

    async def logout(self, refresh_token: str) -> Result[None]:
        """Revoke a refresh token. Always succeeds."""
        await self._token_repo.invalidate(self._hash_token(refresh_token))
        return Result.success()

    def verify_access_token(self, access_token: str) -> Result[TokenPayload]:
        """Decode and verify an access token."""
        try:
            payload = self._jwt_service.verify_token(access_token)
        except InvalidTokenError as e:
            return Result.failure(
                TokenErrors.INVALID_ACCESS_TOKEN.with_metadata("reason", e.message),
            )
        return Result.success(payload)

    async def get_user(self, user_id: UUID) -> Result[IdentityUser]:
        """Look up the user behind an authenticated request."""
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            return Result.failure(UserErrors.NOT_FOUND)
        return Result.success(user)

    async def _issue_tokens(self, user: IdentityUser) -> AuthTokens:
        access_token = await self._create_access_token(user)
        refresh_token = self._jwt_service.generate_refresh_token()
        expires_at = utc_now() + timedelta(days=self._options.refresh_token_expire_days)

        await self._token_repo.store(
            user.id,
            self._hash_token(refresh_token),
            expires_at,
        )
        return AuthTokens(access_token=access_token, refresh_token=refresh_token)

    async def _create_access_token(self, user: IdentityUser) -> str:
        roles: list[str] = []
        if self._role_repo is not None:
            roles = await self._role_repo.get_role_names(user.id)
        return self._jwt_service.create_access_token(user.id, user.email, roles=roles)

    async def _mint_ephemeral_token(
        self,
        user_id: UUID,
        token_type: TokenType,
    ) -> str:
        """Persist a new single-use token and return its raw value."""
        # Old and new tokens are separate writes; briefly none may be valid
        await self._ephemeral_repo.invalidate_all_for_user(user_id, token_type)

        raw_token = secrets.token_urlsafe(EPHEMERAL_TOKEN_BYTES)
        token = EphemeralToken.create(
            user_id=user_id,
            token=self._hash_token(raw_token),
            token_type=token_type,
            expires_at=utc_now() + EPHEMERAL_TOKEN_LIFETIME,
        )
        await self._ephemeral_repo.add(token)
        logger.info("Issued %s token for user: %s", token_type.value, user_id)
        return raw_token

    def _hash_token(self, raw_token: str) -> str:
        # Empty stays empty so repositories can reject it without a lookup
        if not raw_token:
            return ""
        return hashlib.sha256(raw_token.encode()).hexdigest()

    @staticmethod
    def _is_usable(token: EphemeralToken | None, user_id: UUID) -> bool:
        return token is not None and token.user_id == user_id and token.is_valid

    async def _notify(
        self,
        description: str,
        send: Callable[[IdentityNotificationService], Awaitable[None]],
    ) -> None:
        if self._notifications is None:
            logger.warning("%s not sent: no notification service configured", description)
            return
        try:
            await send(self._notifications)
        except Exception as e:
            logger.warning("%s failed: %s", description, e)
