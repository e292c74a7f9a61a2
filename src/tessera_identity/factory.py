"""Wiring of repositories and services from Settings."""

import logging
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from tessera_auth.services import JWTService, PasswordHashingService, PasswordValidator
from tessera_config import Settings
from tessera_identity.application.services import (
    AuthenticationOptions,
    AuthenticationService,
)
from tessera_identity.infrastructure.persistence.dynamodb import (
    EphemeralTokenRepositoryDynamoDB,
    IdentityUserRepositoryDynamoDB,
    RefreshTokenRepositoryDynamoDB,
    UserRoleRepositoryDynamoDB,
    identity_registry,
)
from tessera_identity.notifications import (
    IdentityNotificationService,
    NullNotificationService,
)
from tessera_store import KeyValueStoreClient
from tessera_store.dynamodb import DynamoDBStoreClient, connect_dynamodb

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdentityRepositories:
    """The four identity repositories sharing one store client."""

    users: IdentityUserRepositoryDynamoDB
    refresh_tokens: RefreshTokenRepositoryDynamoDB
    ephemeral_tokens: EphemeralTokenRepositoryDynamoDB
    user_roles: UserRoleRepositoryDynamoDB


def open_store(settings: Settings) -> AbstractAsyncContextManager[DynamoDBStoreClient]:
    """Open a DynamoDB client configured from settings.

    Usage:
        async with open_store(settings) as client:
            repositories = build_repositories(client, settings)
    """
    secret_key = settings.aws_secret_access_key
    return connect_dynamodb(
        region_name=settings.aws_region,
        endpoint_url=settings.aws_endpoint_url,
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=secret_key.get_secret_value() if secret_key else None,
    )


def build_repositories(
    client: KeyValueStoreClient,
    settings: Settings,
) -> IdentityRepositories:
    registry = identity_registry()
    tables = settings.table_names
    return IdentityRepositories(
        users=IdentityUserRepositoryDynamoDB(client, tables.users, registry),
        refresh_tokens=RefreshTokenRepositoryDynamoDB(client, tables.tokens, registry),
        ephemeral_tokens=EphemeralTokenRepositoryDynamoDB(
            client,
            tables.temporary_tokens,
            registry,
        ),
        user_roles=UserRoleRepositoryDynamoDB(client, tables.user_roles, registry),
    )


def build_auth_service(
    client: KeyValueStoreClient,
    settings: Settings,
    notification_service: IdentityNotificationService | None = None,
) -> AuthenticationService:
    """Build an AuthenticationService over ``client``.

    Parameters
    ----------
    client
        Open store client
    settings
        Validated settings
    notification_service
        Host-provided notifier. When ``notifications_enabled`` is false it
        is replaced by a no-op and a warning is logged.
    """
    repositories = build_repositories(client, settings)

    if not settings.notifications_enabled:
        if notification_service is not None:
            logger.warning(
                "Notifications are disabled, ignoring %s",
                type(notification_service).__name__,
            )
        notification_service = NullNotificationService()

    return AuthenticationService(
        user_repository=repositories.users,
        token_repository=repositories.refresh_tokens,
        ephemeral_token_repository=repositories.ephemeral_tokens,
        password_service=PasswordHashingService(settings.password_iterations),
        password_validator=PasswordValidator(settings.password_policy),
        jwt_service=JWTService(
            secret_key=settings.jwt_secret_key.get_secret_value(),
            access_token_expire_minutes=settings.jwt_access_token_expire_minutes,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
        ),
        notification_service=notification_service,
        role_repository=repositories.user_roles,
        options=AuthenticationOptions(
            refresh_token_expire_days=settings.jwt_refresh_token_expire_days,
            require_email_confirmation=settings.require_email_confirmation,
            send_welcome_email=settings.send_welcome_email,
        ),
    )
