"""Attribute codecs for identity records.

One explicit attribute list per record type. Attribute names are the
PascalCase field names; the key is always ``Id``.
"""

from datetime import datetime
from uuid import UUID

from tessera_identity.domain.token import EphemeralToken, RefreshToken, TokenType
from tessera_identity.domain.user import IdentityUser, UserRole
from tessera_store.codec import (
    AttributeCodec,
    AttributeSpec,
    ConverterRegistry,
    default_registry,
    enum_converter,
)

# Secondary index names
EMAIL_INDEX = "EmailIndex"
TOKEN_INDEX = "TokenIndex"
USER_ID_INDEX = "UserIdIndex"


def identity_registry() -> ConverterRegistry:
    """Default scalar converters plus the identity enums."""
    registry = default_registry()
    registry.register(TokenType, enum_converter(TokenType))
    return registry


IDENTITY_USER_ATTRIBUTES = (
    AttributeSpec("id", UUID),
    AttributeSpec("email", str),
    AttributeSpec("password_hash", str),
    AttributeSpec("first_name", str, nullable=True),
    AttributeSpec("last_name", str, nullable=True),
    AttributeSpec("is_active", bool),
    AttributeSpec("is_email_confirmed", bool),
    AttributeSpec("created_at", datetime),
    AttributeSpec("updated_at", datetime),
)

REFRESH_TOKEN_ATTRIBUTES = (
    AttributeSpec("id", UUID),
    AttributeSpec("user_id", UUID),
    AttributeSpec("token", str),
    AttributeSpec("expires_at", datetime),
    AttributeSpec("is_revoked", bool),
)

EPHEMERAL_TOKEN_ATTRIBUTES = (
    AttributeSpec("id", UUID),
    AttributeSpec("user_id", UUID),
    AttributeSpec("token", str),
    AttributeSpec("type", TokenType),
    AttributeSpec("expires_at", datetime),
    AttributeSpec("created_at", datetime),
    AttributeSpec("is_used", bool),
)

USER_ROLE_ATTRIBUTES = (
    AttributeSpec("id", UUID),
    AttributeSpec("user_id", UUID),
    AttributeSpec("role_name", str),
    AttributeSpec("assigned_at", datetime),
    AttributeSpec("assigned_by", UUID, nullable=True),
)


def identity_user_codec(
    registry: ConverterRegistry | None = None,
) -> AttributeCodec[IdentityUser]:
    return AttributeCodec(
        IdentityUser,
        IDENTITY_USER_ATTRIBUTES,
        registry or identity_registry(),
    )


def refresh_token_codec(
    registry: ConverterRegistry | None = None,
) -> AttributeCodec[RefreshToken]:
    return AttributeCodec(
        RefreshToken,
        REFRESH_TOKEN_ATTRIBUTES,
        registry or identity_registry(),
    )


def ephemeral_token_codec(
    registry: ConverterRegistry | None = None,
) -> AttributeCodec[EphemeralToken]:
    return AttributeCodec(
        EphemeralToken,
        EPHEMERAL_TOKEN_ATTRIBUTES,
        registry or identity_registry(),
    )


def user_role_codec(
    registry: ConverterRegistry | None = None,
) -> AttributeCodec[UserRole]:
    return AttributeCodec(UserRole, USER_ROLE_ATTRIBUTES, registry or identity_registry())
