"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. TESSERA_ENV_FILE environment variable (path to .env file)
3. config/.env.dev - local development
4. config/.env - production/Docker

Uses pydantic-settings for automatic type coercion and validation. All
field-level violations are reported together in one ValidationError at
startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tessera_auth.services import PasswordPolicy

MIN_JWT_SECRET_LENGTH = 32
MIN_PASSWORD_LENGTH = 4


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / ".git").is_dir():
            return parent

    return Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. TESSERA_ENV_FILE env var
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("TESSERA_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    return None


@dataclass(frozen=True)
class TableNames:
    """Store table names, one per record type."""

    users: str
    tokens: str
    temporary_tokens: str
    user_roles: str


class Settings(BaseSettings):
    """Identity service configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (see module docstring)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # JWT (secret MUST be set - startup fails without it)
    jwt_secret_key: SecretStr
    jwt_issuer: str | None = None
    jwt_audience: str | None = None
    jwt_access_token_expire_minutes: int = Field(default=15, gt=0)
    jwt_refresh_token_expire_days: int = Field(default=30, gt=0)

    # Authentication flow
    require_email_confirmation: bool = True
    send_welcome_email: bool = True
    notifications_enabled: bool = True

    # Password policy
    password_min_length: int = Field(default=8, ge=MIN_PASSWORD_LENGTH)
    password_max_length: int = 100
    password_require_uppercase: bool = True
    password_require_lowercase: bool = True
    password_require_digit: bool = True
    password_require_special_character: bool = True
    password_iterations: int = Field(default=100_000, gt=0)

    # DynamoDB tables
    dynamodb_users_table: str = "IdentityUsers"
    dynamodb_tokens_table: str = "RefreshTokens"
    dynamodb_temporary_tokens_table: str = "TemporaryTokens"
    dynamodb_user_roles_table: str = "UserRoles"

    # AWS
    aws_region: str = "us-east-1"
    aws_access_key_id: str | None = None
    aws_secret_access_key: SecretStr | None = None
    aws_endpoint_url: str | None = None
    aws_use_local_dynamodb: bool = False

    # Logging
    log_level: str = "INFO"

    @field_validator("jwt_secret_key")
    @classmethod
    def _validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if len(v.get_secret_value()) < MIN_JWT_SECRET_LENGTH:
            msg = f"JWT secret key must be at least {MIN_JWT_SECRET_LENGTH} characters"
            raise ValueError(msg)
        return v

    @field_validator(
        "dynamodb_users_table",
        "dynamodb_tokens_table",
        "dynamodb_temporary_tokens_table",
        "dynamodb_user_roles_table",
    )
    @classmethod
    def _validate_table_name(cls, v: str) -> str:
        if not v.strip():
            msg = "Table name cannot be empty"
            raise ValueError(msg)
        return v.strip()

    @field_validator("jwt_issuer", "jwt_audience")
    @classmethod
    def _blank_to_none(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        return v.upper()

    @model_validator(mode="after")
    def _validate_cross_field(self) -> Settings:
        problems: list[str] = []
        if self.password_max_length < self.password_min_length:
            problems.append(
                "password_max_length must be greater than or equal to "
                "password_min_length",
            )
        if self.aws_use_local_dynamodb and not self.aws_endpoint_url:
            problems.append(
                "aws_endpoint_url is required when aws_use_local_dynamodb is set",
            )
        if problems:
            raise ValueError("; ".join(problems))
        return self

    @property
    def password_policy(self) -> PasswordPolicy:
        return PasswordPolicy(
            min_length=self.password_min_length,
            max_length=self.password_max_length,
            require_uppercase=self.password_require_uppercase,
            require_lowercase=self.password_require_lowercase,
            require_digit=self.password_require_digit,
            require_special_character=self.password_require_special_character,
        )

    @property
    def table_names(self) -> TableNames:
        return TableNames(
            users=self.dynamodb_users_table,
            tokens=self.dynamodb_tokens_table,
            temporary_tokens=self.dynamodb_temporary_tokens_table,
            user_roles=self.dynamodb_user_roles_table,
        )


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings.

    ``jwt_secret_key`` must be provided via environment variables or the
    .env file.
    """
    return Settings()  # type: ignore[call-arg]  # pydantic-settings loads from env


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
