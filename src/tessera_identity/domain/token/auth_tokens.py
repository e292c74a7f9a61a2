"""Credential pair returned by login and registration."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthTokens:
    """Access token (JWT) plus opaque refresh token."""

    access_token: str
    refresh_token: str
