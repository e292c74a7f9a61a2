"""Application services for identity management."""

from tessera_identity.application.services.authentication_service import (
    AuthenticationOptions,
    AuthenticationService,
)

__all__ = ["AuthenticationOptions", "AuthenticationService"]
