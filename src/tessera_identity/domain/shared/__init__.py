"""Shared domain building blocks."""

from tessera_identity.domain.shared.errors import TokenErrors, UserErrors
from tessera_identity.domain.shared.result import (
    Error,
    ErrorType,
    Result,
    ResultValueError,
    ValidationError,
)
from tessera_identity.domain.shared.time import ensure_tz_aware, utc_now

__all__ = [
    "Error",
    "ErrorType",
    "Result",
    "ResultValueError",
    "TokenErrors",
    "UserErrors",
    "ValidationError",
    "ensure_tz_aware",
    "utc_now",
]
