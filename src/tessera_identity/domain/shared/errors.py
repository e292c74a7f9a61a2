"""Error catalogs for identity operations.

These codes are part of the public API contract. Should not be changed.
"""

from collections.abc import Iterable
from uuid import UUID

from tessera_identity.domain.shared.result import Error, ValidationError


class UserErrors:
    """Errors about users and their credentials."""

    NOT_FOUND = Error.not_found("User.NotFound", "User not found")
    INVALID_PASSWORD = Error.problem("User.InvalidPassword", "Invalid password")
    INACTIVE = Error.problem("User.Inactive", "User is inactive")
    ALREADY_EXISTS = Error.conflict("User.AlreadyExists", "User already registered")
    INVALID_EMAIL = Error.validation(
        "User.InvalidEmail",
        "The email address is not valid",
    )
    EMAIL_NOT_CONFIRMED = Error.validation(
        "Users.EmailNotConfirmed",
        "The email address has not been confirmed yet.",
    )

    @staticmethod
    def not_found_by_id(user_id: UUID) -> Error:
        return Error.not_found(
            "Users.NotFound",
            f"The user with the Id = '{user_id}' was not found",
        )

    @staticmethod
    def password_policy_violation(violations: Iterable[str]) -> ValidationError:
        return ValidationError.from_messages("User.InvalidPassword", violations)


class TokenErrors:
    """Errors about refresh, access and single-use tokens."""

    INVALID_REFRESH_TOKEN = Error.problem(
        "Token.Invalid",
        "Invalid or expired refresh token",
    )
    OWNER_NOT_FOUND = Error.problem("Token.Invalid", "User not found for token")
    INVALID_ACCESS_TOKEN = Error.problem(
        "Token.Invalid",
        "Invalid or expired access token",
    )
    INVALID_EMAIL_TOKEN = Error.problem("Email.InvalidToken", "Invalid or expired token")
    INVALID_RESET_TOKEN = Error.problem("Reset.InvalidToken", "Invalid or expired token")
