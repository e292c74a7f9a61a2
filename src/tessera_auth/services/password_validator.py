"""Password policy validation.

Validation is aggregate: every violated rule is reported, so a client can
show the complete list at once.
"""

from dataclasses import dataclass

SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{}|;:,.<>?"


@dataclass(frozen=True)
class PasswordPolicy:
    """Password complexity rules."""

    min_length: int = 8
    max_length: int = 100
    require_uppercase: bool = True
    require_lowercase: bool = True
    require_digit: bool = True
    require_special_character: bool = True


class PasswordValidator:
    """Check passwords against a :class:`PasswordPolicy`.

    Examples
    --------
    >>> validator = PasswordValidator(PasswordPolicy(min_length=8))
    >>> validator.validate_password("Sh0rt!")
    (False, ['Password must be at least 8 characters long'])
    >>> validator.validate_password("Longer_passw0rd")
    (True, [])
    """

    def __init__(self, policy: PasswordPolicy | None = None):
        self._policy = policy or PasswordPolicy()

    @property
    def policy(self) -> PasswordPolicy:
        return self._policy

    def validate_password(self, password: str | None) -> tuple[bool, list[str]]:
        """Validate a password against every rule of the policy.

        Returns
        -------
        Tuple of (is_valid, violation messages). Blank input yields only
        "Password is required".
        """
        if password is None or not password.strip():
            return False, ["Password is required"]

        policy = self._policy
        violations: list[str] = []

        if len(password) < policy.min_length:
            violations.append(
                f"Password must be at least {policy.min_length} characters long",
            )
        if len(password) > policy.max_length:
            violations.append(
                f"Password must not exceed {policy.max_length} characters",
            )
        if policy.require_uppercase and not any(c.isupper() for c in password):
            violations.append("Password must contain at least one uppercase letter")
        if policy.require_lowercase and not any(c.islower() for c in password):
            violations.append("Password must contain at least one lowercase letter")
        if policy.require_digit and not any(c.isdigit() for c in password):
            violations.append("Password must contain at least one digit")
        if policy.require_special_character and not any(
            c in SPECIAL_CHARACTERS for c in password
        ):
            violations.append(
                "Password must contain at least one special character",
            )

        return not violations, violations
