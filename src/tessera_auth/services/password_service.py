"""Password hashing service using bcrypt.

The hashing strength is configured as an iteration count and mapped onto
bcrypt's logarithmic cost factor, so operators can reason about it the
same way as PBKDF2-style settings.
"""

import bcrypt

MIN_WORK_FACTOR = 10
MAX_WORK_FACTOR = 16

# bcrypt only considers the first 72 bytes
MAX_PASSWORD_BYTES = 72

_WORK_FACTOR_THRESHOLDS: tuple[tuple[int, int], ...] = (
    (4096, 10),
    (8192, 11),
    (16384, 12),
    (32768, 13),
    (65536, 14),
    (131072, 15),
)


def work_factor_for(iterations: int) -> int:
    """Map an iteration count onto a bcrypt cost factor.

    Examples
    --------
    >>> work_factor_for(1000)
    10
    >>> work_factor_for(100_000)
    15
    >>> work_factor_for(1_000_000)
    16
    """
    for threshold, work_factor in _WORK_FACTOR_THRESHOLDS:
        if iterations < threshold:
            return work_factor
    return MAX_WORK_FACTOR


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Examples
    --------
    >>> service = PasswordHashingService(iterations=1000)
    >>> password_hash = service.hash("My_secure_passw0rd")
    >>> service.verify(password_hash, "My_secure_passw0rd")
    True
    >>> service.verify(password_hash, "wrong_password")
    False
    """

    DEFAULT_ITERATIONS = 100_000

    def __init__(self, iterations: int = DEFAULT_ITERATIONS):
        """Initialize the password hashing service.

        Parameters
        ----------
        iterations
            Desired hashing strength. Converted to a bcrypt cost factor
            between 10 and 16 by :func:`work_factor_for`.
        """
        if iterations <= 0:
            msg = "Iterations must be positive"
            raise ValueError(msg)
        self._rounds = work_factor_for(iterations)

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Parameters
        ----------
        password
            The plaintext password to hash

        Returns
        -------
        The bcrypt hash as a string (salt embedded)

        Raises
        ------
        ValueError
            If password is empty
        """
        if not password:
            msg = "Password cannot be empty"
            raise ValueError(msg)

        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(_encode(password), salt)
        return hashed.decode("utf-8")

    def verify(self, password_hash: str, password: str) -> bool:
        """Verify a password against a hash.

        Parameters
        ----------
        password_hash
            The bcrypt hash to verify against
        password
            The plaintext password to check

        Returns
        -------
        True if password matches, False otherwise (including malformed hashes)
        """
        if not password_hash or password is None:
            return False
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            # Invalid hash format
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        """Check if a password hash was minted with a different cost factor.

        Parameters
        ----------
        password_hash
            The existing hash to check

        Returns
        -------
        True if the hash should be regenerated
        """
        try:
            # bcrypt format: $2b$XX$...
            parts = password_hash.split("$")
            if len(parts) >= 3:
                return int(parts[2]) != self._rounds
        except (ValueError, AttributeError):
            pass
        return True
