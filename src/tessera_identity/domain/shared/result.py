"""Result and error types for expected business outcomes.

Every public operation of the authentication service returns a
:class:`Result`. Expected failures (unknown user, wrong password, invalid
token) are values, not exceptions; only infrastructure faults raise.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


class ErrorType(str, Enum):
    """Classification of an error, stable for API clients."""

    FAILURE = "Failure"
    VALIDATION = "Validation"
    PROBLEM = "Problem"
    NOT_FOUND = "NotFound"
    CONFLICT = "Conflict"
    AUTHENTICATION = "Authentication"
    AUTHORIZATION = "Authorization"


@dataclass(frozen=True)
class Error:
    """An expected error with a stable code.

    Attributes
    ----------
    code
        Dotted error code, e.g. "User.NotFound"
    description
        Human-readable description
    type
        Error classification
    metadata
        Optional extra key/value context; ignored for equality
    """

    code: str
    description: str
    type: ErrorType = ErrorType.FAILURE
    metadata: Mapping[str, str] | None = field(default=None, compare=False)

    NONE: ClassVar[Error]
    NULL_VALUE: ClassVar[Error]

    @classmethod
    def failure(cls, code: str, description: str) -> Error:
        return cls(code, description, ErrorType.FAILURE)

    @classmethod
    def not_found(cls, code: str, description: str) -> Error:
        return cls(code, description, ErrorType.NOT_FOUND)

    @classmethod
    def problem(cls, code: str, description: str) -> Error:
        return cls(code, description, ErrorType.PROBLEM)

    @classmethod
    def conflict(cls, code: str, description: str) -> Error:
        return cls(code, description, ErrorType.CONFLICT)

    @classmethod
    def validation(cls, code: str, description: str) -> Error:
        return cls(code, description, ErrorType.VALIDATION)

    def with_metadata(self, key: str, value: str) -> Error:
        """Return a copy of this error with ``key`` added to its metadata."""
        metadata = dict(self.metadata or {})
        metadata[key] = value
        return dataclasses.replace(self, metadata=metadata)


Error.NONE = Error("", "", ErrorType.FAILURE)
Error.NULL_VALUE = Error("General.Null", "Null value was provided", ErrorType.FAILURE)


@dataclass(frozen=True)
class ValidationError(Error):
    """A validation error aggregating several individual violations."""

    code: str = "Validation.General"
    description: str = "One or more validation errors occurred"
    type: ErrorType = ErrorType.VALIDATION
    errors: tuple[Error, ...] = ()

    @classmethod
    def from_messages(cls, code: str, messages: Iterable[str]) -> ValidationError:
        """Aggregate violation messages under one code.

        The description joins every message with "; ".
        """
        messages = list(messages)
        return cls(
            code=code,
            description="; ".join(messages),
            errors=tuple(Error.validation(code, message) for message in messages),
        )

    @classmethod
    def from_results(cls, results: Iterable[Result[Any]]) -> ValidationError:
        return cls(errors=tuple(r.error for r in results if r.is_failure))


class ResultValueError(Exception):
    """Raised when reading the value of a failed result."""

    def __init__(self, error: Error):
        self.error = error
        super().__init__(
            f"The value of a failure result can not be accessed ({error.code})",
        )


class Result(Generic[T]):
    """Outcome of an operation: a value on success, an Error on failure.

    Examples
    --------
    >>> result = Result.success(42)
    >>> result.is_success, result.value
    (True, 42)
    >>> failed = Result.failure(Error.not_found("User.NotFound", "User not found"))
    >>> failed.match(lambda v: v, lambda e: e.code)
    'User.NotFound'
    """

    __slots__ = ("_error", "_is_success", "_value")

    def __init__(self, is_success: bool, error: Error, value: T | None = None):
        if is_success and error != Error.NONE:
            msg = "A successful result cannot carry an error"
            raise ValueError(msg)
        if not is_success and error == Error.NONE:
            msg = "A failed result must carry an error"
            raise ValueError(msg)

        self._is_success = is_success
        self._error = error
        self._value = value

    @classmethod
    def success(cls, value: T | None = None) -> Result[T]:
        return cls(True, Error.NONE, value)

    @classmethod
    def failure(cls, error: Error) -> Result[T]:
        return cls(False, error)

    @property
    def is_success(self) -> bool:
        return self._is_success

    @property
    def is_failure(self) -> bool:
        return not self._is_success

    @property
    def error(self) -> Error:
        return self._error

    @property
    def value(self) -> T:
        """The success value.

        Raises
        ------
        ResultValueError
            If the result is a failure
        """
        if not self._is_success:
            raise ResultValueError(self._error)
        return self._value  # type: ignore[return-value]

    def map(self, func: Callable[[T], U]) -> Result[U]:
        if self.is_failure:
            return Result.failure(self._error)
        return Result.success(func(self.value))

    def match(
        self,
        on_success: Callable[[T], R],
        on_failure: Callable[[Error], R],
    ) -> R:
        if self._is_success:
            return on_success(self._value)  # type: ignore[arg-type]
        return on_failure(self._error)

    def __repr__(self) -> str:
        if self._is_success:
            return f"Result.success({self._value!r})"
        return f"Result.failure({self._error.code!r})"
