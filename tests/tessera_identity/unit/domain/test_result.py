"""Tests for Result, Error and ValidationError."""

from uuid import UUID

import pytest

from tessera_identity.domain.shared import (
    Error,
    ErrorType,
    Result,
    ResultValueError,
    UserErrors,
    ValidationError,
)


class TestResult:
    """Success and failure outcomes."""

    def test_success(self):
        result = Result.success(42)

        assert result.is_success
        assert not result.is_failure
        assert result.value == 42
        assert result.error == Error.NONE

    def test_success_without_value(self):
        result = Result.success()

        assert result.is_success
        assert result.value is None

    def test_failure(self):
        result = Result.failure(UserErrors.NOT_FOUND)

        assert result.is_failure
        assert result.error.code == "User.NotFound"
        assert result.error.type is ErrorType.NOT_FOUND

    def test_failure_value_raises(self):
        result = Result.failure(UserErrors.NOT_FOUND)

        with pytest.raises(ResultValueError) as exc_info:
            _ = result.value

        assert exc_info.value.error == UserErrors.NOT_FOUND

    def test_success_with_error_rejected(self):
        with pytest.raises(ValueError):
            Result(True, UserErrors.NOT_FOUND)

    def test_failure_without_error_rejected(self):
        with pytest.raises(ValueError):
            Result(False, Error.NONE)

    def test_map(self):
        assert Result.success(2).map(lambda v: v * 10).value == 20

        failed = Result.failure(UserErrors.INACTIVE).map(lambda v: v * 10)
        assert failed.error == UserErrors.INACTIVE

    def test_match(self):
        on_success = Result.success("ok").match(str.upper, lambda e: e.code)
        on_failure = Result.failure(UserErrors.INACTIVE).match(
            str.upper,
            lambda e: e.code,
        )

        assert on_success == "OK"
        assert on_failure == "User.Inactive"


class TestError:
    """Error values and their catalog."""

    def test_metadata_ignored_for_equality(self):
        tagged = UserErrors.INVALID_PASSWORD.with_metadata("reason", "bad")

        assert tagged == UserErrors.INVALID_PASSWORD
        assert tagged.metadata == {"reason": "bad"}
        assert UserErrors.INVALID_PASSWORD.metadata is None

    def test_null_value(self):
        assert Error.NULL_VALUE.code == "General.Null"
        assert Error.NULL_VALUE != Error.NONE

    def test_error_type_serializes_by_name(self):
        assert ErrorType.CONFLICT.value == "Conflict"
        assert ErrorType("NotFound") is ErrorType.NOT_FOUND

    def test_not_found_by_id(self):
        error = UserErrors.not_found_by_id(
            UUID("12345678-1234-5678-1234-567812345678"),
        )

        assert error.code == "Users.NotFound"
        assert "12345678-1234-5678-1234-567812345678" in error.description


class TestValidationError:
    """Aggregated validation failures."""

    def test_from_messages(self):
        error = ValidationError.from_messages(
            "User.InvalidPassword",
            ["too short", "needs a digit"],
        )

        assert error.code == "User.InvalidPassword"
        assert error.type is ErrorType.VALIDATION
        assert error.description == "too short; needs a digit"
        assert [e.description for e in error.errors] == ["too short", "needs a digit"]
        assert all(e.code == "User.InvalidPassword" for e in error.errors)

    def test_password_policy_violation(self):
        error = UserErrors.password_policy_violation(["a", "b"])

        assert isinstance(error, ValidationError)
        assert len(error.errors) == 2

    def test_from_results_keeps_failures_only(self):
        error = ValidationError.from_results(
            [
                Result.success(1),
                Result.failure(UserErrors.INVALID_EMAIL),
                Result.failure(UserErrors.INACTIVE),
            ],
        )

        assert error.code == "Validation.General"
        assert error.errors == (UserErrors.INVALID_EMAIL, UserErrors.INACTIVE)
