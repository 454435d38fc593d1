"""Tests for error types and codes."""

from collections.abc import Iterator
from contextlib import contextmanager

import pytest

from relguard.core.errors import (
    ConfigError,
    ErrorCode,
    GuardError,
    RelguardError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.UNRESOLVABLE_TYPE, 3000),
            (ErrorCode.RECORD_NOT_FOUND, 3000),
            (ErrorCode.CAPABILITY_MISSING, 3000),
            (ErrorCode.INVALID_PATTERN, 3000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        assert expected_range <= code.value < expected_range + 1000


class TestRelguardError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        # Given
        error = RelguardError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        error = RelguardError(code=ErrorCode.RECORD_NOT_FOUND, message="Something broke")

        assert str(error) == "[3002] RECORD_NOT_FOUND: Something broke"


class TestConfigError:
    """ConfigError factory method tests."""

    @pytest.mark.parametrize(
        ("factory", "kwargs", "expected_code"),
        [
            ("parse_error", {"path": "/foo", "reason": "bad yaml"}, ErrorCode.CONFIG_PARSE_ERROR),
            (
                "invalid_value",
                {"field": "guard.default_depth", "value": 0, "reason": "zero"},
                ErrorCode.CONFIG_INVALID_VALUE,
            ),
            ("file_not_found", {"path": "/missing"}, ErrorCode.CONFIG_FILE_NOT_FOUND),
        ],
    )
    def test_given_factory_when_called_then_correct_code(
        self, factory: str, kwargs: dict[str, object], expected_code: ErrorCode
    ) -> None:
        error = getattr(ConfigError, factory)(**kwargs)

        assert error.code == expected_code

    def test_given_parse_error_when_created_then_path_in_details(self) -> None:
        error = ConfigError.parse_error("/config.yaml", "invalid syntax")

        assert error.details["path"] == "/config.yaml"
        assert "invalid syntax" in error.message


class TestGuardError:
    """GuardError factory method tests."""

    def test_given_unresolvable_type_when_created_then_names_class(self) -> None:
        error = GuardError.unresolvable_type("app.models.Ghost", "no such class")

        assert error.message == "Class [app.models.Ghost] is not a valid model: no such class"
        assert error.details["model"] == "app.models.Ghost"

    def test_given_record_not_found_when_created_then_names_model_and_id(self) -> None:
        error = GuardError.record_not_found("Author", 42)

        assert error.code == ErrorCode.RECORD_NOT_FOUND
        assert error.message == "No record found for [Author] with ID [42]."
        assert error.details == {"model": "Author", "id": "42"}

    def test_given_capability_missing_when_created_then_names_capability(self) -> None:
        error = GuardError.capability_missing("Comment", "relation_structure()")

        assert error.message == "The model [Comment] does not provide relation_structure()."

    def test_given_invalid_pattern_when_created_then_pattern_in_details(self) -> None:
        error = GuardError.invalid_pattern("posts..comments", "empty segment")

        assert error.code == ErrorCode.INVALID_PATTERN
        assert error.details["pattern"] == "posts..comments"

    def test_given_guard_error_when_raised_then_is_relguard_error(self) -> None:
        with pytest.raises(RelguardError):
            raise GuardError.record_not_found("Author", 1)


    def test_given_error_when_leaving_context_manager_then_type_preserved(self) -> None:
        """The traceback is attached to the error itself on the way out."""

        @contextmanager
        def scope() -> Iterator[None]:
            yield

        with pytest.raises(GuardError) as exc_info, scope():
            raise GuardError.capability_missing("Comment", "an active session")

        assert exc_info.value.code == ErrorCode.CAPABILITY_MISSING
        assert exc_info.value.__traceback__ is not None
