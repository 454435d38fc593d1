"""Relguard error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Scan (type resolution, record lookup, selection patterns)

Storage failures are not wrapped: SQLAlchemy errors raised during a load or
delete round-trip propagate to the caller unchanged.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Scan (3xxx)
    UNRESOLVABLE_TYPE = 3001
    RECORD_NOT_FOUND = 3002
    CAPABILITY_MISSING = 3003
    INVALID_PATTERN = 3004


@dataclass(eq=False)
class RelguardError(Exception):
    """Base error with structured context for CLI and API callers.

    Mutable: the interpreter assigns __traceback__ when an error leaves a
    context manager.
    """

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'RECORD_NOT_FOUND')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(RelguardError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class GuardError(RelguardError):
    """Errors raised by relation scans before any storage I/O happens."""

    @classmethod
    def unresolvable_type(cls, name: str, reason: str) -> "GuardError":
        return cls(
            code=ErrorCode.UNRESOLVABLE_TYPE,
            message=f"Class [{name}] is not a valid model: {reason}",
            details={"model": name, "reason": reason},
        )

    @classmethod
    def record_not_found(cls, name: str, identifier: Any) -> "GuardError":
        return cls(
            code=ErrorCode.RECORD_NOT_FOUND,
            message=f"No record found for [{name}] with ID [{identifier}].",
            details={"model": name, "id": str(identifier)},
        )

    @classmethod
    def capability_missing(cls, name: str, capability: str) -> "GuardError":
        return cls(
            code=ErrorCode.CAPABILITY_MISSING,
            message=f"The model [{name}] does not provide {capability}.",
            details={"model": name, "capability": capability},
        )

    @classmethod
    def invalid_pattern(cls, pattern: str, reason: str) -> "GuardError":
        return cls(
            code=ErrorCode.INVALID_PATTERN,
            message=f"Invalid relation pattern {pattern!r}: {reason}",
            details={"pattern": pattern, "reason": reason},
        )
