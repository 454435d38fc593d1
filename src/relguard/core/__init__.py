"""Core module exports."""

from relguard.core.errors import (
    ConfigError,
    ErrorCode,
    GuardError,
    RelguardError,
)
from relguard.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "RelguardError",
    "ConfigError",
    "ErrorCode",
    "GuardError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "set_request_id",
]
