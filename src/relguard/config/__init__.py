"""Config module exports."""

from relguard.config.loader import load_config
from relguard.config.models import (
    CliConfig,
    DatabaseConfig,
    GuardConfig,
    LoggingConfig,
    RelguardConfig,
)

__all__ = [
    "load_config",
    "RelguardConfig",
    "GuardConfig",
    "DatabaseConfig",
    "CliConfig",
    "LoggingConfig",
]
