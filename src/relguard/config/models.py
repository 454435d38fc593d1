"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (RELGUARD__SECTION__KEY)
3. Project YAML (./.relguard.yaml)
4. Global YAML (~/.config/relguard/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    RELGUARD__<SECTION>__<KEY>=<VALUE>

Examples:
    RELGUARD__LOGGING__LEVEL=DEBUG
    RELGUARD__GUARD__RELATIONS_ATTRIBUTE=check_relations
    RELGUARD__DATABASE__URL=sqlite:///app.db
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        RELGUARD__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every scanned relation and delete batch.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class GuardConfig(BaseModel):
    """Relation scanning configuration.

    Env vars:
        RELGUARD__GUARD__RELATIONS_ATTRIBUTE: Model attribute holding default patterns
        RELGUARD__GUARD__DEFAULT_DEPTH: Depth used when none is given
    """

    relations_attribute: str = Field(
        default="scan_relations",
        description="Name of the model class attribute holding the default selection "
        "patterns, e.g. scan_relations = ['posts.comments']. Falls back to ['*'].",
    )
    default_depth: int = Field(
        default=1,
        description="Relation tree depth when the caller does not pass one. -1 is unlimited.",
    )

    @field_validator("relations_attribute")
    @classmethod
    def validate_relations_attribute(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"Must be a valid attribute name, got {v!r}")
        return v

    @field_validator("default_depth")
    @classmethod
    def validate_default_depth(cls, v: int) -> int:
        if v == 0 or v < -1:
            raise ValueError(f"Depth must be >= 1 or -1 (unlimited), got {v}")
        return v


class DatabaseConfig(BaseModel):
    """Database connection configuration.

    Env vars:
        RELGUARD__DATABASE__URL: SQLAlchemy database URL
        RELGUARD__DATABASE__BUSY_TIMEOUT_MS: SQLite busy timeout
        RELGUARD__DATABASE__ECHO: Echo SQL statements
    """

    url: str | None = Field(
        default=None,
        description="SQLAlchemy database URL (e.g. sqlite:///app.db). Required by the CLI.",
    )
    busy_timeout_ms: int = Field(
        default=30000,
        description="SQLite busy timeout (ms). How long to wait for locks.",
    )
    echo: bool = Field(
        default=False,
        description="Echo every SQL statement issued by scans and deletes.",
    )


class CliConfig(BaseModel):
    """Command line configuration.

    Env vars:
        RELGUARD__CLI__MODELS_MODULE: Module searched for bare model names
    """

    models_module: str = Field(
        default="app.models",
        description="Module that bare model names given to the CLI are looked up in.",
    )


class RelguardConfig(BaseModel):
    """Root configuration for relguard.

    All settings can be configured via:
    1. Environment variables: RELGUARD__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    guard: GuardConfig = Field(default_factory=GuardConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    cli: CliConfig = Field(default_factory=CliConfig)
