"""Tests for config/models.py module.

Covers:
- LogOutputConfig model
- LoggingConfig model
- GuardConfig model
- DatabaseConfig model
- CliConfig model
- RelguardConfig root model
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from relguard.config.models import (
    CliConfig,
    DatabaseConfig,
    GuardConfig,
    LoggingConfig,
    LogOutputConfig,
    RelguardConfig,
)


class TestLogOutputConfig:
    """Tests for LogOutputConfig model."""

    def test_defaults(self) -> None:
        config = LogOutputConfig()
        assert config.format == "console"
        assert config.destination == "stderr"
        assert config.level is None

    def test_stdout_destination(self) -> None:
        assert LogOutputConfig(destination="stdout").destination == "stdout"

    def test_absolute_path_destination(self) -> None:
        config = LogOutputConfig(destination="/var/log/relguard.log")
        assert config.destination == "/var/log/relguard.log"

    def test_relative_path_fails(self) -> None:
        """Relative path is rejected."""
        with pytest.raises(ValidationError, match="absolute path"):
            LogOutputConfig(destination="logs/app.log")


class TestLoggingConfig:
    """Tests for LoggingConfig model."""

    def test_defaults(self) -> None:
        config = LoggingConfig()
        assert config.level == "INFO"
        assert len(config.outputs) == 1

    def test_level_options(self) -> None:
        for level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            config = LoggingConfig(level=level)  # type: ignore[arg-type]
            assert config.level == level

    def test_invalid_level(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(level="TRACE")  # type: ignore[arg-type]


class TestGuardConfig:
    """Tests for GuardConfig model."""

    def test_defaults(self) -> None:
        config = GuardConfig()
        assert config.relations_attribute == "scan_relations"
        assert config.default_depth == 1

    def test_unlimited_depth_accepted(self) -> None:
        assert GuardConfig(default_depth=-1).default_depth == -1

    @pytest.mark.parametrize("depth", [0, -2])
    def test_degenerate_depth_rejected(self, depth: int) -> None:
        with pytest.raises(ValidationError, match="Depth must be"):
            GuardConfig(default_depth=depth)

    def test_attribute_must_be_identifier(self) -> None:
        with pytest.raises(ValidationError, match="attribute name"):
            GuardConfig(relations_attribute="scan-relations")


class TestDatabaseConfig:
    """Tests for DatabaseConfig model."""

    def test_defaults(self) -> None:
        config = DatabaseConfig()
        assert config.url is None
        assert config.busy_timeout_ms == 30000
        assert config.echo is False


class TestRelguardConfig:
    """Tests for RelguardConfig root model."""

    def test_defaults(self) -> None:
        config = RelguardConfig()
        assert config.logging.level == "INFO"
        assert config.guard.default_depth == 1
        assert config.database.url is None
        assert config.cli.models_module == "app.models"

    def test_nested_override(self) -> None:
        config = RelguardConfig(
            logging=LoggingConfig(level="DEBUG"),
            cli=CliConfig(models_module="shop.models"),
        )
        assert config.logging.level == "DEBUG"
        assert config.cli.models_module == "shop.models"
