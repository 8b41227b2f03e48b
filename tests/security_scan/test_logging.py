"""Tests for logging configuration and setup."""

import logging
from pathlib import Path

import pytest
import yaml

from security_scan.logging import (
    CONFIG_DIR,
    LoggingError,
    get_config_path,
    load_config,
    setup_logging,
)


def _write_config(path: Path, handler_level: str, logger_level: str) -> Path:
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "handlers": {
            "console": {"class": "logging.StreamHandler", "level": handler_level}
        },
        "loggers": {
            "security_scan_test": {"level": logger_level, "handlers": ["console"]}
        },
    }
    path.write_text(yaml.dump(config), encoding="utf-8")
    return path


class TestLoggingConfigPath:
    """Test logging configuration file selection."""

    def test_default_config_is_packaged(self) -> None:
        """Test the default config ships with the package."""
        config_path = get_config_path()

        assert config_path == CONFIG_DIR / "logging.yaml"
        assert config_path.exists()

    def test_environment_variable_selects_dev_config(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test SECURITY_SCAN_ENV=development selects the dev config."""
        monkeypatch.setenv("SECURITY_SCAN_ENV", "development")

        assert get_config_path().name == "logging-dev.yaml"

    def test_explicit_environment_overrides_variable(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test the environment argument wins over SECURITY_SCAN_ENV."""
        monkeypatch.setenv("SECURITY_SCAN_ENV", "prod")

        assert get_config_path(environment="dev").name == "logging-dev.yaml"

    def test_unknown_environment_falls_back_to_default(self) -> None:
        """Test fallback when no environment-specific file exists."""
        assert get_config_path(environment="staging").name == "logging.yaml"

    def test_missing_config_directory_raises_error(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """Test LoggingError when no configuration exists at all."""
        monkeypatch.setattr("security_scan.logging.CONFIG_DIR", tmp_path)

        with pytest.raises(LoggingError, match="No logging configuration found"):
            get_config_path()


class TestLoadConfig:
    """Test YAML loading."""

    def test_loads_packaged_config(self) -> None:
        """Test the default config is a dictConfig mapping."""
        config = load_config(CONFIG_DIR / "logging.yaml")

        assert config["version"] == 1
        assert "security_scan" in config["loggers"]

    def test_invalid_yaml_raises_error(self, tmp_path: Path) -> None:
        """Test that invalid YAML raises LoggingError."""
        config_file = tmp_path / "broken.yaml"
        config_file.write_text("invalid: yaml: content: [", encoding="utf-8")

        with pytest.raises(LoggingError, match="Failed to parse YAML config"):
            load_config(config_file)

    def test_missing_file_raises_error(self, tmp_path: Path) -> None:
        """Test that a missing file raises LoggingError."""
        with pytest.raises(LoggingError, match="Failed to read config file"):
            load_config(tmp_path / "missing.yaml")

    def test_non_mapping_raises_error(self, tmp_path: Path) -> None:
        """Test that a YAML list is rejected."""
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(LoggingError, match="Invalid configuration format"):
            load_config(config_file)


class TestSetupLogging:
    """Test applying configuration."""

    def test_default_configuration_applies(self) -> None:
        """Test the packaged config configures the package logger."""
        setup_logging()

        assert logging.getLogger("security_scan").level == logging.INFO

    def test_level_override_updates_loggers_and_lowers_handlers(
        self, tmp_path: Path
    ) -> None:
        """Test a more verbose override lowers handler levels too."""
        config_file = _write_config(tmp_path / "logging.yaml", "INFO", "INFO")

        setup_logging(config_path=config_file, level="DEBUG")

        test_logger = logging.getLogger("security_scan_test")
        assert test_logger.level == logging.DEBUG
        assert test_logger.handlers[0].level == logging.DEBUG

    def test_level_override_never_raises_handler_level(self, tmp_path: Path) -> None:
        """Test a less verbose override leaves verbose handlers alone."""
        config_file = _write_config(tmp_path / "logging.yaml", "DEBUG", "DEBUG")

        setup_logging(config_path=str(config_file), level="WARNING")

        test_logger = logging.getLogger("security_scan_test")
        assert test_logger.level == logging.WARNING
        assert test_logger.handlers[0].level == logging.DEBUG

    def test_invalid_level_falls_back_to_basic_logging(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that setup_logging never raises on a bad level."""
        setup_logging(level="INVALID")

        captured = capsys.readouterr()
        assert "Failed to configure logging" in captured.err

    def test_missing_file_falls_back_to_basic_logging(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test fallback when the config file cannot be read."""
        setup_logging(config_path=tmp_path / "missing.yaml", level="INFO")

        captured = capsys.readouterr()
        assert "Failed to configure logging" in captured.err
