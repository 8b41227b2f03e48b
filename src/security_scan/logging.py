"""Python-standard logging configuration for the security scan engine.

Logging is set up with logging.config.dictConfig() from YAML files shipped in
``security_scan/config/``. Library code only ever calls
``logging.getLogger(__name__)``; front ends call setup_logging() once.
"""

from __future__ import annotations

import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Any, cast

import yaml

CONFIG_DIR = Path(__file__).parent / "config"


class LoggingError(Exception):
    """Exception raised for logging configuration errors."""

    pass


def get_config_path(environment: str | None = None) -> Path:
    """Get the path to a logging configuration file.

    Args:
        environment: Environment (dev, prod) for environment-specific configs.
            Falls back to the SECURITY_SCAN_ENV environment variable.

    Returns:
        Path to the logging configuration file

    Raises:
        LoggingError: If no suitable configuration file is found

    """
    env = (environment or os.getenv("SECURITY_SCAN_ENV", "")).lower()
    if env == "development":
        env = "dev"
    elif env == "production":
        env = "prod"

    config_path = CONFIG_DIR / (f"logging-{env}.yaml" if env else "logging.yaml")
    if not config_path.exists():
        config_path = CONFIG_DIR / "logging.yaml"

    if not config_path.exists():
        raise LoggingError(f"No logging configuration found. Expected at: {config_path}")

    return config_path


def load_config(config_path: Path) -> dict[str, Any]:
    """Load logging configuration from YAML file.

    Raises:
        LoggingError: If configuration cannot be loaded or parsed

    """
    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LoggingError(f"Failed to parse YAML config {config_path}: {e}") from e
    except OSError as e:
        raise LoggingError(f"Failed to read config file {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise LoggingError(f"Invalid configuration format in {config_path}")

    return cast(dict[str, Any], config)


def _override_level(config: dict[str, Any], level: str) -> None:
    """Apply a level override to every configured logger and handler."""
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise LoggingError(f"Invalid log level: {level}")

    for logger_config in config.get("loggers", {}).values():
        logger_config["level"] = level.upper()

    if "root" in config:
        config["root"]["level"] = level.upper()

    # Handlers filter below their own level, so only ever lower them
    for handler_config in config.get("handlers", {}).values():
        if isinstance(handler_config, dict) and "level" in handler_config:
            handler_level = getattr(
                logging, str(handler_config["level"]).upper(), logging.INFO
            )
            if numeric_level < handler_level:
                handler_config["level"] = level.upper()


def setup_logging(
    config_path: Path | str | None = None,
    level: str | None = None,
    environment: str | None = None,
) -> None:
    """Configure logging using Python standard dictConfig.

    Falls back to basic console logging if the configuration cannot be
    applied; never raises.

    Args:
        config_path: Path to logging configuration file
        level: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        environment: Environment for config selection (dev, prod)

    """
    try:
        if isinstance(config_path, str):
            config_path = Path(config_path)
        elif config_path is None:
            config_path = get_config_path(environment=environment)

        config = load_config(config_path)
        if level:
            _override_level(config, level)

        logging.config.dictConfig(config)
        logging.getLogger(__name__).debug("Logging configured from: %s", config_path)

    except (LoggingError, KeyError, ValueError, TypeError) as e:
        fallback_level = level or "INFO"
        _setup_basic_logging(fallback_level)
        logging.getLogger(__name__).warning(
            "Failed to configure logging from file (%s), using basic console logging at %s level",
            e,
            fallback_level,
        )


def _setup_basic_logging(level: str) -> None:
    """Set up basic console logging as fallback."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
