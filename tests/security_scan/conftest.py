"""Shared fixtures for security scan engine tests."""

import logging
from collections.abc import Iterator
from unittest.mock import AsyncMock, Mock

import pytest

from security_scan.llm import BaseLLMService

_SCAN_ENV_VARS = (
    "LLM_ENABLED",
    "LLM_PROVIDER",
    "LLM_API_KEY",
    "LLM_MODEL",
    "LLM_TEMPERATURE",
    "LLM_MAX_TOKENS",
    "LLM_TIMEOUT",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_MODEL",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_BASE_URL",
    "GOOGLE_API_KEY",
    "GOOGLE_MODEL",
    "STATIC_ENABLED_RULES",
    "STATIC_SEVERITY_THRESHOLD",
    "SCAN_MAX_CODE_SIZE",
    "SECURITY_SCAN_ENV",
)


@pytest.fixture(autouse=True)
def isolate_environment(
    request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Remove engine environment variables so tests only see what they set.

    Integration tests keep the real environment (they need API keys).
    """
    if request.node.get_closest_marker("integration"):
        return
    for name in _SCAN_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_llm_service() -> Mock:
    """LLM service stub returning an empty JSON array."""
    service = Mock(spec=BaseLLMService)
    service.model_name = "test-model"
    service.complete = AsyncMock(return_value="[]")
    return service


@pytest.fixture(autouse=True)
def restore_package_logger() -> Iterator[None]:
    """Undo logging configuration applied by setup_logging() during a test."""
    root_logger = logging.getLogger()
    root_handlers = list(root_logger.handlers)
    root_level = root_logger.level
    yield
    root_logger.handlers[:] = root_handlers
    root_logger.setLevel(root_level)
    package_logger = logging.getLogger("security_scan")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
