"""Multi-provider access to the remote reasoning service."""

from security_scan.llm.anthropic import AnthropicLLMService
from security_scan.llm.base import BaseLLMService
from security_scan.llm.errors import (
    LLMConfigurationError,
    LLMConnectionError,
    LLMServiceError,
)
from security_scan.llm.factory import LLMServiceFactory
from security_scan.llm.google import GoogleLLMService
from security_scan.llm.openai import OpenAILLMService

__all__ = [
    # Base
    "BaseLLMService",
    # Errors
    "LLMServiceError",
    "LLMConfigurationError",
    "LLMConnectionError",
    # Factory
    "LLMServiceFactory",
    # Providers
    "AnthropicLLMService",
    "OpenAILLMService",
    "GoogleLLMService",
]
