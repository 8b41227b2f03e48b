"""LLM service factory."""

from __future__ import annotations

import logging

from security_scan.configuration import LLMServiceConfiguration
from security_scan.llm.anthropic import AnthropicLLMService
from security_scan.llm.base import BaseLLMService
from security_scan.llm.errors import LLMConfigurationError
from security_scan.llm.google import GoogleLLMService
from security_scan.llm.openai import OpenAILLMService

logger = logging.getLogger(__name__)


class LLMServiceFactory:
    """Factory for creating LLM service instances from configuration."""

    @staticmethod
    def create_service(configuration: LLMServiceConfiguration) -> BaseLLMService | None:
        """Create the LLM service selected by the configuration.

        Args:
            configuration: LLM section of the engine configuration

        Returns:
            Configured LLM service, or None when the service is disabled

        Raises:
            LLMConfigurationError: If the provider is unsupported or the API key is missing

        """
        if not configuration.enabled:
            logger.info("LLM service disabled by configuration")
            return None

        model_name = configuration.get_default_model()
        common = {
            "model_name": model_name,
            "api_key": configuration.api_key,
            "temperature": configuration.temperature,
            "max_tokens": configuration.max_tokens,
            "timeout_seconds": configuration.timeout_seconds,
        }

        if configuration.provider == "anthropic":
            return AnthropicLLMService(**common)
        elif configuration.provider == "openai":
            return OpenAILLMService(**common, base_url=configuration.base_url)
        elif configuration.provider == "google":
            return GoogleLLMService(**common)
        else:
            raise LLMConfigurationError(
                f"Unsupported LLM provider: '{configuration.provider}'. "
                f"Supported providers: 'anthropic', 'openai', 'google'."
            )
