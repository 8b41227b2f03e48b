"""OpenAI LLM service implementation."""

from __future__ import annotations

import logging
from typing_extensions import override

from langchain_openai import ChatOpenAI
from pydantic import SecretStr

from security_scan.llm.base import BaseLLMService
from security_scan.llm.errors import LLMConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"


class OpenAILLMService(BaseLLMService):
    """Service for interacting with OpenAI (or OpenAI-compatible) models via LangChain."""

    def __init__(  # noqa: PLR0913 - mirrors the llm configuration fields
        self,
        model_name: str | None = None,
        api_key: str | None = None,
        temperature: float = 0.1,
        max_tokens: int = 4096,
        timeout_seconds: float = 30.0,
        base_url: str | None = None,
    ) -> None:
        """Initialise the OpenAI LLM service.

        Raises:
            LLMConfigurationError: If no API key is provided

        """
        if not api_key:
            raise LLMConfigurationError(
                "OpenAI API key is required. Set OPENAI_API_KEY environment "
                "variable or provide api_key in the llm configuration."
            )

        self._model_name = model_name or DEFAULT_MODEL
        self._api_key = api_key
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout_seconds = timeout_seconds
        self._base_url = base_url
        self._llm: ChatOpenAI | None = None
        logger.info(f"Initialised OpenAI LLM service with model: {self._model_name}")

    @property
    @override
    def model_name(self) -> str:
        return self._model_name

    @override
    def _get_llm(self) -> ChatOpenAI:
        if self._llm is None:
            self._llm = ChatOpenAI(
                model=self._model_name,
                api_key=SecretStr(self._api_key),
                temperature=self._temperature,
                max_tokens=self._max_tokens,  # type: ignore[call-arg]
                timeout=self._timeout_seconds,
                max_retries=0,  # Single bounded attempt per scan
                base_url=self._base_url,
            )
            logger.debug("Created LangChain ChatOpenAI instance")
        return self._llm
