"""Google LLM service implementation."""

from __future__ import annotations

import logging
from typing_extensions import override

from langchain_google_genai import ChatGoogleGenerativeAI
from pydantic import SecretStr

from security_scan.llm.base import BaseLLMService
from security_scan.llm.errors import LLMConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


class GoogleLLMService(BaseLLMService):
    """Service for interacting with Google's Gemini models via LangChain."""

    def __init__(
        self,
        model_name: str | None = None,
        api_key: str | None = None,
        temperature: float = 0.1,
        max_tokens: int = 4096,
        timeout_seconds: float = 30.0,
    ) -> None:
        """Initialise the Google LLM service.

        Raises:
            LLMConfigurationError: If no API key is provided

        """
        if not api_key:
            raise LLMConfigurationError(
                "Google API key is required. Set GOOGLE_API_KEY environment "
                "variable or provide api_key in the llm configuration."
            )

        self._model_name = model_name or DEFAULT_MODEL
        self._api_key = api_key
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout_seconds = timeout_seconds
        self._llm: ChatGoogleGenerativeAI | None = None
        logger.info(f"Initialised Google LLM service with model: {self._model_name}")

    @property
    @override
    def model_name(self) -> str:
        return self._model_name

    @override
    def _get_llm(self) -> ChatGoogleGenerativeAI:
        if self._llm is None:
            self._llm = ChatGoogleGenerativeAI(
                model=self._model_name,
                google_api_key=SecretStr(self._api_key),
                temperature=self._temperature,
                max_output_tokens=self._max_tokens,
                timeout=self._timeout_seconds,
                max_retries=0,  # Single bounded attempt per scan
            )
            logger.debug("Created LangChain ChatGoogleGenerativeAI instance")
        return self._llm
