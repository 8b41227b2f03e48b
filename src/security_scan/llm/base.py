"""Base LLM service interface."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from security_scan.llm.errors import LLMConfigurationError, LLMConnectionError

logger = logging.getLogger(__name__)


class BaseLLMService(ABC):
    """Abstract base class for LLM service implementations.

    Subclasses only have to build their LangChain chat model; the request
    flow (message assembly, async invocation, content extraction and error
    wrapping) is shared. Requests are made with ``ainvoke`` so cancelling
    the awaiting task cancels the in-flight HTTP call.
    """

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Return the model identifier used for requests."""

    @abstractmethod
    def _get_llm(self) -> BaseChatModel:
        """Get or create the LangChain chat model instance."""

    async def complete(self, prompt: str, *, system_prompt: str | None = None) -> str:
        """Send one prompt to the model and return its text response.

        Args:
            prompt: The user prompt
            system_prompt: Optional system instructions

        Returns:
            Response text, stripped

        Raises:
            LLMConfigurationError: If the provider client cannot be created
            LLMConnectionError: If the LLM request fails

        """
        messages: list[BaseMessage] = []
        if system_prompt:
            messages.append(SystemMessage(content=system_prompt))
        messages.append(HumanMessage(content=prompt))

        try:
            logger.debug(f"Sending prompt to {self.model_name} ({len(prompt)} chars)")

            response = await self._get_llm().ainvoke(messages)
            result = self._extract_content(response)

            logger.debug(f"LLM request completed (response length: {len(result)} chars)")
            return result

        except LLMConfigurationError:
            raise
        except Exception as e:
            logger.error(f"LLM request failed: {e}")
            raise LLMConnectionError(f"LLM request failed: {e}") from e

    def _extract_content(self, response: BaseMessage) -> str:
        """Extract string content from a LangChain response.

        Content may be a plain string, a list of text blocks or strings, or a
        single dict block.
        """
        content = response.content  # type: ignore[reportUnknownMemberType,reportUnknownVariableType]

        if isinstance(content, str):
            return content.strip()

        if isinstance(content, list):  # type: ignore[reportUnnecessaryIsInstance]
            text_parts: list[str] = []
            for item in content:  # type: ignore[reportUnknownVariableType]
                if isinstance(item, dict) and "text" in item:
                    text_parts.append(str(item["text"]))  # type: ignore[reportUnknownArgumentType]
                else:
                    text_parts.append(str(item))  # type: ignore[reportUnknownArgumentType]
            return " ".join(text_parts).strip()

        if isinstance(content, dict) and "text" in content:  # type: ignore[reportUnnecessaryIsInstance]
            return str(content["text"]).strip()  # type: ignore[reportUnknownArgumentType]

        return str(content).strip()
