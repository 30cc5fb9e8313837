"""Async HTTP client for OpenAI-compatible chat completions."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import httpx
from pydantic import ValidationError

from eduverse.config.exceptions import MissingSettingError
from eduverse.config.models import AssistantSettings

from .errors import LLMError
from .models import ChatCompletionRequest, ChatCompletionResponse, ChatMessage

LOGGER = logging.getLogger(__name__)


class ChatCompletionClient:
    """Post chat-completion requests and return the first answer.

    Example:
        client = ChatCompletionClient(config.assistant)
        answer = await client.complete([ChatMessage(role="user", content="Hi")])
    """

    def __init__(
        self,
        settings: AssistantSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Endpoint, model and sampling settings.
            transport: Optional httpx transport (tests pass ``httpx.MockTransport``).
        """
        self._settings = settings
        self._transport = transport

    @property
    def settings(self) -> AssistantSettings:
        return self._settings

    @property
    def endpoint(self) -> str:
        return f"{self._settings.base_url.rstrip('/')}/chat/completions"

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: Optional[float] = None,
    ) -> str:
        """Return the trimmed content of the first completion choice.

        Raises:
            MissingSettingError: If no API key is configured.
            LLMError: On transport errors, non-2xx responses, bad JSON or empty content.
        """
        if not self._settings.api_key:
            raise MissingSettingError("assistant.api_key")

        payload = ChatCompletionRequest(
            model=self._settings.model,
            messages=list(messages),
            temperature=self._settings.temperature if temperature is None else temperature,
            max_tokens=self._settings.max_tokens,
        )
        headers = {"Authorization": f"Bearer {self._settings.api_key}"}

        try:
            async with httpx.AsyncClient(
                timeout=self._settings.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.endpoint,
                    json=payload.model_dump(exclude_none=True),
                    headers=headers,
                )
        except httpx.HTTPError as exc:
            LOGGER.error("Chat completion request failed: %s", exc)
            raise LLMError(f"Chat completion request failed: {exc}") from exc

        if response.is_error:
            LOGGER.error("Chat completion returned HTTP %s", response.status_code)
            raise LLMError(f"Unsuccessful chat completion response: HTTP {response.status_code}")

        try:
            parsed = ChatCompletionResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise LLMError(f"Malformed chat completion response: {exc}") from exc

        content = parsed.first_content()
        if not content:
            raise LLMError("Empty AI response")
        return content


__all__ = ["ChatCompletionClient"]
