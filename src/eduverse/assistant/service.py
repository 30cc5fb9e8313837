"""Question answering on top of the chat-completion client."""

from __future__ import annotations

from typing import Protocol

from eduverse.llm import ChatCompletionClient, ChatMessage


class AssistantBackend(Protocol):
    """Anything able to answer a free-form question."""

    async def ask_assistant(self, question: str) -> str: ...


class Assistant:
    """Answer questions with the configured system prompt."""

    def __init__(self, client: ChatCompletionClient) -> None:
        self._client = client

    async def ask_assistant(self, question: str) -> str:
        """Return the model's answer to ``question``.

        Raises:
            LLMError: If no answer could be obtained.
        """
        messages = [
            ChatMessage(role="system", content=self._client.settings.system_prompt),
            ChatMessage(role="user", content=question),
        ]
        return await self._client.complete(messages)
