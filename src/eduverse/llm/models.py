"""Wire models for OpenAI-style chat completions."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """One message of a conversation."""

    role: Literal["system", "user", "assistant"]
    content: str


class ChatCompletionRequest(BaseModel):
    """Body posted to ``/chat/completions``."""

    model: str
    messages: List[ChatMessage]
    temperature: float = 0.7
    max_tokens: Optional[int] = None


class ChatChoice(BaseModel):
    """A generated alternative."""

    index: int = 0
    message: Optional[ChatMessage] = None


class ChatCompletionResponse(BaseModel):
    """Subset of the completion response the app reads."""

    choices: List[ChatChoice] = Field(default_factory=list)

    def first_content(self) -> Optional[str]:
        """Return the trimmed content of the first choice, if any."""
        if not self.choices or self.choices[0].message is None:
            return None
        return self.choices[0].message.content.strip()


__all__ = ["ChatMessage", "ChatCompletionRequest", "ChatChoice", "ChatCompletionResponse"]
