"""Chat-completion access shared by the assistant and the quiz generator."""

from .client import ChatCompletionClient
from .errors import LLMError
from .models import ChatChoice, ChatCompletionRequest, ChatCompletionResponse, ChatMessage

__all__ = [
    "ChatCompletionClient",
    "LLMError",
    "ChatChoice",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ChatMessage",
]
