"""AI question-answering assistant."""

from .service import Assistant, AssistantBackend
from .viewmodel import GENERIC_ERROR_MESSAGE, AssistantViewModel

__all__ = ["Assistant", "AssistantBackend", "AssistantViewModel", "GENERIC_ERROR_MESSAGE"]
