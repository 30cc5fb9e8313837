"""Conversation state for the assistant screen."""

from __future__ import annotations

import logging
from typing import Optional

from .service import AssistantBackend

LOGGER = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An error occurred. Please try again."


class AssistantViewModel:
    """Track question/answer pairs, loading state and the last error message."""

    def __init__(self, backend: AssistantBackend) -> None:
        self._backend = backend
        self._conversation: list[tuple[str, str]] = []
        self._is_loading = False
        self._error_message: Optional[str] = None

    @property
    def conversation(self) -> list[tuple[str, str]]:
        return list(self._conversation)

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def error_message(self) -> Optional[str]:
        return self._error_message

    async def send_question(self, question: str) -> Optional[str]:
        """Ask ``question`` and append the exchange to the conversation.

        Blank questions are ignored. Failures set ``error_message`` instead of raising.

        Returns:
            Optional[str]: The answer, or ``None`` when nothing was appended.
        """
        if not question.strip():
            return None

        self._is_loading = True
        self._error_message = None
        try:
            answer = await self._backend.ask_assistant(question)
        except Exception as exc:
            LOGGER.error("Assistant failed to answer: %s", exc)
            self._error_message = GENERIC_ERROR_MESSAGE
            return None
        finally:
            self._is_loading = False

        self._conversation.append((question, answer))
        return answer
