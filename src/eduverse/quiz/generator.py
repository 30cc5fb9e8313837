"""Generate quizzes with the chat-completion client."""

from __future__ import annotations

import logging
from typing import Protocol

from eduverse.llm import ChatCompletionClient, ChatMessage

from .errors import QuizError
from .models import Question
from .parser import parse_questions

LOGGER = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    "Create a quiz about {topic} with {count} questions. The difficulty is {difficulty}. "
    "Provide 4 answer options per question, each on its own line and labeled A) to D). "
    "Separate questions with a blank line. "
    "Indicate the correct answer with: 'Correct Answer: <answer>'."
)


class QuestionSource(Protocol):
    """Anything able to produce quiz questions."""

    async def get_questions(self, topic: str, difficulty: str, count: int) -> list[Question]: ...


class QuizGenerator:
    """Ask the model for a quiz and parse its answer."""

    def __init__(self, client: ChatCompletionClient) -> None:
        self._client = client

    async def get_questions(self, topic: str, difficulty: str, count: int) -> list[Question]:
        """Return up to ``count`` questions about ``topic``.

        Raises:
            QuizError: If the arguments are invalid or no question could be parsed.
            LLMError: If the model could not be reached.
        """
        if not topic.strip():
            raise QuizError("A topic is required to generate a quiz.")
        if count < 1:
            raise QuizError("At least one question must be requested.")

        prompt = PROMPT_TEMPLATE.format(topic=topic, count=count, difficulty=difficulty)
        messages = [
            ChatMessage(role="system", content=self._client.settings.system_prompt),
            ChatMessage(role="user", content=prompt),
        ]
        text = await self._client.complete(messages)
        questions = parse_questions(text)
        if not questions:
            LOGGER.warning("Quiz generation for %r produced no parseable question", topic)
            raise QuizError("No questions could be generated. Try another topic.")
        return questions[:count]


__all__ = ["QuizGenerator", "QuestionSource", "PROMPT_TEMPLATE"]
