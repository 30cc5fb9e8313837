"""Answer tracking and scoring for a generated quiz."""

from __future__ import annotations

from typing import Optional, Sequence

from .errors import QuizError
from .models import Question


class QuizSession:
    """Collect one answer per question and compute the score."""

    def __init__(self, questions: Sequence[Question]) -> None:
        self._questions = list(questions)
        self._answers: dict[int, str] = {}

    @property
    def questions(self) -> list[Question]:
        return list(self._questions)

    @property
    def is_complete(self) -> bool:
        return len(self._answers) == len(self._questions)

    def answer(self, index: int, choice: str) -> None:
        """Record ``choice`` for question ``index``, replacing any earlier answer.

        Raises:
            QuizError: If the index is out of range or ``choice`` is not an option.
        """
        if not 0 <= index < len(self._questions):
            raise QuizError(f"No question at index {index}.")
        if choice not in self._questions[index].answers:
            raise QuizError(f"{choice!r} is not an option of question {index + 1}.")
        self._answers[index] = choice

    def answer_of(self, index: int) -> Optional[str]:
        return self._answers.get(index)

    def score(self) -> int:
        """Return the number of correctly answered questions."""
        return sum(
            1
            for index, choice in self._answers.items()
            if self._questions[index].is_correct(choice)
        )


__all__ = ["QuizSession"]
