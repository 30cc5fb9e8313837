"""Quiz data models."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, model_validator


class Question(BaseModel):
    """A multiple-choice question.

    Attributes:
        text: The question itself.
        answers: Four labeled options, in display order.
        correct_answer: The option that is correct; always one of ``answers``.
    """

    text: str
    answers: List[str] = Field(min_length=4, max_length=4)
    correct_answer: str

    @model_validator(mode="after")
    def _correct_answer_is_an_option(self) -> "Question":
        if self.correct_answer not in self.answers:
            raise ValueError("correct_answer must be one of the answers")
        return self

    def is_correct(self, answer: str) -> bool:
        return answer == self.correct_answer


__all__ = ["Question"]
