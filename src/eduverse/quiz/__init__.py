"""Quiz generation and scoring."""

from .errors import QuizError
from .generator import QuestionSource, QuizGenerator
from .models import Question
from .parser import parse_questions
from .session import QuizSession

__all__ = [
    "QuizError",
    "QuestionSource",
    "QuizGenerator",
    "Question",
    "parse_questions",
    "QuizSession",
]
