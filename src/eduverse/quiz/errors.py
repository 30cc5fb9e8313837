"""Quiz errors."""


class QuizError(Exception):
    """Raised when a quiz cannot be generated or an answer is not valid."""
