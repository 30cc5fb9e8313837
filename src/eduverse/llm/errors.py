"""Chat-completion errors."""


class LLMError(Exception):
    """Raised when a completion cannot be obtained.

    Covers transport failures, non-success responses, unparseable bodies and
    empty answers alike; callers surface them as one generic failure.
    """
