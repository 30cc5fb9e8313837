"""Todo list errors."""


class TodoError(Exception):
    """Raised when the todo store fails or a todo cannot be found."""
