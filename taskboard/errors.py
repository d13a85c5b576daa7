"""Domain errors raised by the task store and translated by the API layer."""


class TaskboardError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskboardError):
    """Bad input shape or values (e.g. an empty title)."""

    status_code = 400


class NotFoundError(TaskboardError):
    """Unknown task id."""

    status_code = 404


class ConflictError(TaskboardError):
    """The change requires confirmation or collides with a concurrent update."""

    status_code = 409
