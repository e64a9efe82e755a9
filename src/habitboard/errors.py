"""Exception types shared by the stores, services and views."""

from __future__ import annotations


class HabitBoardError(Exception):
    """Base class for HabitBoard failures."""


class FetchError(HabitBoardError):
    """A read from the habit store failed.

    ``message`` is the backend's own error text.
    """

    def __init__(self, message: str, *, resource: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.resource = resource


class MutationError(HabitBoardError):
    """An insert or delete against the habit store failed."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.message = message


class NotAuthenticatedError(HabitBoardError):
    """Raised when a user-scoped operation runs without a signed-in user."""


__all__ = ["FetchError", "HabitBoardError", "MutationError", "NotAuthenticatedError"]
