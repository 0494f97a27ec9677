"""Errors that the API layer turns into ``{"message": ...}`` responses."""


class GoalsApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class GoalValidationError(GoalsApiError):
    """Client-supplied goal text was rejected. ``reason`` labels the validation counter."""

    def __init__(self, reason: str, status_code: int, message: str):
        super().__init__(status_code, message)
        self.reason = reason


class StoreUnavailable(Exception):
    """The goal store could not complete a read or write."""
