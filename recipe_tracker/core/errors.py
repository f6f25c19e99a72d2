from typing import Any, Mapping


class RecipeTrackerError(Exception):
    """Base class for failures a store operation reports back to its caller.

    Attributes:
        message: human-readable message, shown verbatim by the UI
        details: optional mapping with extra context (field errors, counts)
        kind: machine-readable error kind carried into the result payload
    """

    kind = "Error"
    default_message = "Operation failed"

    def __init__(self, message: str | None = None, details: Mapping[str, Any] | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.details = details

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(RecipeTrackerError):
    """Input has the wrong shape or is out of range."""

    kind = "ValidationError"
    default_message = "Invalid input"


class ConflictError(RecipeTrackerError):
    """A unique constraint was violated (e.g. duplicate username)."""

    kind = "ConflictError"
    default_message = "Conflict"


class AuthError(RecipeTrackerError):
    """Bad credentials or no active session."""

    kind = "AuthError"
    default_message = "User not authenticated"


class NotFoundOrForbiddenError(RecipeTrackerError):
    """The row does not exist or belongs to another user.

    The two cases share one error so callers cannot probe for ids they do not own.
    """

    kind = "NotFoundOrForbidden"
    default_message = "Not found"


class StorageError(RecipeTrackerError):
    kind = "StorageError"
    default_message = "Storage failure"
