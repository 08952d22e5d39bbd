"""Error types raised by services and adapters."""


class FitTrackError(Exception):
    """Base class for application errors."""

    message = "Unexpected error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(FitTrackError):
    """Input is malformed or out of range."""

    message = "Invalid input"


class NotFoundError(FitTrackError):
    """A user, meal or food record does not exist."""

    message = "Not found"


class UnauthorizedError(FitTrackError):
    """The caller is not authenticated."""

    message = "Unauthorized"


class ServiceUnavailableError(FitTrackError):
    """An upstream provider failed or returned a non-success status."""

    message = "Service unavailable"


class StorageError(ServiceUnavailableError):
    """The persistent store failed."""

    message = "Storage unavailable"
