from fastapi import status


class AppError(Exception):
    """Base for errors that are reported to the client as ``{success: false, message}``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Something went wrong!"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Missing required fields"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class RoundNotFound(NotFoundError):
    message = "Round not found"


class ParticipantNotFound(NotFoundError):
    message = "Participant not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    message = "Conflict"


class EmailAlreadyRegistered(ConflictError):
    message = "Email already registered!"


class StorageUnavailableError(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    message = "Storage temporarily unavailable, please retry"
