# safarsorted/core/errors.py
from fastapi import status


class AppError(Exception):
    """
    Base for errors that map onto an HTTP response.
    The message is what the client sees, so keep it generic.
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Inquiry not found"


class RateLimited(AppError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    message = "Too many requests, please try again later."


class StorageError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Storage failure"
