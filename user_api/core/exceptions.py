# File: user_api/core/exceptions.py

from typing import Any, Optional

from fastapi import status


class AppError(Exception):
    """Base class for errors the API maps onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal Server Error"

    def __init__(self, message: Any = None, headers: Optional[dict[str, str]] = None):
        self.message = message if message is not None else self.error
        self.headers = headers
        super().__init__(self.message)


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not Found"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Forbidden"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"

    def __init__(self, message: Any = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Bad Request"
