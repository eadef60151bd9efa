# app/core/exceptions.py
"""
Error taxonomy for the auth and expense core.

Every error is raised where it is detected and travels unchanged to the
exception handlers registered in app/main.py, which render it as
``{"statusCode", "message", "errorType"}``.
"""
from typing import Dict, Optional

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type: str = "Internal Server Error"
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        self.message = message or self.default_message
        self.headers = headers
        super().__init__(self.message)


class DuplicateIdentity(AppError):
    status_code = status.HTTP_409_CONFLICT
    error_type = "Conflict"
    default_message = "Username already exists"


class InvalidCredentials(AppError):
    # Same message for unknown user and wrong password
    status_code = status.HTTP_401_UNAUTHORIZED
    error_type = "Unauthorized"
    default_message = "Invalid credentials"


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_type = "Unauthorized"
    default_message = "Unauthorized"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class AccessDenied(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    error_type = "Forbidden"
    default_message = "Access denied"


class MissingCurrentPassword(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_type = "Bad Request"
    default_message = "Current password is required to change password"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    error_type = "Not Found"
    default_message = "User not found"


class InvalidToken(Exception):
    """Raised by the token service; never rendered directly.

    ``reason`` is for server logs only, the access guard turns every
    InvalidToken into the same Unauthenticated response.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)
