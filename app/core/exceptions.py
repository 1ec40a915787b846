# ============================================================================
# FILE: app/core/exceptions.py
# Domain errors raised by services, rendered as {"message": ...} by app.main
# ============================================================================
from fastapi import status


class AppError(Exception):
    """Base class for errors that map onto an HTTP response"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class InvalidOperationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Operation not allowed"


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class ServerError(AppError):
    pass
