"""Domain errors raised by the services.

The HTTP layer renders every ServiceError as ``{"success": false, "error": message}``.
"""
from fastapi import status


class ServiceError(Exception):
    message = "Request failed"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = None):
        self.message = message or self.message
        super().__init__(self.message)


class UserNotFound(ServiceError):
    message = "User not found"
    status_code = status.HTTP_404_NOT_FOUND


class InvalidCredentials(ServiceError):
    message = "Invalid password"
    status_code = status.HTTP_401_UNAUTHORIZED


class EmailAlreadyExists(ServiceError):
    message = "User with this email already exists"
    status_code = status.HTTP_409_CONFLICT


class PromptNotFound(ServiceError):
    message = "Prompt not found"
    status_code = status.HTTP_404_NOT_FOUND


class PermissionDenied(ServiceError):
    message = "Permission denied"
    status_code = status.HTTP_403_FORBIDDEN


class VersionConflict(ServiceError):
    message = "Prompt was modified concurrently"
    status_code = status.HTTP_409_CONFLICT


class ValidationFailed(ServiceError):
    message = "Validation failed"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class AuthenticationRequired(ServiceError):
    message = "Authentication required"
    status_code = status.HTTP_401_UNAUTHORIZED
