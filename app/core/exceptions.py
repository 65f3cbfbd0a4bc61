"""
Error kinds raised by the services and mapped to responses in app.main.
"""

from fastapi import status


class ForumError(Exception):
    """Base class for errors that end the current request"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Please try later"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ForumError):
    """Bad user input, shown inline on the form"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class AuthError(ForumError):
    """Missing, expired or invalid session"""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class CSRFError(ForumError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden: CSRF token invalid"


class NotFound(ForumError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Page not found"


class PersistenceError(ForumError):
    """Database failure. The message is always the generic one."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Please try later"
