"""
Custom exceptions for the application.
All API exceptions should inherit from APIException for consistent error handling.
"""
from typing import Optional, Any


class APIException(Exception):
    """
    Base exception for all API errors.
    Provides consistent error response format.
    """

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Optional[Any] = None,
    ):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details
        super().__init__(self.message)


class BadRequestException(APIException):
    """400 Bad Request"""

    def __init__(self, message: str = "Bad request", code: str = "BAD_REQUEST"):
        super().__init__(400, code, message)


class UnauthorizedException(APIException):
    """401 Unauthorized"""

    def __init__(self, message: str = "Unauthorized", code: str = "UNAUTHORIZED"):
        super().__init__(401, code, message)


class ForbiddenException(APIException):
    """403 Forbidden"""

    def __init__(self, message: str = "Forbidden", code: str = "FORBIDDEN"):
        super().__init__(403, code, message)


class NotFoundException(APIException):
    """404 Not Found"""

    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(404, code, message)


class ConflictException(APIException):
    """409 Conflict"""

    def __init__(self, message: str = "Resource conflict", code: str = "CONFLICT"):
        super().__init__(409, code, message)


class ValidationException(APIException):
    """422 Validation Error"""

    def __init__(
        self,
        message: str = "Validation error",
        code: str = "VALIDATION_ERROR",
        details: Optional[Any] = None,
    ):
        super().__init__(422, code, message, details)


# Authentication specific exceptions
class InvalidCredentialsException(UnauthorizedException):
    """Invalid email or password"""

    def __init__(self):
        super().__init__(
            message="Invalid email or password",
            code="INVALID_CREDENTIALS",
        )


class InvalidTokenException(UnauthorizedException):
    """Token is invalid"""

    def __init__(self):
        super().__init__(
            message="Invalid token",
            code="INVALID_TOKEN",
        )


class EmailAlreadyExistsException(ConflictException):
    """Email already registered"""

    def __init__(self):
        super().__init__(
            message="Email already registered",
            code="EMAIL_EXISTS",
        )


# Resource specific exceptions
class UserNotFoundException(NotFoundException):
    """User not found"""

    def __init__(self):
        super().__init__(message="User not found", code="USER_NOT_FOUND")


class SkillNotFoundException(NotFoundException):
    """Skill not found"""

    def __init__(self):
        super().__init__(message="Skill not found", code="SKILL_NOT_FOUND")


class ConnectionRequestNotFoundException(NotFoundException):
    """Connection request not found"""

    def __init__(self):
        super().__init__(
            message="Connection request not found",
            code="CONNECTION_REQUEST_NOT_FOUND",
        )


class SkillExchangeNotFoundException(NotFoundException):
    """Skill exchange not found"""

    def __init__(self):
        super().__init__(message="Skill exchange not found", code="SKILL_EXCHANGE_NOT_FOUND")


class ProgressNotFoundException(NotFoundException):
    """Skill progress not found"""

    def __init__(self):
        super().__init__(message="Skill progress not found", code="PROGRESS_NOT_FOUND")


class SessionNotFoundException(NotFoundException):
    """Learning session not found"""

    def __init__(self):
        super().__init__(message="Session not found", code="SESSION_NOT_FOUND")


class ChatNotFoundException(NotFoundException):
    """Chat not found"""

    def __init__(self):
        super().__init__(message="Chat not found", code="CHAT_NOT_FOUND")


class NotificationNotFoundException(NotFoundException):
    """Notification not found"""

    def __init__(self):
        super().__init__(message="Notification not found", code="NOTIFICATION_NOT_FOUND")


# Lifecycle exceptions
class SelfConnectionException(BadRequestException):
    """A user tried to connect with themselves"""

    def __init__(self):
        super().__init__(
            message="You cannot send a connection request to yourself",
            code="SELF_CONNECTION",
        )


class AlreadyConnectedException(ConflictException):
    """Users are already connected"""

    def __init__(self):
        super().__init__(message="Users are already connected", code="ALREADY_CONNECTED")


class NotConnectedException(ForbiddenException):
    """Operation requires an accepted connection between the two users"""

    def __init__(self):
        super().__init__(message="Users are not connected", code="NOT_CONNECTED")


class InvalidTransitionException(ConflictException):
    """Requested status change is not allowed from the current status"""

    def __init__(self, current: str, target: str):
        super().__init__(
            message=f"Cannot move from '{current}' to '{target}'",
            code="INVALID_TRANSITION",
        )
