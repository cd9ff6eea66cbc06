"""Exceptions raised by the auth services; each maps to one HTTP status and client message."""


class AuthServiceError(Exception):
    """Base for failures that are reported to the client as {"error": message}."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class EmailInUseError(AuthServiceError):
    """Raised when signup (or a profile update) uses an email that another account owns."""

    status_code = 409
    default_message = "Email already in use"


class InvalidCredentialsError(AuthServiceError):
    """Raised on login with an unknown email or a wrong password (same message for both)."""

    status_code = 401
    default_message = "Invalid credentials"


class NotAuthenticatedError(AuthServiceError):
    """Raised when a protected route is called without a Bearer token."""

    status_code = 401
    default_message = "Unauthorized: No token provided"


class InvalidTokenError(AuthServiceError):
    """Raised when a bearer token is malformed, tampered with, signed with another key, or expired."""

    status_code = 403
    default_message = "Invalid or expired token"


class AdminRequiredError(AuthServiceError):
    status_code = 403
    default_message = "Admin access required"


class UserNotFoundError(AuthServiceError):
    status_code = 404
    default_message = "User not found"


class InternalServiceError(AuthServiceError):
    """Unexpected store or hashing failure. The cause is logged, never sent to the client."""

    status_code = 500
