"""
Error taxonomy shared by the auth and task layers.

Every ``AppError`` carries the HTTP status it maps to and a client-safe
message; ``api.middleware`` turns them into the response envelope.
"""

from __future__ import annotations


class AppError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"


class UnauthorizedError(AppError):
    """Bad credentials on login."""

    status_code = 401
    default_message = "Invalid email or password"


class UnauthenticatedError(AppError):
    """Missing, malformed or expired bearer token."""

    status_code = 401
    default_message = "Invalid or expired token"


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class ConflictError(AppError):
    status_code = 409
    default_message = "Conflict"


class InternalError(AppError):
    status_code = 500


# ── Token-level errors (translated by the request authenticator) ───────


class InvalidTokenError(Exception):
    """Token is structurally malformed or its signature does not match."""


class TokenExpiredError(InvalidTokenError):
    """Token signature is valid but its expiry has passed."""


class ConfigurationError(RuntimeError):
    """Startup-fatal misconfiguration (e.g. no signing secret)."""
