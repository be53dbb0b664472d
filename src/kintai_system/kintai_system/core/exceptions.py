from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations.

    Carries the HTTP status the API layer answers with; the message is safe
    to show to clients.
    """

    status_code = 400

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400


class DuplicateError(ValidationError):
    """Raised when a unique record (e.g. one report per day) already exists."""


class AuthenticationError(DomainError):
    """Raised when credentials or tokens are missing or invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class NotFoundError(DomainError):
    status_code = 404


class ExternalServiceError(DomainError):
    """Raised when an external collaborator (Notion) cannot be used."""

    status_code = 500
