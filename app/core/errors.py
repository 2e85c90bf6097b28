"""
Application error taxonomy.

Every error raised from the service layer carries the HTTP status it maps
to; the handlers in app.main turn them into `{"message": ...}` bodies.
Nothing here is retried: a failure is terminal for the request.
"""

from typing import Dict, List, Optional


class AppError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict:
        return {"message": self.message}


class ValidationError(AppError):
    """Malformed or out-of-range input. Carries field-level detail."""

    status_code = 400
    default_message = "Validation error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.errors = errors or []

    def to_dict(self) -> Dict:
        body = super().to_dict()
        if self.errors:
            body["errors"] = self.errors
        return body


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class AuthenticationError(AppError):
    """Missing session or bad credentials. Message stays generic."""

    status_code = 401
    default_message = "Authentication required"


class ConflictError(AppError):
    status_code = 409
    default_message = "Conflict"
