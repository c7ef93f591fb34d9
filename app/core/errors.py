# app/core/errors.py

"""
Application errors.

Services and resolvers raise these; `app.main` turns them into HTTP
responses and the GraphQL layer into GraphQL errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional, Sequence

if TYPE_CHECKING:
    from app.core.validation import FieldViolation


class AppError(Exception):
    """Base error carrying a user-facing message and an HTTP status."""

    status_code: int = 400
    code: str = "BAD_REQUEST"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"message": self.message}


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"


class ConflictError(AppError):
    status_code = 409
    code = "CONFLICT"


class AuthenticationError(AppError):
    status_code = 401
    code = "UNAUTHENTICATED"
    headers = {"WWW-Authenticate": "Bearer"}

    def to_dict(self) -> dict:
        return {"error": True, "message": self.message}


class ForbiddenError(AppError):
    status_code = 403
    code = "FORBIDDEN"

    def to_dict(self) -> dict:
        return {"error": True, "message": self.message}


class RequestValidationFailed(AppError):
    """Raised when one or more input fields break their declared rules."""

    status_code = 400
    code = "VALIDATION"

    def __init__(self, violations: Sequence["FieldViolation"]) -> None:
        self.violations = list(violations)
        fields = ", ".join(v.field for v in self.violations) or "input"
        super().__init__(f"Validation failed for {fields}")

    def to_dict(self) -> dict:
        return {"errors": [v.to_dict() for v in self.violations]}
