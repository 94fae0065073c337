"""
Application error taxonomy.

Every ``AppError`` knows the HTTP status and JSON body it maps to; the
handlers in ``api.middleware`` render them without further branching.
"""

from __future__ import annotations

from typing import Any, Dict


class AppError(Exception):
    """Base class for errors that surface to the HTTP caller."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message}


class DuplicateUser(AppError):
    """Registration conflict: the email is already taken."""

    status_code = 400
    message = "User already exists"

    def to_body(self) -> Dict[str, Any]:
        return {"success": False, "message": self.message}


class InvalidCredentials(AppError):
    """
    Login failure.

    Deliberately covers both "unknown email" and "wrong password" so the
    response never reveals whether an account exists.
    """

    status_code = 401
    message = "Invalid email or password"


class InvalidToken(AppError):
    status_code = 401
    message = "Invalid or expired token"


class InvalidObjectId(AppError):
    status_code = 400
    message = "Invalid supply id"


class SupplyNotFound(AppError):
    status_code = 404
    message = "Supply not found"


class StoreUnavailable(AppError):
    """Any unhandled data-layer fault. Detail stays in the server log."""

    status_code = 500
    message = "Internal server error"
