"""Error types raised by the Contacts API.

Every error carries the HTTP status it maps to and an ``errors`` mapping
of field name (or ``"message"``) to a list of messages. The exception
handlers registered in ``main`` render that mapping as the
``{"errors": {...}}`` response body.
"""

from typing import Dict, List


class AppError(Exception):
    """Base class for all application errors."""

    status_code: int = 400

    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = errors
        super().__init__(
            "; ".join(f"{key}: {', '.join(msgs)}" for key, msgs in errors.items())
        )

    @classmethod
    def with_message(cls, message: str) -> "AppError":
        """Build an error carrying a single general message."""
        return cls({"message": [message]})

    def to_dict(self) -> dict:
        """Convert the error to the response body."""
        return {"errors": self.errors}


class ValidationError(AppError):
    """A field is missing, malformed or too long."""

    status_code = 400


class ConflictError(AppError):
    """A unique value is already taken."""

    status_code = 400


class UnauthorizedError(AppError):
    """Missing or invalid token, or wrong credentials."""

    status_code = 401


class NotFoundError(AppError):
    """Entity is absent or owned by someone else."""

    status_code = 404


UNAUTHORIZED = "unauthorized"
NOT_FOUND = "not found."
BAD_CREDENTIALS = "username or password is wrong"
USERNAME_TAKEN = "username already exists"
