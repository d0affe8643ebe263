"""Exceptions for the Users feature."""
from typing import Any

from api.shared.exceptions import NotFoundError, ValidationError


class UserNotFoundError(NotFoundError):
    """Raised when a user is not found.

    ``role`` names the part the user plays in the request (``Sender``,
    ``Receiver``) so the client can tell which reference was wrong.
    """

    def __init__(self, user_id: Any, role: str = "User"):
        super().__init__(role, user_id)
        self.error_code = "USER_NOT_FOUND"
        self.details["role"] = role


class UserAlreadyExistsError(ValidationError):
    """Raised when registering an email that is already in use."""

    def __init__(self, email: str):
        super().__init__(
            f"Email '{email}' is already in use",
            {"email": email},
            error_code="USER_ALREADY_EXISTS",
        )
