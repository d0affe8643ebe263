"""Exceptions for the Messages feature."""
from typing import Any

from api.shared.exceptions import MarketplaceException, NotFoundError, ValidationError


class MessageNotFoundError(NotFoundError):
    """Raised when a private message is not found."""

    def __init__(self, message_id: Any):
        super().__init__("Message", message_id)
        self.error_code = "MESSAGE_NOT_FOUND"


class SelfMessageError(ValidationError):
    """Raised when a user addresses a message to themselves."""

    def __init__(self, user_id: int):
        super().__init__(
            "Sender and receiver must be different users",
            {"sender_id": user_id, "receiver_id": user_id},
            error_code="SELF_MESSAGE",
        )


class ContactResolutionError(MarketplaceException):
    """Raised when a counterparty found in the message log has no user record."""

    def __init__(self, user_id: int, contact_id: int):
        message = f"Contact '{contact_id}' of user '{user_id}' could not be resolved"
        super().__init__(
            message,
            "CONTACT_RESOLUTION_ERROR",
            {"user_id": user_id, "contact_id": contact_id},
        )
