"""DTOs for the Messages feature.

Field names serialize in camelCase to match the mobile client.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from api.features.messages.entities.private_message import MessageStatus
from api.features.messages.models import ConversationModel, PrivateMessageModel
from api.features.users.dtos import ContactDTO
from api.shared.dtos import BaseDTO, ErrorResponse


class SendMessageRequest(BaseDTO):
    """Send a private message. Presence and types are checked by the controller."""

    content: Optional[Any] = Field(default=None, description="Message text")
    sender_id: Optional[Any] = Field(default=None, description="Sender user id")
    receiver_id: Optional[Any] = Field(default=None, description="Receiver user id")


class PrivateMessageDTO(BaseDTO):
    """Private message as stored, optionally with both parties embedded."""

    id: int = Field(description="Message identifier")
    content: str = Field(description="Message text")
    sender_id: int = Field(description="Sender user id")
    receiver_id: int = Field(description="Receiver user id")
    read: bool = Field(description="Whether the receiver read it")
    status: MessageStatus = Field(description="Delivery status")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: Optional[datetime] = Field(default=None, description="Last update timestamp")
    sender: Optional[ContactDTO] = Field(default=None, description="Sender metadata")
    receiver: Optional[ContactDTO] = Field(default=None, description="Receiver metadata")

    @classmethod
    def from_model(cls, model: PrivateMessageModel) -> "PrivateMessageDTO":
        return cls(
            id=model.id,
            content=model.content,
            sender_id=model.sender_id,
            receiver_id=model.receiver_id,
            read=model.read,
            status=model.status,
            created_at=model.created_at,
            updated_at=model.updated_at,
            sender=ContactDTO.model_validate(model.sender) if model.sender else None,
            receiver=ContactDTO.model_validate(model.receiver) if model.receiver else None,
        )


class ConversationDTO(BaseDTO):
    """Conversation entry of a user's inbox."""

    contact_id: int = Field(description="Counterparty user id")
    contact: Optional[ContactDTO] = Field(default=None, description="Counterparty metadata")
    last_message: Optional[PrivateMessageDTO] = Field(
        default=None, description="Latest message in either direction"
    )
    error: Optional[ErrorResponse] = Field(
        default=None, description="Set when the contact could not be resolved"
    )

    @classmethod
    def from_model(cls, model: ConversationModel) -> "ConversationDTO":
        return cls(
            contact_id=model.contact_id,
            contact=ContactDTO.model_validate(model.contact) if model.contact else None,
            last_message=(
                PrivateMessageDTO.from_model(model.last_message)
                if model.last_message
                else None
            ),
            error=ErrorResponse(**model.error) if model.error else None,
        )


class MarkConversationReadResponse(BaseDTO):
    """Acknowledgement of a bulk mark-as-read."""

    message: str = Field(description="Status message")
    updated: int = Field(description="Number of messages marked as read")
