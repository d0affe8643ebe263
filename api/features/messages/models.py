"""Models for the Messages feature."""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from api.features.messages.entities.private_message import (
    MessageStatus,
    PrivateMessage as PrivateMessageEntity,
)
from api.features.users.models import ContactModel


class PrivateMessageModel(BaseModel):
    """Domain model for PrivateMessage."""

    id: int = Field(description="Message identifier")
    sender_id: int = Field(description="Sender user id")
    receiver_id: int = Field(description="Receiver user id")
    content: str = Field(description="Message text")
    read: bool = Field(default=False, description="Whether the receiver read it")
    status: MessageStatus = Field(default=MessageStatus.SENT, description="Delivery status")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: Optional[datetime] = Field(default=None, description="Last update timestamp")
    sender: Optional[ContactModel] = Field(default=None, description="Sender metadata")
    receiver: Optional[ContactModel] = Field(default=None, description="Receiver metadata")

    class Config:
        from_attributes = True

    @classmethod
    def from_entity(
        cls, entity: PrivateMessageEntity, *, with_parties: bool = False
    ) -> "PrivateMessageModel":
        """Create model from database entity.

        ``with_parties`` requires sender and receiver to be eagerly loaded.
        """
        return cls(
            id=entity.id,
            sender_id=entity.sender_id,
            receiver_id=entity.receiver_id,
            content=entity.content,
            read=entity.read,
            status=MessageStatus(entity.status),
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            sender=ContactModel.from_entity(entity.sender) if with_parties else None,
            receiver=ContactModel.from_entity(entity.receiver) if with_parties else None,
        )


class ConversationModel(BaseModel):
    """A contact paired with the latest message exchanged with them.

    ``contact`` is None only when the contact could not be resolved and
    failures are isolated per entry; ``error`` then describes why.
    """

    contact_id: int = Field(description="Counterparty user id")
    contact: Optional[ContactModel] = Field(default=None, description="Counterparty metadata")
    last_message: Optional[PrivateMessageModel] = Field(
        default=None, description="Latest message in either direction"
    )
    error: Optional[Dict[str, Any]] = Field(default=None, description="Per-entry failure")

    def recency_key(self) -> tuple:
        """Sort key placing the most recent conversation first."""
        if self.last_message is None:
            return (0, 0.0, 0)
        return (1, self.last_message.created_at.timestamp(), self.last_message.id)
