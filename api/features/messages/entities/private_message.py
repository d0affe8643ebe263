"""Private message entity: one row per message between two users."""
from enum import Enum

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from api.features.users.entities.user import User
from api.shared.entities.base import BaseEntity


class MessageStatus(str, Enum):
    """Delivery status. ``read`` is set together with the ``read`` flag."""

    SENT = "sent"
    READ = "read"


class PrivateMessage(BaseEntity):
    """Private message. Immutable after creation except for read state."""

    __tablename__ = "private_messages"

    sender_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    receiver_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=MessageStatus.SENT.value, nullable=False
    )

    sender: Mapped[User] = relationship(foreign_keys=[sender_id], lazy="raise")
    receiver: Mapped[User] = relationship(foreign_keys=[receiver_id], lazy="raise")

    __table_args__ = (
        Index("idx_private_message_sender_receiver", "sender_id", "receiver_id"),
        Index("idx_private_message_receiver_read", "receiver_id", "read"),
        Index("idx_private_message_created_at", "created_at"),
    )

    def is_read(self) -> bool:
        return self.read and self.status == MessageStatus.READ.value
