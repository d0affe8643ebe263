"""Controller for the Messages feature."""
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from api.features.messages.dtos import (
    ConversationDTO,
    MarkConversationReadResponse,
    PrivateMessageDTO,
    SendMessageRequest,
)
from api.features.messages.service import MessageService
from api.shared.exceptions import ValidationError
from api.shared.utils import coerce_identifier, require_fields


class MessageController:
    """Controller handling private message requests."""

    def __init__(self, message_service: MessageService):
        self.message_service = message_service

    async def send_message(
        self, request: SendMessageRequest, *, db_session: AsyncSession
    ) -> PrivateMessageDTO:
        payload = request.model_dump(by_alias=True)
        require_fields(payload, ("content", "senderId", "receiverId"))
        if not isinstance(request.content, str):
            raise ValidationError("'content' must be a string", {"field": "content"})
        if not request.content.strip():
            raise ValidationError("'content' must not be blank", {"field": "content"})

        message = await self.message_service.send_message(
            content=request.content,
            sender_id=coerce_identifier(request.sender_id, "senderId"),
            receiver_id=coerce_identifier(request.receiver_id, "receiverId"),
            db_session=db_session,
        )
        return PrivateMessageDTO.from_model(message)

    async def list_user_messages(
        self, user_id: int, *, db_session: AsyncSession
    ) -> List[PrivateMessageDTO]:
        messages = await self.message_service.list_user_messages(
            user_id, db_session=db_session
        )
        return [PrivateMessageDTO.from_model(m) for m in messages]

    async def list_conversations(
        self, user_id: int, *, db_session: AsyncSession
    ) -> List[ConversationDTO]:
        conversations = await self.message_service.list_conversations(
            user_id, db_session=db_session
        )
        return [ConversationDTO.from_model(c) for c in conversations]

    async def get_conversation(
        self, user_id: int, contact_id: int, *, db_session: AsyncSession
    ) -> List[PrivateMessageDTO]:
        messages = await self.message_service.list_messages_between(
            user_id, contact_id, db_session=db_session
        )
        return [PrivateMessageDTO.from_model(m) for m in messages]

    async def mark_read(
        self, message_id: int, *, db_session: AsyncSession
    ) -> PrivateMessageDTO:
        message = await self.message_service.mark_read(message_id, db_session=db_session)
        return PrivateMessageDTO.from_model(message)

    async def mark_conversation_read(
        self, user_id: int, contact_id: int, *, db_session: AsyncSession
    ) -> MarkConversationReadResponse:
        # What the user received from the contact; the user's own messages stay unread.
        updated = await self.message_service.mark_conversation_read(
            sender_id=contact_id, receiver_id=user_id, db_session=db_session
        )
        return MarkConversationReadResponse(
            message="All messages have been marked as read", updated=updated
        )
