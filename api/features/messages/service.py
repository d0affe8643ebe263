"""Service layer for the Messages feature."""
from typing import List

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.messages.aggregator import (
    ContactFailurePolicy,
    ConversationAggregator,
    MessagingStores,
)
from api.features.messages.entities.private_message import PrivateMessage
from api.features.messages.exceptions import MessageNotFoundError, SelfMessageError
from api.features.messages.models import ConversationModel, PrivateMessageModel
from api.features.users.exceptions import UserNotFoundError
from api.shared.exceptions import StoreError

logger = structlog.get_logger("marketplace.messages.service")


class MessageService:
    """Service for private messaging operations.

    Stores are constructed per call from the request's session; the service
    itself holds configuration only.
    """

    def __init__(self, contact_failure_policy: ContactFailurePolicy = "fail"):
        self.contact_failure_policy = contact_failure_policy

    async def send_message(
        self,
        *,
        content: str,
        sender_id: int,
        receiver_id: int,
        db_session: AsyncSession,
    ) -> PrivateMessageModel:
        if sender_id == receiver_id:
            raise SelfMessageError(sender_id)

        stores = MessagingStores.from_session(db_session)
        try:
            if not await stores.users.exists(sender_id):
                raise UserNotFoundError(sender_id, role="Sender")
            if not await stores.users.exists(receiver_id):
                raise UserNotFoundError(receiver_id, role="Receiver")

            entity = await stores.messages.create(
                PrivateMessage(
                    content=content, sender_id=sender_id, receiver_id=receiver_id
                )
            )
            await db_session.commit()
            entity = await stores.messages.get_with_parties(entity.id)
        except SQLAlchemyError as e:
            await db_session.rollback()
            logger.exception("messages.send_failed", sender_id=sender_id, receiver_id=receiver_id)
            raise StoreError("Failed to send message") from e

        logger.info(
            "messages.sent",
            message_id=entity.id,
            sender_id=sender_id,
            receiver_id=receiver_id,
        )
        return PrivateMessageModel.from_entity(entity, with_parties=True)

    async def list_user_messages(
        self, user_id: int, *, db_session: AsyncSession
    ) -> List[PrivateMessageModel]:
        """Every message the user sent or received, newest first."""
        stores = MessagingStores.from_session(db_session)
        try:
            entities = await stores.messages.find_by_participant(user_id)
        except SQLAlchemyError as e:
            logger.exception("messages.list_failed", user_id=user_id)
            raise StoreError("Failed to list messages", {"user_id": user_id}) from e
        return [PrivateMessageModel.from_entity(e, with_parties=True) for e in entities]

    async def list_conversations(
        self, user_id: int, *, db_session: AsyncSession
    ) -> List[ConversationModel]:
        aggregator = ConversationAggregator(
            MessagingStores.from_session(db_session),
            policy=self.contact_failure_policy,
        )
        try:
            return await aggregator.list_conversations(user_id)
        except SQLAlchemyError as e:
            logger.exception("conversations.list_failed", user_id=user_id)
            raise StoreError("Failed to list conversations", {"user_id": user_id}) from e

    async def list_messages_between(
        self, user_a: int, user_b: int, *, db_session: AsyncSession
    ) -> List[PrivateMessageModel]:
        """The thread between two users, oldest first. Argument order is irrelevant."""
        stores = MessagingStores.from_session(db_session)
        try:
            entities = await stores.messages.find_between(user_a, user_b)
        except SQLAlchemyError as e:
            logger.exception("messages.thread_failed", user_a=user_a, user_b=user_b)
            raise StoreError("Failed to fetch conversation") from e
        return [PrivateMessageModel.from_entity(e, with_parties=True) for e in entities]

    async def mark_read(
        self, message_id: int, *, db_session: AsyncSession
    ) -> PrivateMessageModel:
        """Mark one message read. Marking an already read message is a no-op."""
        stores = MessagingStores.from_session(db_session)
        try:
            entity = await stores.messages.get_by_id(message_id)
            if not entity:
                raise MessageNotFoundError(message_id)
            if not entity.is_read():
                entity = await stores.messages.mark_read(entity)
                await db_session.commit()
                logger.info("messages.marked_read", message_id=message_id)
        except SQLAlchemyError as e:
            await db_session.rollback()
            logger.exception("messages.mark_read_failed", message_id=message_id)
            raise StoreError("Failed to mark message as read") from e
        return PrivateMessageModel.from_entity(entity)

    async def mark_conversation_read(
        self, sender_id: int, receiver_id: int, *, db_session: AsyncSession
    ) -> int:
        """Mark every unread message from ``sender_id`` to ``receiver_id`` as read."""
        stores = MessagingStores.from_session(db_session)
        try:
            updated = await stores.messages.mark_read_from(sender_id, receiver_id)
            await db_session.commit()
        except SQLAlchemyError as e:
            await db_session.rollback()
            logger.exception(
                "messages.mark_conversation_read_failed",
                sender_id=sender_id,
                receiver_id=receiver_id,
            )
            raise StoreError("Failed to mark messages as read") from e
        logger.info(
            "messages.conversation_marked_read",
            sender_id=sender_id,
            receiver_id=receiver_id,
            updated=updated,
        )
        return updated
