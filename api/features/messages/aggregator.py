"""Conversation aggregation over the private message log.

A conversation is never stored: for a user it is derived on every request by
collecting the distinct counterparties of the messages they sent and received,
resolving each counterparty against the user directory, and attaching the
latest message of the pairwise thread.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.messages.exceptions import ContactResolutionError
from api.features.messages.models import ConversationModel, PrivateMessageModel
from api.features.messages.repositories.message_repository import MessageRepository
from api.features.users.models import ContactModel
from api.features.users.repositories.user_repository import UserRepository

logger = structlog.get_logger("marketplace.messages.aggregator")

ContactFailurePolicy = Literal["fail", "isolate"]


@dataclass(frozen=True)
class MessagingStores:
    """Stores bound to one request's session."""

    messages: MessageRepository
    users: UserRepository

    @classmethod
    def from_session(cls, session: AsyncSession) -> "MessagingStores":
        return cls(messages=MessageRepository(session), users=UserRepository(session))


class ConversationAggregator:
    """Builds the conversation list of a user from the message log."""

    def __init__(self, stores: MessagingStores, *, policy: ContactFailurePolicy = "fail"):
        self.stores = stores
        self.policy = policy

    async def collect_contact_ids(self, user_id: int) -> set[int]:
        """Distinct users ``user_id`` has sent to or received from."""
        sent_to = await self.stores.messages.distinct_receivers_of(user_id)
        received_from = await self.stores.messages.distinct_senders_to(user_id)
        return sent_to | received_from

    async def list_conversations(self, user_id: int) -> List[ConversationModel]:
        contact_ids = await self.collect_contact_ids(user_id)
        if not contact_ids:
            return []

        users = await self.stores.users.get_many(sorted(contact_ids))
        contacts = {u.id: ContactModel.from_entity(u) for u in users}

        conversations: List[ConversationModel] = []
        for contact_id in sorted(contact_ids):
            contact = contacts.get(contact_id)
            error_payload = None
            if contact is None:
                error = ContactResolutionError(user_id, contact_id)
                if self.policy != "isolate":
                    logger.error(
                        "conversations.contact_unresolved",
                        user_id=user_id,
                        contact_id=contact_id,
                    )
                    raise error
                logger.warning(
                    "conversations.contact_isolated",
                    user_id=user_id,
                    contact_id=contact_id,
                )
                error_payload = {
                    "error": error.message,
                    "error_code": error.error_code,
                    "details": error.details,
                }

            latest = await self.stores.messages.find_latest_between(user_id, contact_id)
            conversations.append(
                ConversationModel(
                    contact_id=contact_id,
                    contact=contact,
                    last_message=PrivateMessageModel.from_entity(latest) if latest else None,
                    error=error_payload,
                )
            )

        conversations.sort(key=ConversationModel.recency_key, reverse=True)
        logger.info("conversations.listed", user_id=user_id, count=len(conversations))
        return conversations
