"""Message store: queries over the private message log."""
from typing import List, Optional, Set

from sqlalchemy import and_, or_, select, update
from sqlalchemy.orm import selectinload

from api.features.messages.entities.private_message import MessageStatus, PrivateMessage
from api.shared.base import BaseRepository


def _between(user_a: int, user_b: int):
    """Filter matching messages exchanged by two users in either direction."""
    return or_(
        and_(PrivateMessage.sender_id == user_a, PrivateMessage.receiver_id == user_b),
        and_(PrivateMessage.sender_id == user_b, PrivateMessage.receiver_id == user_a),
    )


class MessageRepository(BaseRepository[PrivateMessage]):
    """Repository for private messages.

    Newest-first listings order by ``created_at`` then ``id`` descending, so
    messages sharing a timestamp resolve to the one inserted last.
    """

    model = PrivateMessage

    _newest_first = (PrivateMessage.created_at.desc(), PrivateMessage.id.desc())
    _oldest_first = (PrivateMessage.created_at.asc(), PrivateMessage.id.asc())

    def _with_parties(self):
        return select(PrivateMessage).options(
            selectinload(PrivateMessage.sender),
            selectinload(PrivateMessage.receiver),
        ).execution_options(populate_existing=True)

    async def find_all(self) -> List[PrivateMessage]:
        stmt = select(PrivateMessage).order_by(*self._newest_first)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_with_parties(self, message_id: int) -> Optional[PrivateMessage]:
        stmt = self._with_parties().where(PrivateMessage.id == message_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_by_participant(self, user_id: int) -> List[PrivateMessage]:
        """Every message the user sent or received, newest first."""
        stmt = (
            self._with_parties()
            .where(
                or_(
                    PrivateMessage.sender_id == user_id,
                    PrivateMessage.receiver_id == user_id,
                )
            )
            .order_by(*self._newest_first)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def distinct_receivers_of(self, sender_id: int) -> Set[int]:
        stmt = (
            select(PrivateMessage.receiver_id)
            .where(PrivateMessage.sender_id == sender_id)
            .distinct()
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def distinct_senders_to(self, receiver_id: int) -> Set[int]:
        stmt = (
            select(PrivateMessage.sender_id)
            .where(PrivateMessage.receiver_id == receiver_id)
            .distinct()
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def find_latest_between(self, user_a: int, user_b: int) -> Optional[PrivateMessage]:
        stmt = (
            select(PrivateMessage)
            .where(_between(user_a, user_b))
            .order_by(*self._newest_first)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_between(self, user_a: int, user_b: int) -> List[PrivateMessage]:
        """The thread between two users, oldest first."""
        stmt = (
            self._with_parties()
            .where(_between(user_a, user_b))
            .order_by(*self._oldest_first)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def mark_read(self, message: PrivateMessage) -> PrivateMessage:
        return await self.update(message, read=True, status=MessageStatus.READ.value)

    async def mark_read_from(self, sender_id: int, receiver_id: int) -> int:
        """Mark unread messages sent by ``sender_id`` to ``receiver_id`` as read.

        Only that direction is touched; replies stay as they are.
        """
        stmt = (
            update(PrivateMessage)
            .where(
                PrivateMessage.sender_id == sender_id,
                PrivateMessage.receiver_id == receiver_id,
                PrivateMessage.read.is_(False),
            )
            .values(read=True, status=MessageStatus.READ.value)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0
