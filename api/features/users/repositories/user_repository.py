"""User repository using base repository pattern."""
from typing import List, Optional

from sqlalchemy import select

from api.features.users.entities.user import User
from api.shared.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for user entities."""

    model = User

    async def find_all(self) -> List[User]:
        """Every user, oldest account first."""
        result = await self.session.execute(select(User).order_by(User.id.asc()))
        return list(result.scalars().all())

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email for uniqueness checks."""
        entities = await self.get_by_field("email", email, limit=1)
        return entities[0] if entities else None
