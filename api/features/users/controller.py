"""Controller for the Users feature."""
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from api.features.users.dtos import CreateUserRequest, UpdateUserRequest, UserDTO
from api.features.users.models import UserCreateModel, UserModel, UserUpdateModel
from api.features.users.service import UserService
from api.shared.utils import require_fields


def _to_dto(user: UserModel) -> UserDTO:
    return UserDTO(
        id=user.id,
        email=user.email,
        name=user.name,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


class UserController:
    """Controller handling user directory requests."""

    def __init__(self, user_service: UserService):
        self.user_service = user_service

    async def list_users(self, *, db_session: AsyncSession) -> List[UserDTO]:
        users = await self.user_service.list_users(db_session=db_session)
        return [_to_dto(u) for u in users]

    async def get_user(self, user_id: int, *, db_session: AsyncSession) -> UserDTO:
        user = await self.user_service.get_user(user_id, db_session=db_session)
        return _to_dto(user)

    async def create_user(
        self, request: CreateUserRequest, *, db_session: AsyncSession
    ) -> UserDTO:
        payload = request.model_dump()
        require_fields(payload, ("email", "password", "name"))
        user = await self.user_service.create_user(
            UserCreateModel(**payload), db_session=db_session
        )
        return _to_dto(user)

    async def update_user(
        self, user_id: int, request: UpdateUserRequest, *, db_session: AsyncSession
    ) -> UserDTO:
        user = await self.user_service.update_user(
            user_id,
            UserUpdateModel(name=request.name, password=request.password),
            db_session=db_session,
        )
        return _to_dto(user)

    async def delete_user(self, user_id: int, *, db_session: AsyncSession) -> None:
        await self.user_service.delete_user(user_id, db_session=db_session)
