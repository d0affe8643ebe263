"""Service layer for the Users feature."""
import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.users.exceptions import UserAlreadyExistsError, UserNotFoundError
from api.features.users.models import UserCreateModel, UserModel, UserUpdateModel
from api.features.users.repositories.user_repository import UserRepository
from api.shared.exceptions import StoreError

logger = logging.getLogger("marketplace.users.service")


class UserService:
    """Service for user directory operations."""

    async def list_users(self, *, db_session: AsyncSession) -> List[UserModel]:
        repository = UserRepository(db_session)
        try:
            entities = await repository.find_all()
        except SQLAlchemyError as e:
            logger.exception("Failed to list users")
            raise StoreError("Failed to list users") from e
        return [UserModel.from_entity(entity) for entity in entities]

    async def get_user(self, user_id: int, *, db_session: AsyncSession) -> UserModel:
        repository = UserRepository(db_session)
        try:
            entity = await repository.get_by_id(user_id)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to fetch user {user_id}")
            raise StoreError("Failed to fetch user", {"user_id": user_id}) from e
        if not entity:
            raise UserNotFoundError(user_id)
        return UserModel.from_entity(entity)

    async def create_user(
        self, create_model: UserCreateModel, *, db_session: AsyncSession
    ) -> UserModel:
        repository = UserRepository(db_session)
        try:
            if await repository.get_by_email(create_model.email):
                raise UserAlreadyExistsError(create_model.email)
            entity = await repository.create(create_model.to_entity())
            await db_session.commit()
        except SQLAlchemyError as e:
            await db_session.rollback()
            logger.exception("Failed to create user")
            raise StoreError("Failed to create user") from e

        logger.info(f"User created: {entity.id}")
        return UserModel.from_entity(entity)

    async def update_user(
        self, user_id: int, update_model: UserUpdateModel, *, db_session: AsyncSession
    ) -> UserModel:
        repository = UserRepository(db_session)
        try:
            entity = await repository.get_by_id(user_id)
            if not entity:
                raise UserNotFoundError(user_id)
            entity = await repository.update(entity, **update_model.changes())
            await db_session.commit()
        except SQLAlchemyError as e:
            await db_session.rollback()
            logger.exception(f"Failed to update user {user_id}")
            raise StoreError("Failed to update user", {"user_id": user_id}) from e
        return UserModel.from_entity(entity)

    async def delete_user(self, user_id: int, *, db_session: AsyncSession) -> None:
        repository = UserRepository(db_session)
        try:
            if not await repository.exists(user_id):
                raise UserNotFoundError(user_id)
            await repository.delete(user_id)
            await db_session.commit()
        except SQLAlchemyError as e:
            await db_session.rollback()
            logger.exception(f"Failed to delete user {user_id}")
            raise StoreError("Failed to delete user", {"user_id": user_id}) from e
        logger.info(f"User deleted: {user_id}")
