"""Router for the Users feature."""
from typing import List

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from di.container import ApplicationContainer as DependencyContainer
from api.features.users.controller import UserController
from api.features.users.dtos import CreateUserRequest, UpdateUserRequest, UserDTO
from api.shared.db import get_db_session
from api.shared.dtos import MessageResponse

router = APIRouter()


@router.get("", response_model=List[UserDTO])
@inject
async def list_users(
    controller: UserController = Depends(
        Provide[DependencyContainer.controllers.user_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    return await controller.list_users(db_session=db_session)


@router.get("/{user_id}", response_model=UserDTO)
@inject
async def get_user(
    user_id: int,
    controller: UserController = Depends(
        Provide[DependencyContainer.controllers.user_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    return await controller.get_user(user_id, db_session=db_session)


@router.post("", response_model=UserDTO, status_code=status.HTTP_201_CREATED)
@inject
async def create_user(
    request: CreateUserRequest,
    controller: UserController = Depends(
        Provide[DependencyContainer.controllers.user_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    return await controller.create_user(request, db_session=db_session)


@router.put("/{user_id}", response_model=UserDTO)
@inject
async def update_user(
    user_id: int,
    request: UpdateUserRequest,
    controller: UserController = Depends(
        Provide[DependencyContainer.controllers.user_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    return await controller.update_user(user_id, request, db_session=db_session)


@router.delete("/{user_id}", response_model=MessageResponse)
@inject
async def delete_user(
    user_id: int,
    controller: UserController = Depends(
        Provide[DependencyContainer.controllers.user_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    await controller.delete_user(user_id, db_session=db_session)
    return MessageResponse(message=f"User {user_id} deleted")
