"""Router for the Messages feature."""
from typing import List

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from di.container import ApplicationContainer as DependencyContainer
from api.features.messages.controller import MessageController
from api.features.messages.dtos import (
    ConversationDTO,
    MarkConversationReadResponse,
    PrivateMessageDTO,
    SendMessageRequest,
)
from api.shared.db import get_db_session

router = APIRouter()


@router.get("/user/{user_id}", response_model=List[PrivateMessageDTO])
@inject
async def list_user_messages(
    user_id: int,
    controller: MessageController = Depends(
        Provide[DependencyContainer.controllers.message_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    """All messages sent or received by a user, newest first."""
    return await controller.list_user_messages(user_id, db_session=db_session)


@router.get("/conversations/{user_id}", response_model=List[ConversationDTO])
@inject
async def list_conversations(
    user_id: int,
    controller: MessageController = Depends(
        Provide[DependencyContainer.controllers.message_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    """Contacts of a user, each with the latest message exchanged."""
    return await controller.list_conversations(user_id, db_session=db_session)


@router.get("/conversation/{user_id}/{contact_id}", response_model=List[PrivateMessageDTO])
@inject
async def get_conversation(
    user_id: int,
    contact_id: int,
    controller: MessageController = Depends(
        Provide[DependencyContainer.controllers.message_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    """Thread between two users, oldest first."""
    return await controller.get_conversation(user_id, contact_id, db_session=db_session)


@router.post("", response_model=PrivateMessageDTO, status_code=status.HTTP_201_CREATED)
@inject
async def send_message(
    request: SendMessageRequest,
    controller: MessageController = Depends(
        Provide[DependencyContainer.controllers.message_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    return await controller.send_message(request, db_session=db_session)


@router.put("/read/{message_id}", response_model=PrivateMessageDTO)
@inject
async def mark_message_read(
    message_id: int,
    controller: MessageController = Depends(
        Provide[DependencyContainer.controllers.message_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    return await controller.mark_read(message_id, db_session=db_session)


@router.put(
    "/read-conversation/{user_id}/{contact_id}",
    response_model=MarkConversationReadResponse,
)
@inject
async def mark_conversation_read(
    user_id: int,
    contact_id: int,
    controller: MessageController = Depends(
        Provide[DependencyContainer.controllers.message_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    """Mark everything ``contact_id`` sent to ``user_id`` as read."""
    return await controller.mark_conversation_read(
        user_id, contact_id, db_session=db_session
    )
