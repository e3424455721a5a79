"""Chats API: create, list, get, delete, participants and messages."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from redis import Redis

from app.config import get_settings
from app.core.realtime import publish_message
from app.exceptions import NotParticipantError
from app.routers.utils.dependencies import (
    CurrentUser,
    get_chat_service,
    get_current_user,
    get_message_service,
    get_redis,
)
from app.schemas.chat import (
    Chat,
    ChatListResponse,
    CreateChatResponse,
    DeleteChatResponse,
    DeleteMessageResponse,
    EditMessageResponse,
    MessageContent,
    MessagePage,
    ParticipantAdd,
    ParticipantResponse,
    SendMessageResponse,
)
from app.services.chat_service import ChatService
from app.services.message_service import MessageService
from app.utils.rate_limit import check_message_rate_limit

logger = logging.getLogger(__name__)

chats_router = APIRouter(prefix="/chats", tags=["Chat"])


@chats_router.post("", response_model=CreateChatResponse, status_code=201)
def create_chat(
    current_user: CurrentUser = Depends(get_current_user),
    svc: ChatService = Depends(get_chat_service),
) -> CreateChatResponse:
    """Create a chat with the caller as creator and sole participant."""
    chat = svc.create_new_chat(current_user.user_id)
    return CreateChatResponse(chat_id=chat.id, created_at=chat.created_at)


@chats_router.get("", response_model=ChatListResponse)
def list_chats(
    current_user: CurrentUser = Depends(get_current_user),
    svc: ChatService = Depends(get_chat_service),
) -> ChatListResponse:
    """List the caller's chats, most recently active first."""
    return ChatListResponse(chats=svc.get_user_chats(current_user.user_id))


@chats_router.get("/{chat_id}", response_model=Chat)
def get_chat(
    chat_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    svc: ChatService = Depends(get_chat_service),
) -> Chat:
    chat = svc.get_chat_with_validation(chat_id, current_user.user_id)
    if chat is None:
        raise HTTPException(status_code=404, detail="Chat not found or access denied")
    return chat


@chats_router.delete("/{chat_id}", response_model=DeleteChatResponse)
def delete_chat(
    chat_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    svc: ChatService = Depends(get_chat_service),
) -> DeleteChatResponse:
    """Delete a chat and all its messages (creator only)."""
    if not svc.delete_chat_with_validation(chat_id, current_user.user_id):
        raise HTTPException(status_code=403, detail="Not authorized to delete this chat")
    return DeleteChatResponse(success=True)


@chats_router.post("/{chat_id}/participants", response_model=ParticipantResponse)
def add_participant(
    chat_id: str,
    data: ParticipantAdd,
    current_user: CurrentUser = Depends(get_current_user),
    svc: ChatService = Depends(get_chat_service),
) -> ParticipantResponse:
    if not svc.add_participant_with_validation(
        chat_id, current_user.user_id, data.user_id
    ):
        raise HTTPException(
            status_code=403, detail="Not authorized to add participants to this chat"
        )
    return ParticipantResponse(success=True)


@chats_router.delete("/{chat_id}/participants/me", response_model=ParticipantResponse)
def leave_chat(
    chat_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    svc: ChatService = Depends(get_chat_service),
) -> ParticipantResponse:
    if not svc.leave_chat(chat_id, current_user.user_id):
        raise HTTPException(status_code=403, detail="Not able to leave this chat")
    return ParticipantResponse(success=True)


# --- Messages ---


@chats_router.post("/{chat_id}/messages", response_model=SendMessageResponse)
def send_message(
    chat_id: str,
    data: MessageContent,
    current_user: CurrentUser = Depends(get_current_user),
    svc: MessageService = Depends(get_message_service),
    redis_client: Redis = Depends(get_redis),
) -> SendMessageResponse:
    """Send a message and broadcast it to realtime subscribers."""
    if not current_user.username:
        raise HTTPException(status_code=401, detail="User authentication required")
    settings = get_settings()
    if not check_message_rate_limit(
        current_user.user_id, redis_client, settings.rate_limit_messages_per_minute
    ):
        raise HTTPException(status_code=429, detail="Too many messages")
    try:
        message = svc.send_message(
            chat_id, current_user.user_id, current_user.username, data.content
        )
    except NotParticipantError as e:
        raise HTTPException(status_code=403, detail=str(e))
    publish_message(redis_client, chat_id, message)
    return SendMessageResponse(message=message)


@chats_router.get("/{chat_id}/messages", response_model=MessagePage)
def list_messages(
    chat_id: str,
    limit: Optional[int] = Query(None, ge=1),
    before: Optional[int] = Query(None, ge=0),
    before_id: Optional[str] = Query(None),
    current_user: CurrentUser = Depends(get_current_user),
    svc: MessageService = Depends(get_message_service),
) -> MessagePage:
    """Newest-first page; the next cursor is the oldest message's timestamp and id."""
    settings = get_settings()
    if limit is None:
        limit = settings.messages_default_limit
    limit = min(limit, settings.messages_max_limit)
    try:
        return svc.get_messages(
            chat_id,
            current_user.user_id,
            limit=limit,
            before=before,
            before_id=before_id,
        )
    except NotParticipantError as e:
        raise HTTPException(status_code=403, detail=str(e))


@chats_router.put("/{chat_id}/messages/{message_id}", response_model=EditMessageResponse)
def edit_message(
    chat_id: str,
    message_id: str,
    data: MessageContent,
    current_user: CurrentUser = Depends(get_current_user),
    svc: MessageService = Depends(get_message_service),
) -> EditMessageResponse:
    message = svc.edit_message(chat_id, message_id, current_user.user_id, data.content)
    if message is None:
        raise HTTPException(status_code=403, detail="Not authorized to edit this message")
    return EditMessageResponse(message=message)


@chats_router.delete(
    "/{chat_id}/messages/{message_id}", response_model=DeleteMessageResponse
)
def delete_message(
    chat_id: str,
    message_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    svc: MessageService = Depends(get_message_service),
) -> DeleteMessageResponse:
    if not svc.delete_message(chat_id, message_id, current_user.user_id):
        raise HTTPException(
            status_code=403, detail="Not authorized to delete this message"
        )
    return DeleteMessageResponse(success=True)
