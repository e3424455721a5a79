"""Pydantic schemas for Chat, Message and the chat API payloads."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

# -----------------------------------------------------------------------------
# Message schemas
# -----------------------------------------------------------------------------


class Message(BaseModel):
    """
    A single chat message.

    The serialized form is the sorted-set member, so field order matters:
    ``id`` comes first, which makes Redis order same-timestamp messages by id.
    """

    id: str
    user_id: str
    username: str
    content: str
    timestamp: int
    edited: bool = False
    edited_at: Optional[int] = None

    def to_member(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_member(cls, member: str) -> "Message":
        return cls.model_validate_json(member)


class MessagePage(BaseModel):
    """One page of messages, newest first."""

    messages: list[Message]
    has_more: bool


class MessageContent(BaseModel):
    """Request body for sending or editing a message."""

    content: str = Field(..., max_length=10000)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message content cannot be empty")
        return value


class SendMessageResponse(BaseModel):
    message: Message


class EditMessageResponse(BaseModel):
    message: Message


class DeleteMessageResponse(BaseModel):
    success: bool


# -----------------------------------------------------------------------------
# Chat schemas
# -----------------------------------------------------------------------------


class Chat(BaseModel):
    """Chat metadata as stored in the chat hash."""

    id: str
    created_at: int
    created_by: str
    participants: list[str]
    last_message_at: int
    title: Optional[str] = None


class LastMessagePreview(BaseModel):
    text: str
    username: str
    timestamp: int
    avatar_url: Optional[str] = None


class ChatListItem(Chat):
    """Chat row for the chat list; carries a preview of the latest message."""

    last_message: Optional[LastMessagePreview] = None
    # Unread tracking is not implemented.
    unread_count: int = 0


class CreateChatResponse(BaseModel):
    chat_id: str
    created_at: int


class ChatListResponse(BaseModel):
    chats: list[ChatListItem]


class DeleteChatResponse(BaseModel):
    success: bool


class ParticipantAdd(BaseModel):
    user_id: str = Field(..., min_length=1)


class ParticipantResponse(BaseModel):
    success: bool
