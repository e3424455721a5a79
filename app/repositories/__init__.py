from app.repositories.chat_repository import ChatRepository
from app.repositories.message_repository import MessageRepository
from app.repositories.user_chat_index import UserChatIndex

__all__ = [
    "ChatRepository",
    "MessageRepository",
    "UserChatIndex",
]
