from app.services.avatar_service import AvatarService
from app.services.chat_service import ChatService
from app.services.consent_service import ConsentService
from app.services.message_service import MessageService
from app.services.retention_service import RetentionPolicy, RetentionSweeper

__all__ = [
    "AvatarService",
    "ChatService",
    "ConsentService",
    "MessageService",
    "RetentionPolicy",
    "RetentionSweeper",
]
