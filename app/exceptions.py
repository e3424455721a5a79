"""Domain exceptions raised by the chat services."""


class NotParticipantError(PermissionError):
    """Raised when a user acts on a chat they do not participate in."""

    def __init__(self, chat_id: str, user_id: str) -> None:
        self.chat_id = chat_id
        self.user_id = user_id
        super().__init__("User is not a participant in this chat")
