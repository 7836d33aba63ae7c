from hostelhub.schemas.chat.chat import (
    ConversationResponse,
    ConversationStart,
    MessageCreate,
    MessageResponse,
)

__all__ = ["ConversationStart", "MessageCreate", "ConversationResponse", "MessageResponse"]
