from hostelhub.repositories.chat.chat_repository import ConversationRepository, MessageRepository

__all__ = ["ConversationRepository", "MessageRepository"]
