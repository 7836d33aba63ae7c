from hostelhub.services.chat.chat_service import ChatService

__all__ = ["ChatService"]
