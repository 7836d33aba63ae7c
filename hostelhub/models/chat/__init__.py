from hostelhub.models.chat.chat import Conversation, Message

__all__ = ["Conversation", "Message"]
