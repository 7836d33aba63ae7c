"""
Chat service: one conversation per student, manager and hostel.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from hostelhub.core.exceptions import AuthorizationError, HostelNotFoundError, ResourceNotFoundError
from hostelhub.models.chat.chat import Conversation, Message
from hostelhub.repositories.chat.chat_repository import ConversationRepository, MessageRepository
from hostelhub.repositories.hostel.hostel_repository import HostelRepository
from hostelhub.schemas.chat.chat import ConversationResponse, MessageCreate
from hostelhub.services.base import BaseService, ServiceResult
from hostelhub.utils.datetime_utils import Clock


class ChatService(BaseService):

    def __init__(self, db_session: Session, clock: Optional[Clock] = None):
        super().__init__(db_session, clock)
        self.conversations = ConversationRepository(db_session)
        self.messages = MessageRepository(db_session)
        self.hostels = HostelRepository(db_session)

    def _participant_conversation(self, user_id: str, conversation_id: str) -> Conversation:
        conversation = self.conversations.find_by_id(conversation_id)
        if conversation is None:
            raise ResourceNotFoundError("Conversation", conversation_id)
        if not conversation.has_participant(user_id):
            raise AuthorizationError("Not a participant of this conversation")
        return conversation

    def start_conversation(self, student_user_id: str, hostel_id: str) -> ServiceResult[Conversation]:
        """Return the student's conversation with the hostel's manager, creating it if needed."""
        try:
            hostel = self.hostels.find_with_details(hostel_id)
            if hostel is None:
                raise HostelNotFoundError(hostel_id)
            manager_user_id = hostel.manager.user_id

            conversation = self.conversations.find_between(student_user_id, manager_user_id, hostel.id)
            if conversation is not None:
                return ServiceResult.success(conversation)

            now = self.now()
            with self.transaction():
                conversation = self.conversations.create(
                    Conversation(
                        student_id=student_user_id,
                        manager_id=manager_user_id,
                        hostel_id=hostel.id,
                        created_at=now,
                        updated_at=now,
                    )
                )

            self._logger.info(f"Conversation {conversation.id} started", extra={"hostel_id": hostel.id})
            return ServiceResult.success(conversation, message="Conversation started")
        except Exception as e:
            return self._handle_exception(e, "start conversation", hostel_id)

    def get_my_conversations(self, user_id: str) -> ServiceResult[List[ConversationResponse]]:
        try:
            conversations = self.conversations.find_for_user(user_id)
            result = []
            for conversation in conversations:
                response = ConversationResponse.model_validate(conversation)
                response.unread_count = self.messages.count_unread(conversation.id, user_id)
                result.append(response)
            return ServiceResult.success(result)
        except Exception as e:
            return self._handle_exception(e, "get conversations", user_id)

    def get_messages(self, user_id: str, conversation_id: str) -> ServiceResult[List[Message]]:
        """Messages of a conversation, oldest first. Marks the other side's messages read."""
        try:
            conversation = self._participant_conversation(user_id, conversation_id)
            with self.transaction():
                self.messages.mark_read(conversation.id, user_id)
            return ServiceResult.success(self.messages.find_by_conversation(conversation.id))
        except Exception as e:
            return self._handle_exception(e, "get messages", conversation_id)

    def send_message(self, user_id: str, conversation_id: str, data: MessageCreate) -> ServiceResult[Message]:
        try:
            conversation = self._participant_conversation(user_id, conversation_id)
            now = self.now()
            with self.transaction():
                message = self.messages.create(
                    Message(
                        conversation_id=conversation.id,
                        sender_id=user_id,
                        content=data.content,
                        is_read=False,
                        created_at=now,
                        updated_at=now,
                    )
                )
                self.conversations.update(conversation, {"updated_at": now})

            return ServiceResult.success(message, message="Message sent")
        except Exception as e:
            return self._handle_exception(e, "send message", conversation_id)
