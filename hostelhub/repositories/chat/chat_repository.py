"""Conversation and message repositories."""

from typing import List, Optional

from sqlalchemy import or_, update
from sqlalchemy.orm import Session

from hostelhub.models.chat.chat import Conversation, Message
from hostelhub.repositories.base.base_repository import BaseRepository


class ConversationRepository(BaseRepository[Conversation]):

    def __init__(self, db: Session):
        super().__init__(Conversation, db)

    def find_between(self, student_id: str, manager_id: str, hostel_id: str) -> Optional[Conversation]:
        return self.find_one_by_criteria(
            {"student_id": student_id, "manager_id": manager_id, "hostel_id": hostel_id}
        )

    def find_for_user(self, user_id: str) -> List[Conversation]:
        return (
            self.db.query(Conversation)
            .filter(or_(Conversation.student_id == user_id, Conversation.manager_id == user_id))
            .order_by(Conversation.updated_at.desc())
            .all()
        )

    def find_ids_for_user(self, user_id: str) -> List[str]:
        rows = (
            self.db.query(Conversation.id)
            .filter(or_(Conversation.student_id == user_id, Conversation.manager_id == user_id))
            .all()
        )
        return [row.id for row in rows]

    def delete_for_user(self, user_id: str) -> int:
        return self.delete_where(
            or_(Conversation.student_id == user_id, Conversation.manager_id == user_id)
        )


class MessageRepository(BaseRepository[Message]):

    def __init__(self, db: Session):
        super().__init__(Message, db)

    def find_by_conversation(self, conversation_id: str) -> List[Message]:
        return self.find_by_criteria({"conversation_id": conversation_id}, order_by=["created_at"])

    def mark_read(self, conversation_id: str, reader_id: str) -> int:
        """Mark the other participant's messages as read."""
        result = self.db.execute(
            update(Message)
            .where(
                Message.conversation_id == conversation_id,
                Message.sender_id != reader_id,
                Message.is_read.is_(False),
            )
            .values(is_read=True)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def count_unread(self, conversation_id: str, reader_id: str) -> int:
        return (
            self.db.query(Message)
            .filter(
                Message.conversation_id == conversation_id,
                Message.sender_id != reader_id,
                Message.is_read.is_(False),
            )
            .count()
        )

    def delete_involving(self, user_id: str, conversation_ids: List[str]) -> int:
        """Messages sent by the user or inside their conversations."""
        conditions = [Message.sender_id == user_id]
        if conversation_ids:
            conditions.append(Message.conversation_id.in_(conversation_ids))
        return self.delete_where(or_(*conditions))
