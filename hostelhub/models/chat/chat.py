"""Student-manager chat threads."""

from typing import List, Optional

from sqlalchemy import Boolean, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostelhub.models.base.base_model import TimestampModel

__all__ = ["Conversation", "Message"]


class Conversation(TimestampModel):
    """Thread between a student user and a manager user about one hostel."""

    __tablename__ = "conversations"
    __table_args__ = (
        Index("ix_conversations_participants", "student_id", "manager_id", "hostel_id"),
    )

    student_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    manager_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    hostel_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("hostels.id", ondelete="SET NULL"),
        nullable=True,
    )

    messages: Mapped[List["Message"]] = relationship(
        back_populates="conversation",
        cascade="all, delete-orphan",
        order_by="Message.created_at",
    )

    def has_participant(self, user_id: str) -> bool:
        return user_id in (self.student_id, self.manager_id)


class Message(TimestampModel):
    __tablename__ = "messages"

    conversation_id: Mapped[str] = mapped_column(
        ForeignKey("conversations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sender_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    conversation: Mapped["Conversation"] = relationship(back_populates="messages")
