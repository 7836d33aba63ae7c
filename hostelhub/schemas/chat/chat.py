"""
Chat schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from hostelhub.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = ["ConversationStart", "MessageCreate", "ConversationResponse", "MessageResponse"]


class ConversationStart(BaseCreateSchema):
    hostel_id: str = Field(..., min_length=1)


class MessageCreate(BaseCreateSchema):
    content: str = Field(..., min_length=1, max_length=2000)


class ConversationResponse(BaseResponseSchema):
    student_id: str
    manager_id: str
    hostel_id: Optional[str] = None
    unread_count: int = 0


class MessageResponse(BaseSchema):
    id: str
    conversation_id: str
    sender_id: str
    content: str
    is_read: bool
    created_at: datetime
