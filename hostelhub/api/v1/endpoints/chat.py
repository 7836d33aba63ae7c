"""
Chat endpoints between students and hostel managers.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hostelhub.api.deps import get_clock, get_db, require_active_user, require_roles
from hostelhub.api.responses import respond
from hostelhub.models.base.enums import UserRole
from hostelhub.models.user.user import User
from hostelhub.schemas.chat.chat import (
    ConversationResponse,
    ConversationStart,
    MessageCreate,
    MessageResponse,
)
from hostelhub.services.chat import ChatService
from hostelhub.utils.datetime_utils import Clock

router = APIRouter(prefix="/chat", tags=["Chat"])


def get_chat_service(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)) -> ChatService:
    return ChatService(db, clock)


@router.post("/conversations")
def start_conversation(
    payload: ConversationStart,
    current_user: User = Depends(require_roles(UserRole.STUDENT)),
    service: ChatService = Depends(get_chat_service),
):
    return respond(service.start_conversation(current_user.id, payload.hostel_id), ConversationResponse)


@router.get("/conversations")
def get_my_conversations(
    current_user: User = Depends(require_active_user),
    service: ChatService = Depends(get_chat_service),
):
    return respond(service.get_my_conversations(current_user.id))


@router.get("/conversations/{conversation_id}/messages")
def get_messages(
    conversation_id: str,
    current_user: User = Depends(require_active_user),
    service: ChatService = Depends(get_chat_service),
):
    return respond(service.get_messages(current_user.id, conversation_id), MessageResponse)


@router.post("/conversations/{conversation_id}/messages", status_code=status.HTTP_201_CREATED)
def send_message(
    conversation_id: str,
    payload: MessageCreate,
    current_user: User = Depends(require_active_user),
    service: ChatService = Depends(get_chat_service),
):
    return respond(
        service.send_message(current_user.id, conversation_id, payload),
        MessageResponse,
        status_code=status.HTTP_201_CREATED,
    )
