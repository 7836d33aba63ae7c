from datetime import datetime

import pytest

from hostelhub.core.exceptions import ErrorCode
from hostelhub.schemas.chat.chat import MessageCreate
from hostelhub.services.chat import ChatService
from tests.conftest import make_student


@pytest.fixture
def service(db, clock):
    return ChatService(db, clock)


def test_start_conversation_is_idempotent(service, student, manager, hostel):
    first = service.start_conversation(student.id, hostel.id)
    second = service.start_conversation(student.id, hostel.id)

    assert first.data.id == second.data.id
    assert first.data.manager_id == manager.id
    assert first.data.student_id == student.id


def test_unread_counts_and_mark_read(service, clock, student, manager, hostel):
    conversation = service.start_conversation(student.id, hostel.id).data
    service.send_message(student.id, conversation.id, MessageCreate(content="Is a room free in April?"))
    clock.set(datetime(2025, 3, 5, 10, 5))
    service.send_message(student.id, conversation.id, MessageCreate(content="Shared is fine"))

    inbox = service.get_my_conversations(manager.id).data
    assert inbox[0].unread_count == 2

    messages = service.get_messages(manager.id, conversation.id).data
    assert [m.content for m in messages] == ["Is a room free in April?", "Shared is fine"]
    assert service.get_my_conversations(manager.id).data[0].unread_count == 0


def test_outsiders_cannot_read(db, service, student, hostel):
    conversation = service.start_conversation(student.id, hostel.id).data
    outsider = make_student(db, "outsider@uni.edu.pk")

    result = service.get_messages(outsider.id, conversation.id)

    assert result.error_code == ErrorCode.INSUFFICIENT_PERMISSIONS
