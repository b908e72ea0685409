from __future__ import annotations

from app.models import Conversation
from app.services.collection_repository import RecordStore


def _with_linked_student(records: RecordStore, payload: dict) -> dict:
    """Copy name and class of the linked student into the denormalized fields."""
    data = dict(payload)
    student_id = data.get('student_id') or None
    data['student_id'] = student_id
    if not student_id:
        return data
    student = records.students.get_by_id(student_id)
    if student is None:
        return data
    data['student_name'] = student.display_name
    class_level = records.classes.get_by_id(student.class_id)
    data['class_name'] = class_level.name if class_level else data.get('class_name', '')
    return data


def add_conversation(records: RecordStore, payload: dict) -> Conversation:
    return records.conversations.add(_with_linked_student(records, payload))


def update_conversation(records: RecordStore, conversation_id: str, payload: dict) -> Conversation:
    data = _with_linked_student(records, payload)
    data['id'] = conversation_id
    data['created_at'] = data.get('created_at') or records.conversations.time_provider.now_millis()
    conversation = Conversation.model_validate(data)
    records.conversations.update(conversation)
    return conversation


def delete_conversation(records: RecordStore, conversation_id: str) -> None:
    records.conversations.delete(conversation_id)


def get_conversation(records: RecordStore, conversation_id: str) -> Conversation | None:
    return records.conversations.get_by_id(conversation_id)
