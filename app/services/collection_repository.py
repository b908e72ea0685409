from __future__ import annotations

import logging
import uuid
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from app.core.time_provider import TimeProvider, default_time_provider
from app.models import ClassLevel, Conversation, Incident, MeetingMinute, Record, Student, YearLevel
from app.services.webdav_store import RemoteStoreError, WebDAVStore


logger = logging.getLogger(__name__)

RecordT = TypeVar('RecordT', bound=Record)

YEARS_FILE = 'years.json'
CLASSES_FILE = 'classes.json'
STUDENTS_FILE = 'students.json'
INCIDENTS_FILE = 'incidents.json'
CONVERSATIONS_FILE = 'conversations.json'
MEETING_MINUTES_FILE = 'meeting_minutes.json'


def new_id() -> str:
    return str(uuid.uuid4())


class CollectionRepository(Generic[RecordT]):
    """CRUD over one collection file.

    Every mutation fetches the whole array, changes it in memory and writes the
    whole array back.
    """

    def __init__(
        self,
        store: WebDAVStore,
        filename: str,
        model: type[RecordT],
        time_provider: TimeProvider = default_time_provider,
    ) -> None:
        self.store = store
        self.filename = filename
        self.model = model
        self.time_provider = time_provider

    def fetch_all(self) -> list[RecordT]:
        raw_items = self.store.read_collection(self.filename)
        try:
            return [self.model.model_validate(raw) for raw in raw_items]
        except ValidationError as exc:
            logger.error('collection_invalid', extra={'collection': self.filename, 'errors': exc.error_count()})
            raise RemoteStoreError(200, str(exc)[:300], f'invalid record in {self.filename}') from exc

    def save_all(self, items: list[RecordT]) -> None:
        self.store.write_collection(self.filename, [item.to_wire() for item in items])

    def add(self, payload: dict[str, Any]) -> RecordT:
        data = {key: value for key, value in payload.items() if key not in ('id', 'createdAt', 'created_at')}
        data['id'] = new_id()
        if 'created_at' in self.model.model_fields:
            data['created_at'] = self.time_provider.now_millis()
        record = self.model.model_validate(data)
        items = self.fetch_all()
        items.append(record)
        self.save_all(items)
        return record

    def update(self, record: RecordT) -> None:
        items = self.fetch_all()
        for index, existing in enumerate(items):
            if existing.id == record.id:
                items[index] = record
                self.save_all(items)
                return
        # No match: nothing is written and the caller is not told.
        logger.info('update_missed', extra={'collection': self.filename, 'record_id': record.id})

    def delete(self, record_id: str) -> None:
        items = self.fetch_all()
        self.save_all([item for item in items if item.id != record_id])

    def get_by_id(self, record_id: str) -> RecordT | None:
        for item in self.fetch_all():
            if item.id == record_id:
                return item
        return None


class RecordStore:
    """The six collections of one school, sharing a single store adapter."""

    def __init__(self, store: WebDAVStore, time_provider: TimeProvider = default_time_provider) -> None:
        self.store = store
        self.years = CollectionRepository(store, YEARS_FILE, YearLevel, time_provider)
        self.classes = CollectionRepository(store, CLASSES_FILE, ClassLevel, time_provider)
        self.students = CollectionRepository(store, STUDENTS_FILE, Student, time_provider)
        self.incidents = CollectionRepository(store, INCIDENTS_FILE, Incident, time_provider)
        self.conversations = CollectionRepository(store, CONVERSATIONS_FILE, Conversation, time_provider)
        self.meeting_minutes = CollectionRepository(store, MEETING_MINUTES_FILE, MeetingMinute, time_provider)
