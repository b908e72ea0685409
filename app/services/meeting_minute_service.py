from __future__ import annotations

from app.models import DEFAULT_MEETING_OCCASION, MeetingMinute
from app.services.collection_repository import RecordStore, new_id
from app.services.record_view_service import derive_meeting_title


def _prepare(payload: dict) -> dict:
    data = dict(payload)
    data['occasion'] = data.get('occasion') or DEFAULT_MEETING_OCCASION
    data['title'] = derive_meeting_title(data['occasion'], data.get('occasion_detail'), data.get('date'))

    items = []
    for position, item in enumerate(data.get('agenda_items') or [], start=1):
        item = dict(item)
        item['id'] = item.get('id') or new_id()
        item['number'] = item.get('number') or str(position)
        items.append(item)
    data['agenda_items'] = items
    return data


def add_meeting_minute(records: RecordStore, payload: dict) -> MeetingMinute:
    return records.meeting_minutes.add(_prepare(payload))


def update_meeting_minute(records: RecordStore, minute_id: str, payload: dict) -> MeetingMinute:
    data = _prepare(payload)
    data['id'] = minute_id
    data['created_at'] = data.get('created_at') or records.meeting_minutes.time_provider.now_millis()
    minute = MeetingMinute.model_validate(data)
    records.meeting_minutes.update(minute)
    return minute


def delete_meeting_minute(records: RecordStore, minute_id: str) -> None:
    records.meeting_minutes.delete(minute_id)


def get_meeting_minute(records: RecordStore, minute_id: str) -> MeetingMinute | None:
    return records.meeting_minutes.get_by_id(minute_id)
