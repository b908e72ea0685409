from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query

from app.schemas import MeetingMinutePayload
from app.services.collection_repository import RecordStore
from app.services.meeting_minute_service import (
    add_meeting_minute,
    delete_meeting_minute,
    update_meeting_minute,
)
from app.services.record_view_service import filter_meeting_minutes, neighbour_ids, sort_by_datetime
from app.store import get_records


router = APIRouter(prefix='/api/meetings', tags=['Meeting Minutes'])


@router.get('')
def list_meetings(
    search: str = Query(default=''),
    sort: Literal['ASC', 'DESC'] = Query(default='DESC'),
    records: RecordStore = Depends(get_records),
):
    rows = filter_meeting_minutes(records.meeting_minutes.fetch_all(), search)
    return {'items': [row.to_wire() for row in sort_by_datetime(rows, descending=sort == 'DESC')]}


@router.get('/{minute_id}')
def get_one(minute_id: str, records: RecordStore = Depends(get_records)):
    minutes = records.meeting_minutes.fetch_all()
    minute = next((row for row in minutes if row.id == minute_id), None)
    if minute is None:
        raise HTTPException(status_code=404, detail='Meeting minute not found')
    previous_id, next_id = neighbour_ids(minutes, minute_id)
    return {'item': minute.to_wire(), 'prev_id': previous_id, 'next_id': next_id}


@router.post('')
def create(payload: MeetingMinutePayload, records: RecordStore = Depends(get_records)):
    return add_meeting_minute(records, payload.model_dump()).to_wire()


@router.put('/{minute_id}')
def update(minute_id: str, payload: MeetingMinutePayload, records: RecordStore = Depends(get_records)):
    return update_meeting_minute(records, minute_id, payload.model_dump()).to_wire()


@router.delete('/{minute_id}')
def delete(minute_id: str, records: RecordStore = Depends(get_records)):
    delete_meeting_minute(records, minute_id)
    return {'deleted': minute_id}
