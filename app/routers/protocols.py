from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query

from app.schemas import ConversationPayload
from app.services.collection_repository import RecordStore
from app.services.conversation_service import (
    add_conversation,
    delete_conversation,
    get_conversation,
    update_conversation,
)
from app.services.record_view_service import (
    ALL,
    ConversationFilters,
    filter_conversations,
    join_conversations,
    sort_by_datetime,
)
from app.store import get_records


router = APIRouter(prefix='/api/protocols', tags=['Protocols'])


def load_joined_conversations(records: RecordStore):
    return join_conversations(
        records.conversations.fetch_all(),
        records.students.fetch_all(),
        records.classes.fetch_all(),
    )


@router.get('')
def list_protocols(
    search: str = Query(default=''),
    protocol_type: str = Query(default=ALL, alias='protocolType'),
    sort: Literal['ASC', 'DESC'] = Query(default='DESC'),
    records: RecordStore = Depends(get_records),
):
    rows = filter_conversations(
        load_joined_conversations(records),
        ConversationFilters(search=search, type=protocol_type),
    )
    return {'items': [row.to_wire() for row in sort_by_datetime(rows, descending=sort == 'DESC')]}


@router.get('/{conversation_id}')
def get_one(conversation_id: str, records: RecordStore = Depends(get_records)):
    conversation = get_conversation(records, conversation_id)
    if conversation is None:
        raise HTTPException(status_code=404, detail='Protocol not found')
    return conversation.to_wire()


@router.post('')
def create(payload: ConversationPayload, records: RecordStore = Depends(get_records)):
    return add_conversation(records, payload.model_dump()).to_wire()


@router.put('/{conversation_id}')
def update(conversation_id: str, payload: ConversationPayload, records: RecordStore = Depends(get_records)):
    return update_conversation(records, conversation_id, payload.model_dump()).to_wire()


@router.delete('/{conversation_id}')
def delete(conversation_id: str, records: RecordStore = Depends(get_records)):
    delete_conversation(records, conversation_id)
    return {'deleted': conversation_id}
