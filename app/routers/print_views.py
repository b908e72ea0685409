from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.templating import Jinja2Templates

from app.core.time_provider import default_time_provider
from app.routers.incidents import load_joined_incidents
from app.routers.protocols import load_joined_conversations
from app.services.collection_repository import RecordStore
from app.services.meeting_minute_service import get_meeting_minute
from app.services.record_view_service import (
    ALL,
    ConversationFilters,
    IncidentFilters,
    filter_conversations,
    filter_incidents,
    format_german_date,
    pdf_filename,
    sort_by_datetime,
)
from app.store import get_records


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[1] / 'ui' / 'templates'))
templates.env.filters['german_date'] = format_german_date
router = APIRouter(tags=['Print'])

INCIDENT_PDF_PREFIX = 'Vorfallsprotokoll'
CONVERSATION_PDF_PREFIX = 'Gespraechsprotokoll'
MEETING_PDF_PREFIX = 'Sitzungsprotokoll'


def _render(request: Request, template: str, context: dict, filename: str | None = None):
    response = templates.TemplateResponse(request, template, context)
    if filename:
        response.headers['Content-Disposition'] = f'inline; filename="{filename}"'
    return response


@router.get('/print')
def print_list(
    request: Request,
    type: str = Query(default='incidents'),
    search: str = Query(default=''),
    status: str = Query(default=ALL),
    category: str = Query(default=ALL),
    class_id: str = Query(default=ALL, alias='class'),
    month: str = Query(default=ALL),
    protocol_type: str = Query(default=ALL, alias='protocolType'),
    records: RecordStore = Depends(get_records),
):
    now = default_time_provider.now()
    context = {'generated_at': now, 'search': search}
    if type == 'incidents':
        joined, classes = load_joined_incidents(records)
        filters = IncidentFilters(search=search, status=status, category=category, class_id=class_id, month=month)
        selected_class = next((row for row in classes if row.id == class_id), None)
        context.update(
            title='Vorfallsprotokolle',
            kind='incidents',
            rows=sort_by_datetime(filter_incidents(joined, filters)),
            filters=filters,
            class_name=selected_class.name if selected_class else '',
        )
    elif type == 'protocols':
        filters = ConversationFilters(search=search, type=protocol_type)
        context.update(
            title='Gesprächsprotokolle',
            kind='protocols',
            rows=sort_by_datetime(filter_conversations(load_joined_conversations(records), filters)),
            filters=filters,
            class_name='',
        )
    else:
        raise HTTPException(status_code=400, detail='type must be incidents or protocols')
    return _render(request, 'print_list.html', context)


@router.get('/print-incident')
def print_incident(request: Request, id: str = Query(...), records: RecordStore = Depends(get_records)):
    joined, _ = load_joined_incidents(records)
    incident = next((row for row in joined if row.id == id), None)
    if incident is None:
        raise HTTPException(status_code=404, detail='Incident not found')
    filename = pdf_filename(INCIDENT_PDF_PREFIX, f'{incident.student_name} {incident.date}', default_time_provider.today())
    return _render(request, 'print_incident.html', {'incident': incident}, filename)


@router.get('/print-protocol')
def print_protocol(request: Request, id: str = Query(...), records: RecordStore = Depends(get_records)):
    conversation = next((row for row in load_joined_conversations(records) if row.id == id), None)
    if conversation is None:
        raise HTTPException(status_code=404, detail='Protocol not found')
    title = f'{conversation.student_name or conversation.subject} {conversation.date}'
    filename = pdf_filename(CONVERSATION_PDF_PREFIX, title, default_time_provider.today())
    return _render(request, 'print_protocol.html', {'conversation': conversation}, filename)


@router.get('/print-meeting')
def print_meeting(request: Request, id: str = Query(...), records: RecordStore = Depends(get_records)):
    minute = get_meeting_minute(records, id)
    if minute is None:
        raise HTTPException(status_code=404, detail='Meeting minute not found')
    filename = pdf_filename(MEETING_PDF_PREFIX, minute.title, default_time_provider.today())
    return _render(request, 'print_meeting.html', {'minute': minute}, filename)
