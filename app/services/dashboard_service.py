from __future__ import annotations

from app.models import UNKNOWN_STUDENT, IncidentStatus
from app.services.collection_repository import RecordStore
from app.services.record_view_service import derive_meeting_title, record_timestamp


RECENT_INCIDENT_LIMIT = 5
RECENT_KINDS = ('incidents', 'protocols', 'meetings')


def build_dashboard(records: RecordStore) -> dict:
    incidents = records.incidents.fetch_all()
    recent = sorted(incidents, key=lambda row: row.created_at, reverse=True)[:RECENT_INCIDENT_LIMIT]
    return {
        'open_count': sum(1 for row in incidents if row.status == IncidentStatus.OPEN),
        'monitoring_count': sum(1 for row in incidents if row.status == IncidentStatus.MONITORING),
        'recent_incidents': [row.to_wire() for row in recent],
    }


def recent_entries(records: RecordStore, kind: str) -> list[dict]:
    """Short list of entries for the navigation sidebar, newest date first."""
    if kind == 'incidents':
        students = {row.id: row for row in records.students.fetch_all()}
        items = []
        for row in records.incidents.fetch_all():
            student = students.get(row.student_id)
            name = student.display_name if student else UNKNOWN_STUDENT
            items.append({'id': row.id, 'date': row.date, 'title': f'{name} - {row.category.value}', 'to': f'/incidents/edit/{row.id}'})
    elif kind == 'protocols':
        items = [
            {
                'id': row.id,
                'date': row.date,
                'title': row.student_name or row.subject or 'Gespräch',
                'to': f'/protocols/edit/{row.id}',
            }
            for row in records.conversations.fetch_all()
        ]
    elif kind == 'meetings':
        items = [
            {
                'id': row.id,
                'date': row.date,
                'title': derive_meeting_title(row.occasion, row.occasion_detail, row.date),
                'to': f'/meetings/edit/{row.id}',
            }
            for row in records.meeting_minutes.fetch_all()
        ]
    else:
        raise ValueError(f'kind must be one of: {", ".join(RECENT_KINDS)}')
    return sorted(items, key=lambda item: record_timestamp(item['date'], None), reverse=True)
