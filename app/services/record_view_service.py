from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Sequence, TypeVar

from app.core.time_provider import APP_ZONEINFO
from app.models import (
    DEFAULT_MEETING_OCCASION,
    UNKNOWN_LINK,
    UNKNOWN_STUDENT,
    ClassLevel,
    Conversation,
    Incident,
    JoinedIncident,
    MeetingMinute,
    Student,
    YearLevel,
)


ALL = 'ALL'
DETAIL_OCCASIONS = ('Fachkonferenz', 'Teamsitzung')
OTHER_OCCASION = 'Sonstige'

RowT = TypeVar('RowT')


@dataclass
class IncidentFilters:
    search: str = ''
    status: str = ALL
    category: str = ALL
    class_id: str = ALL
    month: str = ALL


@dataclass
class ConversationFilters:
    search: str = ''
    type: str = ALL


def _index(rows: Iterable) -> dict:
    return {row.id: row for row in rows}


def join_incidents(
    incidents: Sequence[Incident],
    students: Sequence[Student],
    classes: Sequence[ClassLevel],
    years: Sequence[YearLevel],
) -> list[JoinedIncident]:
    students_by_id = _index(students)
    classes_by_id = _index(classes)
    years_by_id = _index(years)

    joined: list[JoinedIncident] = []
    for incident in incidents:
        student = students_by_id.get(incident.student_id)
        class_level = classes_by_id.get(student.class_id) if student else None
        year = years_by_id.get(class_level.year_level_id) if class_level else None
        joined.append(
            JoinedIncident.model_validate(
                {
                    **incident.to_wire(),
                    'studentName': student.display_name if student else UNKNOWN_STUDENT,
                    'className': class_level.name if class_level else UNKNOWN_LINK,
                    'classId': class_level.id if class_level else None,
                    'yearLevelName': year.name if year else UNKNOWN_LINK,
                }
            )
        )
    return joined


def join_conversations(
    conversations: Sequence[Conversation],
    students: Sequence[Student],
    classes: Sequence[ClassLevel],
) -> list[Conversation]:
    """Refresh studentName/className from the linked student; keep the typed-in values otherwise."""
    students_by_id = _index(students)
    classes_by_id = _index(classes)

    joined: list[Conversation] = []
    for conversation in conversations:
        student = students_by_id.get(conversation.student_id) if conversation.student_id else None
        if student is None:
            joined.append(conversation)
            continue
        class_level = classes_by_id.get(student.class_id)
        joined.append(
            conversation.model_copy(
                update={
                    'student_name': student.display_name,
                    'class_name': class_level.name if class_level else conversation.class_name,
                }
            )
        )
    return joined


def _contains(haystack: str | None, needle: str) -> bool:
    return needle in (haystack or '').lower()


def _matches(value: str | None, wanted: str) -> bool:
    return wanted == ALL or value == wanted


def _enum_value(value) -> str:
    return getattr(value, 'value', value)


def filter_incidents(incidents: Iterable[JoinedIncident], filters: IncidentFilters) -> list[JoinedIncident]:
    term = (filters.search or '').lower()
    result = []
    for row in incidents:
        if not (_contains(row.student_name, term) or _contains(row.description, term)):
            continue
        if not _matches(_enum_value(row.status), filters.status):
            continue
        if not _matches(_enum_value(row.category), filters.category):
            continue
        if not _matches(row.class_id, filters.class_id):
            continue
        if filters.month != ALL and not (row.date or '').startswith(filters.month):
            continue
        result.append(row)
    return result


def filter_conversations(conversations: Iterable[Conversation], filters: ConversationFilters) -> list[Conversation]:
    term = (filters.search or '').lower()
    return [
        row
        for row in conversations
        if (_contains(row.student_name, term) or _contains(row.subject, term) or _contains(row.participants, term))
        and _matches(_enum_value(row.type), filters.type)
    ]


def filter_meeting_minutes(minutes: Iterable[MeetingMinute], search: str = '') -> list[MeetingMinute]:
    term = (search or '').lower()
    return [
        row
        for row in minutes
        if _contains(row.title, term) or _contains(row.chairperson, term) or _contains(row.attendees, term)
    ]


def record_timestamp(date_value: str | None, time_value: str | None) -> float:
    """Sort key for a date plus a time like '9:05', '08:00 - 09:30' or '14h'.

    Records without a usable date sort as the epoch.
    """
    if not date_value:
        return 0.0
    start = (time_value or '').split('-')[0].strip().replace('h', '') or '00:00'
    hour, _, minute = start.partition(':')
    try:
        parsed = datetime.fromisoformat(f'{date_value}T{(hour or "00").zfill(2)}:{minute or "00"}')
    except ValueError:
        return 0.0
    return parsed.replace(tzinfo=APP_ZONEINFO).timestamp()


def sort_by_datetime(rows: Iterable[RowT], descending: bool = True) -> list[RowT]:
    return sorted(rows, key=lambda row: record_timestamp(row.date, row.time), reverse=descending)


def available_months(rows: Iterable) -> list[str]:
    months = {row.date[:7] for row in rows if row.date and len(row.date) >= 7}
    return sorted(months, reverse=True)


def neighbour_ids(minutes: Sequence[MeetingMinute], minute_id: str) -> tuple[str | None, str | None]:
    """Previous and next entry in newest-first order."""
    ordered = sort_by_datetime(minutes, descending=True)
    for index, row in enumerate(ordered):
        if row.id == minute_id:
            previous_id = ordered[index - 1].id if index > 0 else None
            next_id = ordered[index + 1].id if index < len(ordered) - 1 else None
            return previous_id, next_id
    return None, None


def format_german_date(value: str | None) -> str:
    if not value:
        return ''
    try:
        return date.fromisoformat(value[:10]).strftime('%d.%m.%Y')
    except ValueError:
        return value


def derive_meeting_title(occasion: str | None, occasion_detail: str | None, meeting_date: str | None) -> str:
    occasion = occasion or DEFAULT_MEETING_OCCASION
    parts: list[str] = []
    if occasion == OTHER_OCCASION:
        parts.append(occasion_detail or 'Sitzung')
    else:
        parts.append(occasion)
        if occasion in DETAIL_OCCASIONS and occasion_detail:
            parts.append(occasion_detail)
    formatted = format_german_date(meeting_date)
    if formatted:
        parts.append(formatted)
    return ' '.join(parts)


def pdf_filename(prefix: str, title: str | None, on_date: date) -> str:
    slug = re.sub(r'[^a-z0-9]', '_', title or '', flags=re.IGNORECASE).lower() or 'dokument'
    return f'{prefix}_{slug}_{on_date.isoformat()}.pdf'
