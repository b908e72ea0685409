from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class IncidentCategory(str, Enum):
    PHYSICAL = 'Körperliche Gewalt'
    VERBAL = 'Verbale Gewalt'
    BULLYING = 'Mobbing / Ausgrenzung'
    VANDALISM = 'Sachbeschädigung'
    DISRUPTION = 'Unterrichtsstörung'
    THEFT = 'Diebstahl'
    OTHER = 'Sonstiges'


class IncidentStatus(str, Enum):
    OPEN = 'Offen'
    IN_PROGRESS = 'In Bearbeitung'
    RESOLVED = 'Geklärt'
    MONITORING = 'Beobachtung'


class ConversationType(str, Enum):
    PARENT = 'Elterngespräch'
    STUDENT = 'Schülergespräch'
    PHONE = 'Telefonat'
    CONFERENCE = 'Konferenz / Besprechung'
    ROUND_TABLE = 'Runder Tisch'
    OTHER = 'Sonstiges'


DEFAULT_MEETING_OCCASION = 'UP-Sitzung'
MEETING_OCCASIONS = ['UP-Sitzung', 'Fachkonferenz', 'Teamsitzung', 'Gesamtkonferenz', 'Sonstige']

UNKNOWN_STUDENT = 'Unbekannt'
UNKNOWN_LINK = '?'


class Record(BaseModel):
    """Base for everything persisted in a collection file.

    Stored JSON uses camelCase keys. Keys this model does not know are kept so
    a read-modify-write cycle never drops them.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='allow',
    )

    id: str

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode='json', by_alias=True, exclude_none=True)


class YearLevel(Record):
    name: str


class ClassLevel(Record):
    year_level_id: str
    name: str


class Student(Record):
    class_id: str
    first_name: str
    last_name: str

    @property
    def display_name(self) -> str:
        return f'{self.last_name}, {self.first_name}'


class Incident(Record):
    created_at: int
    student_id: str
    date: str
    time: str = ''
    location: str = ''
    reported_by: str = ''
    category: IncidentCategory
    description: str = ''
    involved_persons: str = ''
    witnesses: str = ''
    immediate_actions: str = ''
    agreements: str = ''
    parent_contacted: bool = False
    administration_contacted: bool = False
    social_service_contacted: bool = False
    social_service_abbreviation: str = ''
    status: IncidentStatus = IncidentStatus.OPEN


class NextAppointment(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='allow')

    date: str = ''
    time: str = ''
    location: str = ''
    participants: str = ''


class Conversation(Record):
    created_at: int
    date: str
    time: str = ''
    location: str = ''
    reported_by: str = ''
    type: ConversationType
    student_id: str | None = None
    student_name: str = ''
    class_name: str = ''
    participants: str = ''
    subject: str = ''
    content: str = ''
    goals: str = ''
    results: str = ''
    next_appointment: NextAppointment | None = None


class AgendaItem(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='allow')

    id: str
    number: str = ''
    title: str | None = None
    summary: str = Field(default='', description='Rich-text HTML')


class MeetingMinute(Record):
    created_at: int
    date: str
    time: str = ''
    title: str = ''
    occasion: str | None = None
    occasion_detail: str | None = None
    chairperson: str = ''
    minutes_taker: str = ''
    attendees: str = ''
    agenda_items: list[AgendaItem] = Field(default_factory=list)


class JoinedIncident(Incident):
    """View-only incident with its student/class/year resolved. Never persisted."""

    student_name: str = UNKNOWN_STUDENT
    class_name: str = UNKNOWN_LINK
    class_id: str | None = None
    year_level_name: str = UNKNOWN_LINK
