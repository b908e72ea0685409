from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models import ConversationType, IncidentCategory, IncidentStatus, NextAppointment


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IncidentPayload(CamelModel):
    created_at: int | None = None
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


class ConversationPayload(CamelModel):
    created_at: int | None = None
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


class AgendaItemPayload(CamelModel):
    id: str | None = None
    number: str = ''
    title: str | None = None
    summary: str = ''


class MeetingMinutePayload(CamelModel):
    created_at: int | None = None
    date: str
    time: str = ''
    occasion: str | None = None
    occasion_detail: str | None = None
    chairperson: str = ''
    minutes_taker: str = ''
    attendees: str = ''
    agenda_items: list[AgendaItemPayload] = Field(default_factory=list)


class YearCreateRequest(BaseModel):
    name: str = Field(min_length=1)


class ClassCreateRequest(CamelModel):
    year_level_id: str
    name: str = Field(min_length=1)


class StudentCreateRequest(CamelModel):
    class_id: str
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)


class ShareLinkImportRequest(BaseModel):
    link: str


class DemoDataRequest(BaseModel):
    seed: int | None = None
