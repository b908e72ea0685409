from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import date, timedelta

from app.models import (
    AgendaItem,
    ClassLevel,
    Conversation,
    ConversationType,
    Incident,
    IncidentCategory,
    IncidentStatus,
    MeetingMinute,
    NextAppointment,
    Student,
    YearLevel,
)
from app.services.collection_repository import RecordStore, new_id
from app.services.record_view_service import derive_meeting_title


logger = logging.getLogger(__name__)

YEAR_RANGE = range(5, 11)
CLASS_SUFFIXES = ('a', 'b', 'c')
MIN_STUDENTS_PER_CLASS = 3
INCIDENT_COUNT = 100
CONVERSATION_COUNT = 100
MEETING_COUNT = 20

FIRST_NAMES = [
    'Leon', 'Mia', 'Noah', 'Emma', 'Paul', 'Hannah', 'Luca', 'Sofia', 'Elias', 'Anna', 'Ben', 'Lea',
    'Luis', 'Marie', 'Jonas', 'Lena', 'Felix', 'Emily', 'Maximilian', 'Lina', 'Mohammed', 'Aisha',
    'Kevin', 'Chantal',
]
LAST_NAMES = [
    'Müller', 'Schmidt', 'Schneider', 'Fischer', 'Weber', 'Meyer', 'Wagner', 'Becker', 'Schulz',
    'Hoffmann', 'Koch', 'Bauer', 'Richter', 'Klein', 'Wolf', 'Schröder', 'Neumann', 'Schwarz',
    'Zimmermann', 'Yilmaz', 'Kowalski',
]
LOCATIONS = [
    'Klassenzimmer 8b', 'Pausenhof West', 'Mensa', 'Flur 1. Stock', 'Sporthalle', 'Chemie-Raum',
    'Bushaltestelle', 'Digital / Teams', 'Sekretariat', 'Treppenhaus',
]
TEACHERS = [
    'Frau Müller', 'Herr Schmidt', 'Frau Weber', 'Herr Meyer', 'Frau Wagner', 'Herr Becker',
    'Frau Schulz', 'Herr Hoffmann', 'Frau Koch',
]
CONVERSATION_LOCATIONS = ['Besprechungsraum', 'Lehrerzimmer', 'Telefon', 'Büro SL']
SOCIAL_SERVICE_ABBREVIATIONS = ['Hr. S.', 'Fr. K.', 'ReBUZ']

INCIDENT_SCENARIOS = [
    (IncidentCategory.DISRUPTION, "Hat während der Stillarbeit laut 'Skibidi Toilet' gesungen.", 'Ermahnung, Eintrag im Klassenbuch.'),
    (IncidentCategory.THEFT, 'Hat das Pausenbrot von Lukas entwendet und gegen Pokemon-Karten getauscht.', 'Elterngespräch, Rückgabe gefordert.'),
    (IncidentCategory.VANDALISM, "Hat 'Ferien jetzt!' mit Edding an die Tafel geschrieben (permanent).", 'Reinigung durch Schüler angeordnet.'),
    (IncidentCategory.PHYSICAL, 'Schubsen in der Mensa-Schlange, weil es Pommes gab.', 'Trennungsgespräch, Entschuldigung.'),
    (IncidentCategory.DISRUPTION, "Weigerte sich, die Sonnenbrille im Unterricht abzunehmen ('Augenentzündung').", 'Zum Sekretariat geschickt.'),
    (IncidentCategory.BULLYING, 'Hat Gerüchte über WhatsApp in der Klassengruppe verbreitet.', 'Handy einkassiert, Schulleitung informiert.'),
    (IncidentCategory.OTHER, "Hat versucht, den Schulhamster 'frei zu lassen'.", 'Eltern informiert, Hamster gesichert.'),
    (IncidentCategory.VERBAL, "Beleidigung der Lehrkraft als 'Boomer'.", 'Reflexionsbogen ausfüllen lassen.'),
    (IncidentCategory.DISRUPTION, "Hat den Feueralarm 'aus Versehen' mit dem Ellbogen berührt.", 'Gespräch mit Hausmeister und SL.'),
    (IncidentCategory.THEFT, 'Diebstahl von Kreidevorräten für private Straßenkunst.', 'Sozialstunden: Tafeldienst für 2 Wochen.'),
    (IncidentCategory.VANDALISM, 'Kaugummi unter den Lehrertisch geklebt.', 'Muss alle Tische im Raum kontrollieren.'),
    (IncidentCategory.DISRUPTION, 'Hat sich im Schrank versteckt, um die Klasse zu erschrecken.', 'Nachsitzen.'),
    (IncidentCategory.OTHER, 'Betrieb einen illegalen Handel mit Energy-Drinks aus dem Spind.', 'Handel unterbunden, Ware konfisziert.'),
    (IncidentCategory.PHYSICAL, 'Schneeballschlacht im Treppenhaus.', 'Pausenverbot für 2 Tage.'),
    (IncidentCategory.VERBAL, 'Lautstarker Streit über Fußballergebnisse während der Klausur.', 'Klausur abgenommen, Note 6.'),
    (IncidentCategory.DISRUPTION, 'Hat die Sprache des Smartboards auf Chinesisch gestellt.', 'Technischer Support gerufen, Schüler half bei Korrektur.'),
    (IncidentCategory.BULLYING, 'Ausschließen von Mitschülern beim Völkerball.', 'Gespräch in der Klasse über Fairness.'),
    (IncidentCategory.VANDALISM, 'Hat versucht, ein TikTok-Video auf dem Lehrerpult zu drehen, Tisch verkratzt.', 'Schadensmeldung an Stadt, Rechnung an Eltern.'),
    (IncidentCategory.OTHER, 'Hat Hausaufgaben durch ChatGPT erstellen lassen und den Prompt mit ausgedruckt.', 'Hausaufgabe wiederholen (handschriftlich).'),
    (IncidentCategory.DISRUPTION, 'Simulierte Ohnmacht, um dem Vokabeltest zu entgehen.', 'Sanitäter gerufen, Eltern informiert.'),
]

CONVERSATION_TOPICS = [
    (ConversationType.PARENT, 'Leistungsabfall Mathe', 'Eltern machen sich Sorgen um die Note.', 'Förderunterricht empfohlen.'),
    (ConversationType.STUDENT, 'Fehlzeiten', 'Schüler fehlt häufig montags. Gespräch über Motivation.', 'Attestpflicht ab 1. Tag.'),
    (ConversationType.PHONE, 'Krankmeldung / Vorfall gestern', 'Mutter rief an wegen Vorfall auf dem Schulhof.', 'Rückruf durch Klassenlehrer vereinbart.'),
    (ConversationType.ROUND_TABLE, 'Hilfeplangespräch', 'Große Runde mit ReBUZ und Sozialarbeiter.', 'Maßnahme wird verlängert.'),
    (ConversationType.CONFERENCE, 'Ordnungsmaßnahme', 'Anhörung wegen wiederholtem Fehlverhalten.', 'Schriftlicher Verweis.'),
    (ConversationType.PARENT, 'Lobanruf', 'Rückmeldung über positive Entwicklung im Sozialverhalten.', 'Eltern haben sich sehr gefreut.'),
    (ConversationType.STUDENT, 'Streitschlichtung', 'Konflikt mit Mitschüler aus der 7a.', 'Handshake und Entschuldigung.'),
    (ConversationType.OTHER, 'Austausch mit Schulbegleitung', 'Abstimmung der Ziele für die Woche.', 'Fokus auf Pünktlichkeit.'),
    (ConversationType.PARENT, 'Klassenfahrt Kosten', 'Klärung der Finanzierung über Jobcenter.', 'Antrag ausgehändigt.'),
    (ConversationType.STUDENT, 'Berufsorientierung', 'Schüler weiß nicht, wohin nach der 10.', 'Termin bei Berufsberatung gemacht.'),
]

# (occasion, detail, chairperson, minutes taker, attendees)
MEETING_TOPICS = [
    ('Gesamtkonferenz', None, 'Herr Schmidt', 'Frau Müller', 'Gesamtes Kollegium'),
    ('Fachkonferenz', 'Mathe', 'Frau Weber', 'Herr Becker', 'Mathe-Lehrkräfte'),
    ('Teamsitzung', 'Jahrgang 8', 'Herr Meyer', 'Frau Schulz', 'Klassenlehrer, Fachlehrer 8b'),
    ('UP-Sitzung', None, 'Frau Wagner', 'Herr Hoffmann', 'Mitglieder der Steuergruppe'),
    ('Sonstige', 'Schulvorstand', 'Herr Schmidt', 'Frau Koch', 'Schulleitung, Elternvertreter, Schülervertreter'),
]

AGENDA_TEMPLATE = [
    ('Begrüßung und Formalia', 'Feststellung der Beschlussfähigkeit. Genehmigung des letzten Protokolls.'),
    (
        'Aktuelle Themen',
        'Diskussion über aktuelle Herausforderungen im Schulalltag. '
        '<b>Wichtig:</b> Handyverbot in den Pausen konsequenter durchsetzen.',
    ),
    ('Verschiedenes', 'Nächster Termin in 4 Wochen.'),
]


@dataclass
class DemoDataSummary:
    years: int
    classes: int
    students: int
    incidents: int
    conversations: int
    meeting_minutes: int


def random_school_day(rng: random.Random, start: date, end: date) -> date:
    """Uniform date in [start, end]; Saturdays and Sundays move two days forward."""
    picked = start + timedelta(days=rng.randint(0, (end - start).days))
    if picked.weekday() >= 5:
        picked += timedelta(days=2)
    return picked


def _incident_status(rng: random.Random, days_old: int) -> IncidentStatus:
    status = IncidentStatus.RESOLVED
    if days_old < 14:
        status = IncidentStatus.OPEN if rng.random() > 0.5 else IncidentStatus.IN_PROGRESS
    if 14 < days_old < 60 and rng.random() > 0.7:
        status = IncidentStatus.MONITORING
    return status


def _ensure_structure(
    rng: random.Random,
    years: list[YearLevel],
    classes: list[ClassLevel],
    students: list[Student],
) -> None:
    for number in YEAR_RANGE:
        year_name = f'Jahrgang {number}'
        year = next((row for row in years if row.name == year_name), None)
        if year is None:
            year = YearLevel(id=new_id(), name=year_name)
            years.append(year)

        for suffix in CLASS_SUFFIXES:
            class_name = f'{number}{suffix}'
            class_level = next(
                (row for row in classes if row.year_level_id == year.id and row.name == class_name),
                None,
            )
            if class_level is None:
                class_level = ClassLevel(id=new_id(), year_level_id=year.id, name=class_name)
                classes.append(class_level)

            if sum(1 for row in students if row.class_id == class_level.id) < MIN_STUDENTS_PER_CLASS:
                for _ in range(rng.randint(3, 6)):
                    students.append(
                        Student(
                            id=new_id(),
                            class_id=class_level.id,
                            first_name=rng.choice(FIRST_NAMES),
                            last_name=rng.choice(LAST_NAMES),
                        )
                    )


def _build_incident(rng: random.Random, student: Student, today: date, start: date, created_at: int) -> Incident:
    category, description, action = rng.choice(INCIDENT_SCENARIOS)
    day = random_school_day(rng, start, today)
    status = _incident_status(rng, (today - day).days)
    contact_social = rng.random() > 0.8
    return Incident(
        id=new_id(),
        created_at=created_at,
        student_id=student.id,
        date=day.isoformat(),
        time=f'{rng.randint(8, 13):02d}:{rng.randint(0, 58):02d}',
        location=rng.choice(LOCATIONS),
        reported_by=rng.choice(TEACHERS),
        category=category,
        description=description,
        involved_persons='Kevin, Chantal' if rng.random() > 0.7 else '',
        witnesses='Herr Müller' if rng.random() > 0.6 else '',
        immediate_actions=action,
        agreements='Fall abgeschlossen.' if status == IncidentStatus.RESOLVED else 'Weiteres Vorgehen abwarten.',
        parent_contacted=rng.random() > 0.4,
        administration_contacted=rng.random() > 0.8 or category == IncidentCategory.PHYSICAL,
        social_service_contacted=contact_social,
        social_service_abbreviation=rng.choice(SOCIAL_SERVICE_ABBREVIATIONS) if contact_social else '',
        status=status,
    )


def _build_conversation(
    rng: random.Random,
    student: Student,
    classes_by_id: dict[str, ClassLevel],
    today: date,
    start: date,
    created_at: int,
) -> Conversation:
    conversation_type, subject, content, results = rng.choice(CONVERSATION_TOPICS)
    day = random_school_day(rng, start, today)
    next_appointment = None
    if rng.random() > 0.7:
        next_appointment = NextAppointment(
            date=(day + timedelta(days=14)).isoformat(),
            time='14:00',
            location='Raum 102',
            participants='Wie heute',
        )
    class_level = classes_by_id.get(student.class_id)
    return Conversation(
        id=new_id(),
        created_at=created_at,
        date=day.isoformat(),
        time=f'{rng.randint(8, 14):02d}:{rng.randint(0, 3) * 15:02d}',
        location=rng.choice(CONVERSATION_LOCATIONS),
        reported_by=rng.choice(TEACHERS),
        type=conversation_type,
        student_id=student.id,
        student_name=student.display_name,
        class_name=class_level.name if class_level else 'k.A.',
        participants='Mutter, Vater, KL' if conversation_type == ConversationType.PARENT else 'Schüler, KL',
        subject=subject,
        content=f'{content} (Automatisch generierter Eintrag)',
        goals='Verbesserung der Situation.',
        results=results,
        next_appointment=next_appointment,
    )


def _build_meeting_minute(rng: random.Random, today: date, start: date, created_at: int) -> MeetingMinute:
    occasion, detail, chairperson, minutes_taker, attendees = rng.choice(MEETING_TOPICS)
    day = random_school_day(rng, start, today)
    return MeetingMinute(
        id=new_id(),
        created_at=created_at,
        date=day.isoformat(),
        time=f'{rng.randint(8, 14):02d}:00 - {rng.randint(9, 15):02d}:30',
        title=derive_meeting_title(occasion, detail, day.isoformat()),
        occasion=occasion,
        occasion_detail=detail,
        chairperson=chairperson,
        minutes_taker=minutes_taker,
        attendees=attendees,
        agenda_items=[
            AgendaItem(id=new_id(), number=str(position), title=title, summary=summary)
            for position, (title, summary) in enumerate(AGENDA_TEMPLATE, start=1)
        ],
    )


def generate_demo_data(
    records: RecordStore,
    rng: random.Random | None = None,
    today: date | None = None,
) -> DemoDataSummary:
    """Merge a demo school (years 5-10, classes, students, records) into the existing collections."""
    rng = rng or random.Random()
    today = today or records.incidents.time_provider.today()
    start = today - timedelta(days=365)
    created_at = records.incidents.time_provider.now_millis()

    years = records.years.fetch_all()
    classes = records.classes.fetch_all()
    students = records.students.fetch_all()
    incidents = records.incidents.fetch_all()
    conversations = records.conversations.fetch_all()
    meeting_minutes = records.meeting_minutes.fetch_all()

    _ensure_structure(rng, years, classes, students)
    if not students:
        raise ValueError('No students available for demo data')
    classes_by_id = {row.id: row for row in classes}

    for _ in range(INCIDENT_COUNT):
        incidents.append(_build_incident(rng, rng.choice(students), today, start, created_at))
    for _ in range(CONVERSATION_COUNT):
        conversations.append(_build_conversation(rng, rng.choice(students), classes_by_id, today, start, created_at))
    for _ in range(MEETING_COUNT):
        meeting_minutes.append(_build_meeting_minute(rng, today, start, created_at))

    records.years.save_all(years)
    records.classes.save_all(classes)
    records.students.save_all(students)
    records.incidents.save_all(incidents)
    records.conversations.save_all(conversations)
    records.meeting_minutes.save_all(meeting_minutes)

    summary = DemoDataSummary(
        years=len(years),
        classes=len(classes),
        students=len(students),
        incidents=len(incidents),
        conversations=len(conversations),
        meeting_minutes=len(meeting_minutes),
    )
    logger.info('demo_data_generated', extra={'incidents': summary.incidents, 'conversations': summary.conversations})
    return summary
