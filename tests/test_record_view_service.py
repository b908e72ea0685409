import unittest
from datetime import date

from app.models import (
    ClassLevel,
    Conversation,
    ConversationType,
    Incident,
    IncidentCategory,
    IncidentStatus,
    MeetingMinute,
    Student,
    YearLevel,
)
from app.services.record_view_service import (
    ConversationFilters,
    IncidentFilters,
    available_months,
    derive_meeting_title,
    filter_conversations,
    filter_incidents,
    filter_meeting_minutes,
    format_german_date,
    join_conversations,
    join_incidents,
    neighbour_ids,
    pdf_filename,
    record_timestamp,
    sort_by_datetime,
)


YEARS = [YearLevel(id='y5', name='Jahrgang 5')]
CLASSES = [
    ClassLevel(id='c5a', year_level_id='y5', name='5a'),
    ClassLevel(id='c5b', year_level_id='missing-year', name='5b'),
]
STUDENTS = [
    Student(id='s1', class_id='c5a', first_name='Lukas', last_name='Müller'),
    Student(id='s2', class_id='c5b', first_name='Mia', last_name='Schmidt'),
]


def incident(incident_id, student_id='s1', **overrides):
    data = {
        'id': incident_id,
        'created_at': 1,
        'student_id': student_id,
        'date': '2024-02-01',
        'time': '09:00',
        'category': IncidentCategory.DISRUPTION,
        'description': 'Störung',
        'status': IncidentStatus.OPEN,
    }
    data.update(overrides)
    return Incident.model_validate(data)


def conversation(conversation_id, **overrides):
    data = {
        'id': conversation_id,
        'created_at': 1,
        'date': '2024-02-01',
        'type': ConversationType.PARENT,
    }
    data.update(overrides)
    return Conversation.model_validate(data)


def minute(minute_id, meeting_date, time='', **overrides):
    data = {'id': minute_id, 'created_at': 1, 'date': meeting_date, 'time': time}
    data.update(overrides)
    return MeetingMinute.model_validate(data)


class JoinIncidentsTests(unittest.TestCase):
    def test_full_chain_is_resolved(self):
        [row] = join_incidents([incident('i1')], STUDENTS, CLASSES, YEARS)
        self.assertEqual(row.student_name, 'Müller, Lukas')
        self.assertEqual(row.class_name, '5a')
        self.assertEqual(row.class_id, 'c5a')
        self.assertEqual(row.year_level_name, 'Jahrgang 5')
        self.assertEqual(row.description, 'Störung')

    def test_orphaned_student_reference(self):
        [row] = join_incidents([incident('i1', student_id='gone')], STUDENTS, CLASSES, YEARS)
        self.assertEqual(row.student_name, 'Unbekannt')
        self.assertEqual(row.class_name, '?')
        self.assertIsNone(row.class_id)
        self.assertEqual(row.year_level_name, '?')

    def test_missing_year_only_blanks_the_year(self):
        [row] = join_incidents([incident('i1', student_id='s2')], STUDENTS, CLASSES, YEARS)
        self.assertEqual(row.student_name, 'Schmidt, Mia')
        self.assertEqual(row.class_name, '5b')
        self.assertEqual(row.year_level_name, '?')

    def test_stored_names_are_replaced_by_the_lookup(self):
        stale = incident('i1', studentName='Alt', className='9z', yearLevelName='Jahrgang 9')
        [row] = join_incidents([stale], STUDENTS, CLASSES, YEARS)
        self.assertEqual(row.student_name, 'Müller, Lukas')
        self.assertEqual(row.class_name, '5a')
        self.assertEqual(row.year_level_name, 'Jahrgang 5')
        self.assertEqual(row.to_wire()['studentName'], 'Müller, Lukas')

    def test_one_output_row_per_incident(self):
        rows = join_incidents([incident('i1'), incident('i2', student_id='x')], STUDENTS, CLASSES, YEARS)
        self.assertEqual([row.id for row in rows], ['i1', 'i2'])


class JoinConversationsTests(unittest.TestCase):
    def test_linked_student_overrides_typed_in_names(self):
        row = conversation('p1', student_id='s1', student_name='alt', class_name='alt')
        [joined] = join_conversations([row], STUDENTS, CLASSES)
        self.assertEqual(joined.student_name, 'Müller, Lukas')
        self.assertEqual(joined.class_name, '5a')

    def test_unlinked_conversation_keeps_free_text(self):
        row = conversation('p1', student_name='Gast', class_name='7c')
        [joined] = join_conversations([row], STUDENTS, CLASSES)
        self.assertEqual((joined.student_name, joined.class_name), ('Gast', '7c'))


class FilterTests(unittest.TestCase):
    def setUp(self):
        self.rows = join_incidents(
            [
                incident('i1', description='Streit auf dem Hof', status=IncidentStatus.OPEN, date='2024-02-01'),
                incident(
                    'i2',
                    student_id='s2',
                    description='Handy entwendet',
                    category=IncidentCategory.THEFT,
                    status=IncidentStatus.RESOLVED,
                    date='2024-03-05',
                ),
            ],
            STUDENTS,
            CLASSES,
            YEARS,
        )

    def test_default_filters_keep_everything(self):
        self.assertEqual(len(filter_incidents(self.rows, IncidentFilters())), 2)

    def test_search_is_case_insensitive_over_name_and_description(self):
        self.assertEqual([row.id for row in filter_incidents(self.rows, IncidentFilters(search='HOF'))], ['i1'])
        self.assertEqual([row.id for row in filter_incidents(self.rows, IncidentFilters(search='schmidt'))], ['i2'])

    def test_category_filter_keeps_matching_rows_in_order(self):
        rows = join_incidents(
            [
                incident('a1', category=IncidentCategory.THEFT),
                incident('b1', category=IncidentCategory.VANDALISM),
                incident('a2', category=IncidentCategory.THEFT),
            ],
            STUDENTS,
            CLASSES,
            YEARS,
        )
        matched = filter_incidents(rows, IncidentFilters(category='Diebstahl'))
        self.assertEqual([row.id for row in matched], ['a1', 'a2'])

    def test_filters_combine(self):
        filters = IncidentFilters(status='Geklärt', category='Diebstahl', class_id='c5b', month='2024-03')
        self.assertEqual([row.id for row in filter_incidents(self.rows, filters)], ['i2'])
        self.assertEqual(filter_incidents(self.rows, IncidentFilters(status='Geklärt', month='2024-02')), [])

    def test_every_match_satisfies_each_criterion(self):
        filters = IncidentFilters(status='Offen', class_id='c5a')
        for row in filter_incidents(self.rows, filters):
            self.assertEqual(row.status, IncidentStatus.OPEN)
            self.assertEqual(row.class_id, 'c5a')

    def test_conversation_search_covers_participants(self):
        rows = [
            conversation('p1', subject='Fehlzeiten', participants='Frau Weber'),
            conversation('p2', type=ConversationType.PHONE, subject='Hausaufgaben'),
        ]
        self.assertEqual([row.id for row in filter_conversations(rows, ConversationFilters(search='weber'))], ['p1'])
        self.assertEqual([row.id for row in filter_conversations(rows, ConversationFilters(type='Telefonat'))], ['p2'])

    def test_meeting_search(self):
        rows = [minute('m1', '2024-01-10', title='Teamsitzung', chairperson='Herr Klein'), minute('m2', '2024-01-11')]
        self.assertEqual([row.id for row in filter_meeting_minutes(rows, 'klein')], ['m1'])
        self.assertEqual(len(filter_meeting_minutes(rows)), 2)


class OrderingTests(unittest.TestCase):
    def test_time_formats_are_understood(self):
        self.assertLess(record_timestamp('2024-01-10', '9:05'), record_timestamp('2024-01-10', '10:00'))
        self.assertEqual(record_timestamp('2024-01-10', '08:00 - 09:30'), record_timestamp('2024-01-10', '08:00'))
        self.assertEqual(record_timestamp('2024-01-10', '14h'), record_timestamp('2024-01-10', '14:00'))
        self.assertEqual(record_timestamp('2024-01-10', ''), record_timestamp('2024-01-10', '00:00'))

    def test_missing_or_bad_dates_sort_as_epoch(self):
        self.assertEqual(record_timestamp('', '10:00'), 0)
        self.assertEqual(record_timestamp('gestern', '10:00'), 0)

    def test_sort_newest_first_and_back(self):
        rows = [minute('a', '2024-01-10', '08:00'), minute('b', '2024-01-12'), minute('c', '2024-01-10', '14:00')]
        self.assertEqual([row.id for row in sort_by_datetime(rows)], ['b', 'c', 'a'])
        self.assertEqual([row.id for row in sort_by_datetime(rows, descending=False)], ['a', 'c', 'b'])

    def test_available_months_are_distinct_and_newest_first(self):
        rows = [minute('a', '2024-01-10'), minute('b', '2024-03-01'), minute('c', '2024-01-22'), minute('d', '')]
        self.assertEqual(available_months(rows), ['2024-03', '2024-01'])

    def test_neighbours_follow_newest_first_order(self):
        rows = [minute('old', '2024-01-01'), minute('new', '2024-03-01'), minute('mid', '2024-02-01')]
        self.assertEqual(neighbour_ids(rows, 'mid'), ('new', 'old'))
        self.assertEqual(neighbour_ids(rows, 'new'), (None, 'mid'))
        self.assertEqual(neighbour_ids(rows, 'old'), ('mid', None))
        self.assertEqual(neighbour_ids(rows, 'unknown'), (None, None))


class MeetingTitleTests(unittest.TestCase):
    def test_default_occasion_with_date(self):
        self.assertEqual(derive_meeting_title(None, None, '2024-03-01'), 'UP-Sitzung 01.03.2024')

    def test_detail_is_appended_for_detail_occasions(self):
        self.assertEqual(derive_meeting_title('Fachkonferenz', 'Mathe', '2024-03-01'), 'Fachkonferenz Mathe 01.03.2024')
        self.assertEqual(derive_meeting_title('Teamsitzung', '', '2024-03-01'), 'Teamsitzung 01.03.2024')

    def test_detail_is_ignored_for_other_occasions(self):
        self.assertEqual(derive_meeting_title('Gesamtkonferenz', 'egal', '2024-03-01'), 'Gesamtkonferenz 01.03.2024')

    def test_free_text_occasion(self):
        self.assertEqual(derive_meeting_title('Sonstige', 'Elternabend', '2024-03-01'), 'Elternabend 01.03.2024')
        self.assertEqual(derive_meeting_title('Sonstige', '', None), 'Sitzung')

    def test_unparsable_date_is_kept_verbatim(self):
        self.assertEqual(format_german_date('irgendwann'), 'irgendwann')
        self.assertEqual(format_german_date(''), '')


class PdfFilenameTests(unittest.TestCase):
    def test_title_is_slugged(self):
        self.assertEqual(
            pdf_filename('Sitzungsprotokoll', 'Fachkonferenz Mathe 01.03.2024', date(2024, 3, 2)),
            'Sitzungsprotokoll_fachkonferenz_mathe_01_03_2024_2024-03-02.pdf',
        )

    def test_umlauts_become_underscores(self):
        self.assertEqual(
            pdf_filename('Vorfallsprotokoll', 'Müller, Lukas', date(2024, 3, 2)),
            'Vorfallsprotokoll_m_ller__lukas_2024-03-02.pdf',
        )


if __name__ == '__main__':
    unittest.main()
