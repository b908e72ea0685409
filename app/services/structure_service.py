from __future__ import annotations

import re

from app.models import ClassLevel, Student, YearLevel
from app.services.collection_repository import RecordStore


_NATURAL_SPLIT = re.compile(r'(\d+)')


def natural_sort_key(name: str) -> list:
    """'5a' sorts before '10a'."""
    return [int(part) if part.isdigit() else part.lower() for part in _NATURAL_SPLIT.split(name or '')]


def sort_classes(classes: list[ClassLevel]) -> list[ClassLevel]:
    return sorted(classes, key=lambda row: natural_sort_key(row.name))


def add_year(records: RecordStore, name: str) -> YearLevel:
    name = (name or '').strip()
    if not name:
        raise ValueError('name is required')
    return records.years.add({'name': name})


def delete_year(records: RecordStore, year_id: str) -> None:
    """Remove a year level with all of its classes and their students."""
    years = records.years.fetch_all()
    classes = records.classes.fetch_all()
    students = records.students.fetch_all()

    removed_class_ids = {row.id for row in classes if row.year_level_id == year_id}

    records.years.save_all([row for row in years if row.id != year_id])
    records.classes.save_all([row for row in classes if row.year_level_id != year_id])
    records.students.save_all([row for row in students if row.class_id not in removed_class_ids])


def get_classes_by_year(records: RecordStore, year_id: str) -> list[ClassLevel]:
    return [row for row in records.classes.fetch_all() if row.year_level_id == year_id]


def add_class(records: RecordStore, year_id: str, name: str) -> ClassLevel:
    name = (name or '').strip()
    if not name:
        raise ValueError('name is required')
    return records.classes.add({'year_level_id': year_id, 'name': name})


def delete_class(records: RecordStore, class_id: str) -> None:
    classes = records.classes.fetch_all()
    students = records.students.fetch_all()
    records.classes.save_all([row for row in classes if row.id != class_id])
    records.students.save_all([row for row in students if row.class_id != class_id])


def get_students_by_class(records: RecordStore, class_id: str) -> list[Student]:
    return [row for row in records.students.fetch_all() if row.class_id == class_id]


def add_student(records: RecordStore, class_id: str, first_name: str, last_name: str) -> Student:
    first_name = (first_name or '').strip()
    last_name = (last_name or '').strip()
    if not first_name or not last_name:
        raise ValueError('first_name and last_name are required')
    return records.students.add({'class_id': class_id, 'first_name': first_name, 'last_name': last_name})


def delete_student(records: RecordStore, student_id: str) -> None:
    # Incidents and conversations keep pointing at the removed id.
    records.students.delete(student_id)
