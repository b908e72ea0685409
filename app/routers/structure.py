from fastapi import APIRouter, Depends, HTTPException

from app.schemas import ClassCreateRequest, StudentCreateRequest, YearCreateRequest
from app.services.collection_repository import RecordStore
from app.services.structure_service import (
    add_class,
    add_student,
    add_year,
    delete_class,
    delete_student,
    delete_year,
    get_classes_by_year,
    get_students_by_class,
    sort_classes,
)
from app.store import get_records


router = APIRouter(prefix='/api/structure', tags=['Structure'])


@router.get('/years')
def list_years(records: RecordStore = Depends(get_records)):
    return [row.to_wire() for row in records.years.fetch_all()]


@router.post('/years')
def create_year(payload: YearCreateRequest, records: RecordStore = Depends(get_records)):
    try:
        return add_year(records, payload.name).to_wire()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.delete('/years/{year_id}')
def remove_year(year_id: str, records: RecordStore = Depends(get_records)):
    delete_year(records, year_id)
    return {'deleted': year_id}


@router.get('/years/{year_id}/classes')
def list_classes(year_id: str, records: RecordStore = Depends(get_records)):
    return [row.to_wire() for row in sort_classes(get_classes_by_year(records, year_id))]


@router.post('/classes')
def create_class(payload: ClassCreateRequest, records: RecordStore = Depends(get_records)):
    try:
        return add_class(records, payload.year_level_id, payload.name).to_wire()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.delete('/classes/{class_id}')
def remove_class(class_id: str, records: RecordStore = Depends(get_records)):
    delete_class(records, class_id)
    return {'deleted': class_id}


@router.get('/classes/{class_id}/students')
def list_students(class_id: str, records: RecordStore = Depends(get_records)):
    return [row.to_wire() for row in get_students_by_class(records, class_id)]


@router.post('/students')
def create_student(payload: StudentCreateRequest, records: RecordStore = Depends(get_records)):
    try:
        return add_student(records, payload.class_id, payload.first_name, payload.last_name).to_wire()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.delete('/students/{student_id}')
def remove_student(student_id: str, records: RecordStore = Depends(get_records)):
    delete_student(records, student_id)
    return {'deleted': student_id}
