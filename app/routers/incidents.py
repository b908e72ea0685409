from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query

from app.schemas import IncidentPayload
from app.services.collection_repository import RecordStore
from app.services.incident_service import add_incident, delete_incident, get_incident, update_incident
from app.services.record_view_service import (
    ALL,
    IncidentFilters,
    available_months,
    filter_incidents,
    join_incidents,
    sort_by_datetime,
)
from app.services.structure_service import sort_classes
from app.store import get_records


router = APIRouter(prefix='/api/incidents', tags=['Incidents'])


def load_joined_incidents(records: RecordStore):
    classes = records.classes.fetch_all()
    joined = join_incidents(
        records.incidents.fetch_all(),
        records.students.fetch_all(),
        classes,
        records.years.fetch_all(),
    )
    return joined, classes


@router.get('')
def list_incidents(
    search: str = Query(default=''),
    status: str = Query(default=ALL),
    category: str = Query(default=ALL),
    class_id: str = Query(default=ALL, alias='class'),
    month: str = Query(default=ALL),
    sort: Literal['ASC', 'DESC'] = Query(default='DESC'),
    records: RecordStore = Depends(get_records),
):
    joined, classes = load_joined_incidents(records)
    filters = IncidentFilters(search=search, status=status, category=category, class_id=class_id, month=month)
    rows = sort_by_datetime(filter_incidents(joined, filters), descending=sort == 'DESC')
    return {
        'items': [row.to_wire() for row in rows],
        'months': available_months(joined),
        'classes': [row.to_wire() for row in sort_classes(classes)],
    }


@router.get('/{incident_id}')
def get_one(incident_id: str, records: RecordStore = Depends(get_records)):
    incident = get_incident(records, incident_id)
    if incident is None:
        raise HTTPException(status_code=404, detail='Incident not found')
    return incident.to_wire()


@router.post('')
def create(payload: IncidentPayload, records: RecordStore = Depends(get_records)):
    return add_incident(records, payload.model_dump()).to_wire()


@router.put('/{incident_id}')
def update(incident_id: str, payload: IncidentPayload, records: RecordStore = Depends(get_records)):
    return update_incident(records, incident_id, payload.model_dump()).to_wire()


@router.delete('/{incident_id}')
def delete(incident_id: str, records: RecordStore = Depends(get_records)):
    delete_incident(records, incident_id)
    return {'deleted': incident_id}
