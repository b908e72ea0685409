from __future__ import annotations

from app.models import Incident
from app.services.collection_repository import RecordStore


def add_incident(records: RecordStore, payload: dict) -> Incident:
    return records.incidents.add(payload)


def update_incident(records: RecordStore, incident_id: str, payload: dict) -> Incident:
    data = dict(payload)
    data['id'] = incident_id
    data['created_at'] = data.get('created_at') or records.incidents.time_provider.now_millis()
    incident = Incident.model_validate(data)
    records.incidents.update(incident)
    return incident


def delete_incident(records: RecordStore, incident_id: str) -> None:
    records.incidents.delete(incident_id)


def get_incident(records: RecordStore, incident_id: str) -> Incident | None:
    return records.incidents.get_by_id(incident_id)
