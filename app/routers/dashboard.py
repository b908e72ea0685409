from fastapi import APIRouter, Depends, HTTPException

from app.services.collection_repository import RecordStore
from app.services.dashboard_service import build_dashboard, recent_entries
from app.store import get_records


router = APIRouter(prefix='/api/dashboard', tags=['Dashboard'])


@router.get('')
def dashboard(records: RecordStore = Depends(get_records)):
    return build_dashboard(records)


@router.get('/recent/{kind}')
def recent(kind: str, records: RecordStore = Depends(get_records)):
    try:
        return recent_entries(records, kind)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
