from __future__ import annotations

import random
import secrets
from dataclasses import asdict

from fastapi import APIRouter, Depends, Header, HTTPException

from app.config import settings
from app.schemas import DemoDataRequest, ShareLinkImportRequest
from app.services.collection_repository import RecordStore
from app.services.demo_data_service import generate_demo_data
from app.services.store_config_service import (
    StoreConfig,
    import_share_link,
    is_configured,
    load_store_config,
    save_store_config,
)
from app.store import get_records


def _require_admin(x_admin_password: str | None = Header(default=None)) -> None:
    if not x_admin_password or not secrets.compare_digest(
        x_admin_password.encode(), settings.settings_admin_password.encode()
    ):
        raise HTTPException(status_code=403, detail='Admin password required')


router = APIRouter(prefix='/api/settings', tags=['Settings'], dependencies=[Depends(_require_admin)])


def _public_view(config: StoreConfig) -> dict:
    return {
        'url': config.url,
        'user': config.user,
        'path': config.path,
        'token_set': bool(config.token),
        'configured': is_configured(config),
    }


@router.get('')
def get_settings():
    return _public_view(load_store_config())


@router.put('')
def put_settings(payload: StoreConfig):
    try:
        saved = save_store_config(payload)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _public_view(saved)


@router.post('/import-share-link')
def import_link(payload: ShareLinkImportRequest):
    # Returned for review only; the caller saves it explicitly.
    try:
        return import_share_link(payload.link).model_dump()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post('/test-connection')
def test_connection(records: RecordStore = Depends(get_records)):
    years = records.years.fetch_all()
    return {'ok': True, 'years': len(years)}


@router.post('/demo-data')
def demo_data(payload: DemoDataRequest, records: RecordStore = Depends(get_records)):
    rng = random.Random(payload.seed) if payload.seed is not None else None
    summary = generate_demo_data(records, rng=rng)
    return {'ok': True, **asdict(summary)}
