import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.config import settings
from app.routers import dashboard, incidents, meetings, print_views, protocols, structure
from app.routers import settings as settings_router
from app.services.webdav_store import RemoteStoreError, StoreNetworkError, StoreNotConfiguredError

logging.basicConfig(
    level=getattr(logging, (settings.log_level or 'INFO').upper(), logging.INFO),
    format='%(asctime)s %(levelname)s %(name)s %(message)s',
)
logger = logging.getLogger(__name__)


app = FastAPI(title=settings.app_name, version='0.1.0')


@app.exception_handler(StoreNotConfiguredError)
async def store_not_configured_handler(_: Request, exc: StoreNotConfiguredError):
    return JSONResponse(
        status_code=503,
        content={'detail': str(exc), 'setup_required': True, 'settings_url': '/api/settings'},
    )


@app.exception_handler(RemoteStoreError)
async def remote_store_error_handler(request: Request, exc: RemoteStoreError):
    logger.warning('remote_store_error', extra={'path': request.url.path, 'status_code': exc.status_code})
    return JSONResponse(
        status_code=502,
        content={'detail': str(exc), 'upstream_status': exc.status_code, 'upstream_body': exc.body},
    )


@app.exception_handler(StoreNetworkError)
async def store_network_error_handler(request: Request, exc: StoreNetworkError):
    logger.warning('store_network_error', extra={'path': request.url.path})
    return JSONResponse(status_code=504, content={'detail': str(exc)})


@app.get('/health')
def health():
    return {'status': 'ok', 'app': settings.app_name}


app.include_router(dashboard.router)
app.include_router(incidents.router)
app.include_router(protocols.router)
app.include_router(meetings.router)
app.include_router(structure.router)
app.include_router(settings_router.router)
app.include_router(print_views.router)
