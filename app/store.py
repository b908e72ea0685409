from app.services.collection_repository import RecordStore
from app.services.store_config_service import is_configured, load_store_config
from app.services.webdav_store import StoreNotConfiguredError, WebDAVStore


def get_records() -> RecordStore:
    # Re-read on every request so a saved connection takes effect without a restart.
    config = load_store_config()
    if not is_configured(config):
        raise StoreNotConfiguredError()
    return RecordStore(WebDAVStore(config))
