from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from pydantic import BaseModel

from app.config import settings


logger = logging.getLogger(__name__)

_SHARE_LINK_RE = re.compile(r'^(https?://[^/]+)/s/([a-zA-Z0-9]+)')
PUBLIC_SHARE_MARKER = 'public.php/webdav'


class StoreConfig(BaseModel):
    url: str = ''
    user: str = ''
    token: str = ''
    path: str = ''


def _config_path(path: str | Path | None = None) -> Path:
    return Path(path or settings.store_config_file)


def fallback_store_config() -> StoreConfig:
    return StoreConfig(
        url=settings.webdav_url,
        user=settings.webdav_user,
        token=settings.webdav_token,
        path=settings.webdav_path,
    )


def load_store_config(path: str | Path | None = None) -> StoreConfig:
    config_file = _config_path(path)
    if config_file.exists():
        try:
            raw = json.loads(config_file.read_text(encoding='utf-8'))
        except json.JSONDecodeError:
            logger.warning('store_config_unreadable', extra={'path': str(config_file)})
        else:
            return StoreConfig.model_validate(raw)
    return fallback_store_config()


def save_store_config(config: StoreConfig, path: str | Path | None = None) -> StoreConfig:
    url = (config.url or '').strip()
    if url and not url.startswith(('http://', 'https://')):
        raise ValueError('URL must start with http:// or https://')
    cleaned = config.model_copy(update={'url': url})
    config_file = _config_path(path)
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(json.dumps(cleaned.model_dump(), indent=2), encoding='utf-8')
    logger.info('store_config_saved', extra={'path': str(config_file), 'url': cleaned.url})
    return cleaned


def is_configured(config: StoreConfig) -> bool:
    if not config.url or not config.user:
        return False
    # Public shares authenticate with the share token as user and an empty password.
    return bool(config.token) or PUBLIC_SHARE_MARKER in config.url


def import_share_link(link: str) -> StoreConfig:
    """Turn a Nextcloud public share link (https://host/s/TOKEN) into a store config."""
    match = _SHARE_LINK_RE.match((link or '').strip())
    if not match:
        raise ValueError('Unrecognized share link, expected https://<host>/s/<token>')
    domain, token = match.group(1), match.group(2)
    return StoreConfig(url=f'{domain}/{PUBLIC_SHARE_MARKER}', user=token, token='', path='')
