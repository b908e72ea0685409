from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from app.config import settings
from app.services.store_config_service import PUBLIC_SHARE_MARKER, StoreConfig, is_configured


logger = logging.getLogger(__name__)

USER_FILES_MARKER = 'remote.php/dav/files'
NETWORK_ERROR_HINT = (
    'Network error: access denied (CORS) or server unreachable. Please check the URL.'
)


class StoreError(RuntimeError):
    pass


class StoreNotConfiguredError(StoreError):
    def __init__(self, message: str = 'Remote store is not configured') -> None:
        super().__init__(message)


class RemoteStoreError(StoreError):
    def __init__(self, status_code: int, body: str, reason: str = '') -> None:
        self.status_code = status_code
        self.body = body
        self.reason = reason
        super().__init__(f'Remote store error ({status_code}): {reason} - {body[:300]}')


class StoreNetworkError(StoreError):
    def __init__(self, message: str = NETWORK_ERROR_HINT) -> None:
        super().__init__(message)


def _clean_part(value: str | None) -> str:
    return (value or '').strip('/')


def build_file_url(config: StoreConfig, filename: str) -> str:
    base_url = (config.url or '').rstrip('/')
    if USER_FILES_MARKER not in base_url and PUBLIC_SHARE_MARKER not in base_url:
        base_url += f'/{USER_FILES_MARKER}/{quote(config.user, safe="")}'
    sub_path = _clean_part(config.path)
    if sub_path:
        base_url += f'/{sub_path}'
    return f'{base_url}/{_clean_part(filename)}'


class WebDAVStore:
    """Whole-file JSON reads and writes against a WebDAV folder.

    Every call is a single GET or PUT. Nothing is cached, retried or locked:
    two writers doing read-modify-write on the same file race and the last PUT wins.
    """

    def __init__(
        self,
        config: StoreConfig,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config
        self.timeout = timeout if timeout is not None else settings.webdav_timeout_seconds
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self.timeout,
            transport=self.transport,
            auth=httpx.BasicAuth(self.config.user, self.config.token),
            headers={'Content-Type': 'application/json', 'Cache-Control': 'no-store'},
        )

    def _request(self, method: str, filename: str, body: str | None = None) -> httpx.Response:
        if not is_configured(self.config):
            raise StoreNotConfiguredError()
        url = build_file_url(self.config, filename)
        logger.info('webdav_request', extra={'method': method, 'url': url})
        try:
            with self._client() as client:
                return client.request(method, url, content=body)
        except httpx.TransportError as exc:
            logger.error('webdav_network_error', extra={'method': method, 'url': url, 'error': str(exc)})
            raise StoreNetworkError() from exc

    def read_collection(self, filename: str) -> list[dict[str, Any]]:
        response = self._request('GET', filename)
        if response.status_code == 404:
            # Never written yet: treat as an empty collection.
            return []
        if not response.is_success:
            self._raise_remote_error('GET', filename, response)
        try:
            payload = response.json()
        except json.JSONDecodeError as exc:
            raise RemoteStoreError(response.status_code, response.text, 'invalid JSON') from exc
        if not isinstance(payload, list):
            raise RemoteStoreError(response.status_code, response.text[:300], 'expected a JSON array')
        return payload

    def write_collection(self, filename: str, items: list[dict[str, Any]]) -> None:
        body = json.dumps(items, ensure_ascii=False)
        response = self._request('PUT', filename, body=body)
        if not response.is_success:
            self._raise_remote_error('PUT', filename, response)

    def _raise_remote_error(self, method: str, filename: str, response: httpx.Response) -> None:
        body = response.text or 'no details'
        logger.error(
            'webdav_error',
            extra={'method': method, 'collection': filename, 'status_code': response.status_code},
        )
        raise RemoteStoreError(response.status_code, body, response.reason_phrase)
