import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from app.config import settings
from app.services.store_config_service import (
    StoreConfig,
    import_share_link,
    is_configured,
    load_store_config,
    save_store_config,
)


class ShareLinkImportTests(unittest.TestCase):
    def test_public_share_link_becomes_webdav_config(self):
        config = import_share_link('https://cloud.schule.de/s/AbCdEf123')
        self.assertEqual(
            config,
            StoreConfig(url='https://cloud.schule.de/public.php/webdav', user='AbCdEf123', token='', path=''),
        )

    def test_trailing_parts_after_token_are_ignored(self):
        config = import_share_link('https://cloud.schule.de/s/AbC123/download')
        self.assertEqual(config.user, 'AbC123')

    def test_unrecognized_link_is_rejected(self):
        with self.assertRaises(ValueError):
            import_share_link('https://cloud.schule.de/index.php/apps/files')

    def test_imported_share_counts_as_configured(self):
        self.assertTrue(is_configured(import_share_link('https://cloud.schule.de/s/AbC123')))


class StoreConfigPersistenceTests(unittest.TestCase):
    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.path = Path(self._tmpdir.name) / 'nc_config.json'

    def tearDown(self):
        self._tmpdir.cleanup()

    def test_missing_file_falls_back_to_settings(self):
        with patch.object(settings, 'webdav_url', 'https://fallback.example'), patch.object(settings, 'webdav_user', 'u'):
            config = load_store_config(self.path)
        self.assertEqual(config.url, 'https://fallback.example')
        self.assertEqual(config.user, 'u')
        self.assertEqual(config.path, settings.webdav_path)

    def test_saved_config_is_loaded_back(self):
        saved = save_store_config(
            StoreConfig(url=' https://cloud.example.org ', user='lehrer', token='t', path='Daten'),
            self.path,
        )
        self.assertEqual(saved.url, 'https://cloud.example.org')
        self.assertEqual(load_store_config(self.path), saved)
        self.assertEqual(json.loads(self.path.read_text(encoding='utf-8'))['user'], 'lehrer')

    def test_url_without_scheme_is_rejected(self):
        with self.assertRaises(ValueError):
            save_store_config(StoreConfig(url='cloud.example.org', user='u', token='t'), self.path)
        self.assertFalse(self.path.exists())

    def test_credentials_are_required(self):
        self.assertFalse(is_configured(StoreConfig(url='https://cloud.example.org', user='u', token='')))
        self.assertFalse(is_configured(StoreConfig(url='', user='u', token='t')))
        self.assertTrue(is_configured(StoreConfig(url='https://cloud.example.org', user='u', token='t')))


if __name__ == '__main__':
    unittest.main()
