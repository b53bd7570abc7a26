"""Unit tests for the persistent store."""

import json
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from pixelinput import persistence
from pixelinput.constants import InputConstants
from pixelinput.persistence import PersistentStore, default_store_dir, get_store


class TestPersistentStore(unittest.TestCase):
    """Test persistent store functionality."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.store = PersistentStore(Path(self.temp_dir))

    def tearDown(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_missing_key_returns_none(self):
        self.assertIsNone(self.store.get_item("missing"))

    def test_set_and_get(self):
        self.assertTrue(self.store.set_item("key", "value"))
        self.assertEqual(self.store.get_item("key"), "value")

    def test_file_is_json(self):
        self.store.set_item("key", "value")
        with open(self.store.path, 'r', encoding='utf-8') as f:
            self.assertEqual(json.load(f), {"key": "value"})

    def test_no_temp_file_left_behind(self):
        self.store.set_item("key", "value")
        self.assertFalse(self.store.path.with_suffix('.tmp').exists())

    def test_other_instance_sees_value(self):
        self.store.set_item("key", "value")
        other = PersistentStore(Path(self.temp_dir))
        self.assertEqual(other.get_item("key"), "value")

    def test_reload_after_external_change(self):
        self.store.set_item("key", "old")
        other = PersistentStore(Path(self.temp_dir))
        other.set_item("key", "new")
        # Modification times can be coarse; force the next read to go to disk
        self.store.clear_cache()
        self.assertEqual(self.store.get_item("key"), "new")

    def test_remove_item(self):
        self.store.set_item("a", "1")
        self.store.set_item("b", "2")
        self.assertTrue(self.store.remove_item("a"))
        self.assertIsNone(self.store.get_item("a"))
        self.assertEqual(self.store.get_item("b"), "2")
        self.assertTrue(self.store.remove_item("a"))

    def test_clear(self):
        self.store.set_item("a", "1")
        self.store.clear()
        self.assertIsNone(self.store.get_item("a"))

    def test_corrupt_file_is_ignored(self):
        self.store.path.write_text("{not json", encoding='utf-8')
        with self.assertLogs('pixelinput.persistence', level='WARNING'):
            self.assertIsNone(self.store.get_item("key"))
        self.assertTrue(self.store.set_item("key", "value"))
        self.assertEqual(self.store.get_item("key"), "value")

    def test_non_dict_file_is_ignored(self):
        self.store.path.write_text('["a", "b"]', encoding='utf-8')
        with self.assertLogs('pixelinput.persistence', level='WARNING'):
            self.assertIsNone(self.store.get_item("0"))

    def test_non_string_values_are_dropped(self):
        self.store.path.write_text('{"a": 1, "b": "two"}', encoding='utf-8')
        self.assertIsNone(self.store.get_item("a"))
        self.assertEqual(self.store.get_item("b"), "two")

    def test_write_failure_keeps_value_in_memory(self):
        with patch("builtins.open", side_effect=PermissionError("read-only")):
            with self.assertLogs('pixelinput.persistence', level='WARNING'):
                self.assertFalse(self.store.set_item("key", "value"))
        self.assertEqual(self.store.get_item("key"), "value")


def test_store_dir_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv(InputConstants.STORE_DIR_ENV, str(tmp_path))
    assert default_store_dir() == tmp_path


def test_store_dir_defaults_to_user_data_dir(monkeypatch, tmp_path):
    monkeypatch.delenv(InputConstants.STORE_DIR_ENV, raising=False)
    with patch("platformdirs.user_data_dir", return_value=str(tmp_path)) as user_data_dir:
        assert default_store_dir() == tmp_path
    user_data_dir.assert_called_once_with(InputConstants.STORE_APP_NAME)


def test_get_store_is_shared_until_reset():
    store = get_store()
    assert get_store() is store
    persistence.reset_store()
    assert get_store() is not store


def test_set_store_replaces_shared_instance(tmp_path):
    custom = PersistentStore(tmp_path)
    persistence.set_store(custom)
    assert get_store() is custom
