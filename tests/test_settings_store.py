import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from term_ui import settings_store


class SettingsStoreTestCase(unittest.TestCase):
    def test_missing_file_gives_defaults(self):
        with tempfile.TemporaryDirectory() as td:
            ini_path = Path(td) / "settings.ini"
            with patch.object(settings_store, "SETTINGS_PATH", ini_path):
                data = settings_store.load_settings()
        self.assertEqual(settings_store.DEFAULT_SETTINGS, data)

    def test_save_then_load(self):
        with tempfile.TemporaryDirectory() as td:
            ini_path = Path(td) / "settings.ini"
            with patch.object(settings_store, "SETTINGS_PATH", ini_path):
                settings_store.save_settings({"columns": 8, "num_suits": 4, "num_decks": 2})
                text = ini_path.read_text(encoding="utf-8")
                data = settings_store.load_settings()
        self.assertIn("[game]", text)
        self.assertIn("num_suits = 4", text)
        self.assertEqual({"columns": "8", "num_suits": "4", "num_decks": "2"}, data)

    def test_invalid_values_fall_back(self):
        with tempfile.TemporaryDirectory() as td:
            ini_path = Path(td) / "settings.ini"
            ini_path.write_text(
                "[game]\n"
                "columns = ten\n"
                "num_suits = 3\n"
                "num_decks = 0\n"
                "theme = Forest\n",
                encoding="utf-8",
            )
            with patch.object(settings_store, "SETTINGS_PATH", ini_path):
                data = settings_store.load_settings()
        self.assertEqual(settings_store.DEFAULT_SETTINGS, data)

    def test_layout_that_does_not_fit_resets_everything(self):
        data = settings_store._sanitize({"columns": "30", "num_suits": "2", "num_decks": "1"})
        self.assertEqual(settings_store.DEFAULT_SETTINGS, data)

    def test_to_config(self):
        cfg = settings_store.to_config({"columns": "10", "num_suits": "2", "num_decks": "2"})
        self.assertEqual((10, 2, 2), (cfg.columns, cfg.num_suits, cfg.num_decks))


if __name__ == "__main__":
    unittest.main()
