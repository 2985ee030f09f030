import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from nestor import settings_store


class SettingsStoreTestCase(unittest.TestCase):
    def test_missing_file_returns_defaults(self):
        with tempfile.TemporaryDirectory() as td:
            with patch.object(settings_store, "SETTINGS_PATH", Path(td) / "settings.ini"):
                data = settings_store.load_settings()
        self.assertEqual(settings_store.DEFAULT_SETTINGS, data)

    def test_load_sanitizes_unknown_values(self):
        with tempfile.TemporaryDirectory() as td:
            ini_path = Path(td) / "settings.ini"
            ini_path.write_text(
                "[nestor]\n"
                "card_style = Fancy\n"
                "log_level = debug\n"
                "log_path =\n"
                "snapshot_path = board.png \n",
                encoding="utf-8",
            )
            data = settings_store.load_settings(ini_path)
        self.assertEqual("Symbols", data["card_style"])
        self.assertEqual("DEBUG", data["log_level"])
        self.assertEqual("nestor.log", data["log_path"])
        self.assertEqual("board.png", data["snapshot_path"])

    def test_file_without_section_returns_defaults(self):
        with tempfile.TemporaryDirectory() as td:
            ini_path = Path(td) / "settings.ini"
            ini_path.write_text("[other]\ncard_style = Letters\n", encoding="utf-8")
            self.assertEqual(settings_store.DEFAULT_SETTINGS, settings_store.load_settings(ini_path))
            ini_path.write_text("not an ini file", encoding="utf-8")
            self.assertEqual(settings_store.DEFAULT_SETTINGS, settings_store.load_settings(ini_path))

    def test_save_then_load(self):
        with tempfile.TemporaryDirectory() as td:
            ini_path = Path(td) / "nested" / "settings.ini"
            with patch.object(settings_store, "SETTINGS_PATH", ini_path):
                settings_store.save_settings(
                    {
                        "card_style": "Letters",
                        "log_level": "WARNING",
                        "log_path": "games/nestor.log",
                        "snapshot_path": "",
                        "theme": "ignored",
                    }
                )
                text = ini_path.read_text(encoding="utf-8")
                data = settings_store.load_settings()
        self.assertIn("card_style = Letters", text)
        self.assertNotIn("theme", text)
        self.assertEqual("Letters", data["card_style"])
        self.assertEqual("WARNING", data["log_level"])
        self.assertEqual("games/nestor.log", data["log_path"])

    def test_paths_with_percent_sign_are_kept_verbatim(self):
        with tempfile.TemporaryDirectory() as td:
            ini_path = Path(td) / "settings.ini"
            log_path = str(Path(td) / "100%.log")
            settings_store.save_settings({"log_path": log_path, "snapshot_path": "%(home)s/board.png"}, ini_path)
            data = settings_store.load_settings(ini_path)
            self.assertEqual(log_path, data["log_path"])
            self.assertEqual("%(home)s/board.png", data["snapshot_path"])

            ini_path.write_text("[nestor]\nlog_path = 100%.log\n", encoding="utf-8")
            self.assertEqual("100%.log", settings_store.load_settings(ini_path)["log_path"])


if __name__ == "__main__":
    unittest.main()
