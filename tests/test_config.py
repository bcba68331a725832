import os
import tempfile
import unittest
from pathlib import Path

from pydantic import ValidationError

from songs_app.config import Settings, find_config, load_settings


class TestSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = Settings()
        self.assertEqual(settings.storage.format, "xml")
        self.assertEqual(settings.storage.songs_file, "songs")
        self.assertEqual(settings.logging.level, "WARNING")

    def test_load_yaml(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "songs-app.yaml"
            path.write_text(
                "storage:\n  format: YML\n  data_dir: ~/music-data\nlogging:\n  debug_log: null\n",
                encoding="utf-8",
            )
            settings = Settings.load(path)
        self.assertEqual(settings.storage.format, "yaml")
        self.assertTrue(settings.storage.data_dir.is_absolute())
        self.assertEqual(settings.storage.data_dir.name, "music-data")
        self.assertIsNone(settings.logging.debug_log)

    def test_empty_file_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "songs-app.yaml"
            path.write_text("", encoding="utf-8")
            self.assertEqual(Settings.load(path), Settings())

    def test_rejects_unknown_format(self) -> None:
        with self.assertRaises(ValidationError):
            Settings.model_validate({"storage": {"format": "csv"}})


class TestFindConfig(unittest.TestCase):
    def setUp(self) -> None:
        self._cwd = Path.cwd()
        self._tmp = tempfile.TemporaryDirectory()
        os.chdir(self._tmp.name)

    def tearDown(self) -> None:
        os.chdir(self._cwd)
        self._tmp.cleanup()

    def test_no_config_means_defaults(self) -> None:
        self.assertIsNone(find_config(None))
        self.assertEqual(load_settings(None), Settings())

    def test_finds_config_in_cwd(self) -> None:
        Path("songs-app.yml").write_text("storage:\n  format: json\n", encoding="utf-8")
        self.assertEqual(find_config(None).name, "songs-app.yml")
        self.assertEqual(load_settings().storage.format, "json")

    def test_explicit_missing_path(self) -> None:
        with self.assertRaises(FileNotFoundError):
            find_config(Path("missing.yaml"))


if __name__ == "__main__":
    unittest.main()
