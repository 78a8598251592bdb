import tempfile
import unittest
from pathlib import Path

from birthdaybox.config.config import load_config, storage_path, validate_config


class ConfigTests(unittest.TestCase):
    def test_package_defaults(self) -> None:
        cfg = validate_config(load_config())
        self.assertEqual(cfg["gate"]["secret"], "2025")
        self.assertEqual(cfg["gate"]["error_message"], "密码错误，请重试")
        self.assertEqual(cfg["draw"]["steps"], 20)
        self.assertEqual(cfg["draw"]["interval_ms"], 100)
        self.assertEqual(cfg["storage"]["slot"], "birthday_app_history")
        self.assertIsNone(cfg["quotes"]["path"])
        self.assertEqual(storage_path(cfg).name, "birthday_app_history.json")
        self.assertTrue(storage_path(cfg).is_absolute())

    def test_missing_sections_get_defaults(self) -> None:
        cfg = validate_config({"draw": "garbage"})
        self.assertEqual(cfg["draw"]["steps"], 20)
        self.assertEqual(cfg["ui"]["title"], "Happy Birthday")

    def test_numeric_secret_is_compared_as_string(self) -> None:
        cfg = validate_config({"gate": {"secret": 2025}})
        self.assertEqual(cfg["gate"]["secret"], "2025")

    def test_invalid_numbers_fall_back(self) -> None:
        with self.assertLogs("birthdaybox.config.config", level="WARNING"):
            cfg = validate_config({"draw": {"steps": -3, "interval_ms": "fast"}})
        self.assertEqual(cfg["draw"]["steps"], 20)
        self.assertEqual(cfg["draw"]["interval_ms"], 100)

    def test_zero_steps_is_allowed(self) -> None:
        cfg = validate_config({"draw": {"steps": 0}})
        self.assertEqual(cfg["draw"]["steps"], 0)

    def test_load_explicit_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "c.yml"
            p.write_text("draw:\n  steps: 5\n", encoding="utf-8")
            cfg = validate_config(load_config(str(p)))
        self.assertEqual(cfg["draw"]["steps"], 5)
        self.assertEqual(cfg["gate"]["secret"], "2025")

    def test_missing_explicit_file_exits(self) -> None:
        with self.assertRaises(SystemExit):
            load_config("/nonexistent/birthdaybox.yml")


if __name__ == "__main__":
    unittest.main()
