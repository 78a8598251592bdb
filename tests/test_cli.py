import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from _support import make_cfg

from birthdaybox.app.cli import cmd_draw, cmd_export, cmd_history
from birthdaybox.history.store import HistoryStore
from birthdaybox.main import cli
from birthdaybox.quotes.catalog import Category, load_catalog


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.cfg = make_cfg(self._tmp.name)
        self.history_path = Path(self.cfg["storage"]["path"])

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _stored(self, cat: Category):
        store = HistoryStore(self.history_path)
        store.load()
        return store.all(cat)

    def test_draw_records_and_prints_result(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            code = cmd_draw(self.cfg, Category.BIRTHDAY, password="2025", animate=False, seed=1)
        self.assertEqual(code, 0)
        records = self._stored(Category.BIRTHDAY)
        self.assertEqual(len(records), 1)
        self.assertIn(records[0].text, load_catalog().pool(Category.BIRTHDAY))
        self.assertIn(records[0].text, out.getvalue())
        self.assertIn("MESSAGE FOR YOU", out.getvalue())

    def test_wrong_password_draws_nothing(self) -> None:
        err = io.StringIO()
        with redirect_stderr(err), redirect_stdout(io.StringIO()):
            code = cmd_draw(self.cfg, Category.JOY, password="2024", animate=False)
        self.assertEqual(code, 1)
        self.assertIn("密码错误", err.getvalue())
        self.assertFalse(self.history_path.exists())

    def test_prompts_for_password_when_not_given(self) -> None:
        prompts = []

        def ask(prompt: str) -> str:
            prompts.append(prompt)
            return "2025"

        with redirect_stdout(io.StringIO()):
            code = cmd_history(self.cfg, Category.ANSWERS, ask=ask)
        self.assertEqual(code, 0)
        self.assertEqual(len(prompts), 1)

    def test_history_lists_newest_first(self) -> None:
        with redirect_stdout(io.StringIO()):
            for seed in (1, 2):
                cmd_draw(self.cfg, Category.SORROW, password="2025", animate=False, seed=seed)
        records = self._stored(Category.SORROW)

        out = io.StringIO()
        with redirect_stdout(out):
            code = cmd_history(self.cfg, Category.SORROW, password="2025")
        self.assertEqual(code, 0)
        text = out.getvalue()
        self.assertIn("共 2 条", text)
        lines = [ln for ln in text.splitlines() if ln.startswith("  ")]
        self.assertTrue(lines[0].endswith(records[1].text))
        self.assertTrue(lines[1].endswith(records[0].text))

    def test_history_empty_state(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            cmd_history(self.cfg, Category.FEAR, password="2025")
        self.assertIn("还没有记录哦", out.getvalue())

    def test_export_writes_ndjson(self) -> None:
        with redirect_stdout(io.StringIO()):
            cmd_draw(self.cfg, Category.JOY, password="2025", animate=False)
            target = Path(self._tmp.name) / "out" / "h.ndjson"
            self.assertEqual(cmd_export(self.cfg, str(target)), 0)
        rows = [json.loads(ln) for ln in target.read_text(encoding="utf-8").splitlines()]
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["category"], "JOY")

    def test_version_flag(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            self.assertEqual(cli(["--version"]), 0)
        self.assertTrue(out.getvalue().startswith("birthdaybox "))

    def test_unknown_category_is_rejected(self) -> None:
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            cli(["draw", "LOVE"])
        self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
