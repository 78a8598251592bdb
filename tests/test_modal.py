import random
import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from _support import FakeClock, make_catalog

from birthdaybox.draw.engine import DrawEngine, DrawPhase, EmptyPoolError
from birthdaybox.draw.scheduler import LoopScheduler
from birthdaybox.history.schema import QuoteRecord
from birthdaybox.history.store import HistoryStore
from birthdaybox.app.modal import ModalController, format_timestamp
from birthdaybox.quotes.catalog import Category


class ModalControllerTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.store = HistoryStore(Path(self._tmp.name) / "history.json")
        self.store.load()
        self.scheduler = LoopScheduler()
        self.engine = DrawEngine(
            make_catalog({Category.FEAR: []}),
            self.store,
            self.scheduler,
            steps=5,
            interval_ms=100,
            rng=random.Random(3),
            clock=FakeClock(),
        )
        self.changes = []
        self.modal = ModalController(self.engine, on_change=lambda m: self.changes.append(m.view))

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_open_starts_on_menu(self) -> None:
        self.modal.open(Category.JOY)
        self.assertTrue(self.modal.is_open)
        self.assertEqual(self.modal.view, "menu")
        self.assertEqual(self.modal.meta.label, "JOY")

    def test_draw_goes_through_drawing_to_result(self) -> None:
        self.modal.open(Category.JOY)
        handle = self.modal.draw_new()
        self.assertEqual(self.modal.view, "drawing")
        self.assertNotEqual(self.modal.current_text, "")
        self.scheduler.run()
        self.assertEqual(self.modal.view, "result")
        self.assertEqual(self.modal.current_text, handle.record.text)
        self.assertIn("drawing", self.changes)
        self.assertEqual(self.changes[-1], "result")

    def test_close_cancels_in_flight_draw(self) -> None:
        self.modal.open(Category.SORROW)
        handle = self.modal.draw_new()
        self.modal.close()
        self.assertFalse(self.modal.is_open)
        self.assertIs(handle.phase, DrawPhase.CANCELLED)
        self.assertEqual(self.scheduler.run(), 0)
        self.assertEqual(self.store.all(Category.SORROW), ())

    def test_opening_another_category_cancels(self) -> None:
        self.modal.open(Category.JOY)
        first = self.modal.draw_new()
        self.modal.open(Category.ANGER)
        self.assertEqual(self.modal.view, "menu")
        self.assertIs(first.phase, DrawPhase.CANCELLED)
        self.scheduler.run()
        self.assertEqual(self.store.all(Category.JOY), ())

    def test_draw_again_from_result(self) -> None:
        self.modal.open(Category.BIRTHDAY)
        self.modal.draw_new()
        self.scheduler.run()
        self.modal.draw_new()
        self.assertEqual(self.modal.view, "drawing")
        self.scheduler.run()
        self.assertEqual(len(self.store.all(Category.BIRTHDAY)), 2)

    def test_history_is_newest_first(self) -> None:
        self.store.append(Category.JOY, QuoteRecord(id="1", text="old", timestamp=1))
        self.store.append(Category.JOY, QuoteRecord(id="2", text="new", timestamp=2))
        self.modal.open(Category.JOY)
        self.modal.show_history()
        self.assertEqual(self.modal.view, "history")
        self.assertEqual([r.text for r in self.modal.history_items()], ["new", "old"])
        self.modal.show_menu()
        self.assertEqual(self.modal.view, "menu")

    def test_history_count_follows_open_category(self) -> None:
        self.assertEqual(self.modal.history_count(), 0)
        self.store.append(Category.JOY, QuoteRecord(id="1", text="a", timestamp=1))
        self.store.append(Category.JOY, QuoteRecord(id="2", text="b", timestamp=2))
        self.modal.open(Category.JOY)
        self.assertEqual(self.modal.history_count(), 2)
        self.modal.open(Category.ANGER)
        self.assertEqual(self.modal.history_count(), 0)

    def test_empty_pool_returns_to_menu(self) -> None:
        self.modal.open(Category.FEAR)
        with self.assertRaises(EmptyPoolError):
            self.modal.draw_new()
        self.assertEqual(self.modal.view, "menu")

    def test_zero_step_draw_lands_on_result(self) -> None:
        self.engine.steps = 0
        self.modal.open(Category.ANSWERS)
        self.modal.draw_new()
        self.assertEqual(self.modal.view, "result")
        self.assertEqual(len(self.store.all(Category.ANSWERS)), 1)

    def test_format_timestamp(self) -> None:
        ts = 1700000000000
        expected = datetime.fromtimestamp(ts / 1000).strftime("%m/%d %H:%M")
        self.assertEqual(format_timestamp(ts, "%m/%d %H:%M"), expected)


if __name__ == "__main__":
    unittest.main()
