"""
Unit tests for the calculator controller, with in-memory stores.
"""
import unittest
from datetime import datetime, timedelta, timezone

from app.projects.calculator.core.controller import CalculatorController
from app.projects.calculator.core.history import HistoryEntry, format_timestamp, history_rows


class FakeStore:
    """Records every save; load returns the initial value."""

    def __init__(self, value):
        self.value = value
        self.saves = []

    def load(self):
        return self.value

    def save(self, value):
        self.value = list(value) if isinstance(value, list) else value
        self.saves.append(self.value)


class FakeClock:

    def __init__(self):
        self.now = datetime(2026, 1, 23, 15, 45, tzinfo=timezone.utc)

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


def make_controller(buffer="", history=None, theme="light", limit=200):
    history_store = FakeStore(history or [])
    theme_store = FakeStore(theme)
    controller = CalculatorController(
        history_store=history_store,
        theme_store=theme_store,
        buffer=buffer,
        clock=FakeClock(),
        history_limit=limit,
    )
    return controller, history_store, theme_store


class TestPress(unittest.TestCase):

    def test_typing_and_evaluating(self):
        controller, history_store, _ = make_controller()
        for key in "5+3":
            controller.press(key)
        controller.press("Enter")
        self.assertEqual(controller.buffer, "8")
        self.assertEqual(controller.history[0].expression, "5+3")
        self.assertEqual(controller.history[0].result, "8")
        self.assertEqual(len(history_store.saves), 1)

    def test_backspace_and_escape(self):
        controller, _, _ = make_controller(buffer="123")
        controller.press("Backspace")
        self.assertEqual(controller.buffer, "12")
        controller.press("Escape")
        self.assertEqual(controller.buffer, "")

    def test_unmapped_key_ignored(self):
        controller, _, _ = make_controller(buffer="1")
        self.assertFalse(controller.press("x"))
        self.assertEqual(controller.buffer, "1")

    def test_digit_after_error(self):
        controller, _, _ = make_controller(buffer="Error")
        controller.press("4")
        self.assertEqual(controller.buffer, "4")


class TestEvaluate(unittest.TestCase):

    def test_empty_buffer_is_noop(self):
        controller, history_store, _ = make_controller(buffer="  ")
        self.assertIsNone(controller.evaluate())
        self.assertEqual(controller.history, [])
        self.assertEqual(history_store.saves, [])

    def test_invalid_expression_shows_error_without_history(self):
        controller, history_store, _ = make_controller(buffer="5+")
        self.assertEqual(controller.evaluate(), "Error")
        self.assertEqual(controller.buffer, "Error")
        self.assertEqual(controller.history, [])
        self.assertEqual(history_store.saves, [])

    def test_division_by_zero_recorded_as_sentinel(self):
        controller, _, _ = make_controller(buffer="5/0")
        self.assertEqual(controller.evaluate(), "Infinity")
        self.assertEqual(controller.history[0].result, "Infinity")

    def test_nan_recorded(self):
        controller, _, _ = make_controller(buffer="0/0")
        self.assertEqual(controller.evaluate(), "NaN")
        self.assertEqual(controller.history[0].result, "NaN")

    def test_percent_result(self):
        controller, _, _ = make_controller(buffer="200-10%")
        self.assertEqual(controller.evaluate(), "199.9")

    def test_deeply_nested_buffer_shows_error(self):
        controller, history_store, _ = make_controller(buffer="(" * 400 + "1")
        self.assertEqual(controller.evaluate(), "Error")
        self.assertEqual(controller.buffer, "Error")
        self.assertEqual(history_store.saves, [])


class TestHistory(unittest.TestCase):

    def test_newest_first(self):
        controller, _, _ = make_controller()
        controller.record("1+1", "2")
        controller.record("2+2", "4")
        self.assertEqual([e.expression for e in controller.history], ["2+2", "1+1"])

    def test_capped_at_limit(self):
        controller, history_store, _ = make_controller()
        for i in range(201):
            controller.record(f"{i}+0", str(i))
        self.assertEqual(len(controller.history), 200)
        self.assertEqual(controller.history[0].expression, "200+0")
        self.assertNotIn("0+0", [e.expression for e in controller.history])
        self.assertEqual(len(history_store.value), 200)

    def test_loaded_history_truncated_to_limit(self):
        stamp = datetime(2026, 1, 1, tzinfo=timezone.utc)
        entries = [HistoryEntry(str(i), str(i), stamp) for i in range(5)]
        controller, _, _ = make_controller(history=entries, limit=3)
        self.assertEqual(len(controller.history), 3)

    def test_restore_puts_expression_in_buffer_without_evaluating(self):
        controller, history_store, _ = make_controller()
        controller.record("7*6", "42")
        controller.press("9")
        controller.restore(0)
        self.assertEqual(controller.buffer, "7*6")
        self.assertEqual(len(controller.history), 1)

    def test_restore_bad_index(self):
        controller, _, _ = make_controller()
        with self.assertRaises(IndexError):
            controller.restore(0)
        with self.assertRaises(IndexError):
            controller.restore(-1)

    def test_clear_history(self):
        controller, history_store, _ = make_controller()
        controller.record("1+1", "2")
        controller.clear_history()
        self.assertEqual(controller.history, [])
        self.assertEqual(history_store.value, [])

    def test_sample_data(self):
        controller, _, _ = make_controller()
        controller.add_sample_data()
        pairs = [(e.expression, e.result) for e in controller.history]
        self.assertEqual(pairs, [
            ("200-10%", "199.9"),
            ("50%", "0.5"),
            ("7*6", "42"),
            ("12/4", "3"),
            ("5+3", "8"),
        ])


class TestTheme(unittest.TestCase):

    def test_toggle_saves(self):
        controller, _, theme_store = make_controller(theme="light")
        self.assertEqual(controller.toggle_theme(), "dark")
        self.assertEqual(controller.toggle_theme(), "light")
        self.assertEqual(theme_store.saves, ["dark", "light"])

    def test_missing_theme_defaults_to_light(self):
        controller, _, _ = make_controller(theme=None)
        self.assertEqual(controller.theme, "light")


class TestHistoryRows(unittest.TestCase):

    def test_rows(self):
        stamp = datetime(2026, 1, 23, 20, 45, tzinfo=timezone.utc)
        rows = history_rows([HistoryEntry("5+3", "8", stamp)], "America/New_York")
        self.assertEqual(rows, [{
            "index": 0,
            "expression": "5+3",
            "result": "8",
            "time": "Jan 23, 2026 3:45 PM",
        }])

    def test_naive_timestamp_treated_as_utc(self):
        self.assertEqual(format_timestamp(datetime(2026, 1, 23, 9, 5)), "Jan 23, 2026 9:05 AM")

    def test_to_dict(self):
        controller, _, _ = make_controller(buffer="1+")
        state = controller.to_dict()
        self.assertEqual(state["display"], "1+")
        self.assertEqual(state["state"], "has-trailing-operator")
        self.assertEqual(state["theme"], "light")
        self.assertEqual(state["history"], [])


if __name__ == "__main__":
    unittest.main()
