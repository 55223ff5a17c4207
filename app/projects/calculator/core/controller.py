"""
Calculator controller: the single owner of the display buffer, the history
list and the theme for one client.
"""
import logging
from datetime import datetime, timezone

from app.projects.calculator.core.constants import (
    DEFAULT_THEME,
    ERROR_SENTINEL,
    HISTORY_LIMIT,
    SAMPLE_EXPRESSIONS,
    THEME_DARK,
    THEME_LIGHT,
)
from app.projects.calculator.core.display import CalculatorDisplay
from app.projects.calculator.core.evaluator import CalculationError, evaluate, format_result
from app.projects.calculator.core.history import HistoryEntry, history_rows, push_entry
from app.projects.calculator.core.keyboard import Action, map_key

logger = logging.getLogger(__name__)


def _utcnow():
    return datetime.now(timezone.utc)


class CalculatorController:
    """
    Applies UI events to the calculator state.

    history_store and theme_store need `load()` and `save(value)`; they are
    loaded once here and saved after every change.
    """

    def __init__(self, history_store, theme_store, buffer="", clock=None,
                 history_limit=HISTORY_LIMIT):
        self.display = CalculatorDisplay(buffer)
        self.history_store = history_store
        self.theme_store = theme_store
        self.clock = clock or _utcnow
        self.history_limit = history_limit
        self.history = list(history_store.load())[:history_limit]
        self.theme = theme_store.load() or DEFAULT_THEME

    @property
    def buffer(self):
        return self.display.buffer

    # --- Keystrokes ---

    def press(self, key):
        """Dispatch a browser key name. Returns False for unmapped keys."""
        key_action = map_key(key)
        if key_action is None:
            return False
        if key_action.action == Action.APPEND:
            self.append(key_action.value)
        elif key_action.action == Action.EVALUATE:
            self.evaluate()
        elif key_action.action == Action.DELETE:
            self.delete_last()
        elif key_action.action == Action.CLEAR:
            self.clear()
        return True

    def append(self, value):
        return self.display.append(value)

    def delete_last(self):
        self.display.delete_last()

    def clear(self):
        self.display.clear()

    # --- Evaluation & history ---

    def evaluate(self):
        """
        Evaluate the buffer and show the result.

        Returns the displayed text, or None when the buffer is empty.
        """
        if self.display.is_empty:
            return None
        expression = self.display.buffer.strip()
        try:
            result = format_result(evaluate(expression))
        except CalculationError as e:
            logger.info("Could not evaluate %r: %s", expression, e)
            self.display.show(ERROR_SENTINEL)
            return ERROR_SENTINEL
        self.record(expression, result)
        self.display.show(result)
        return result

    def record(self, expression, result):
        entry = HistoryEntry(expression=expression, result=result, timestamp=self.clock())
        push_entry(self.history, entry, self.history_limit)
        self.history_store.save(self.history)
        return entry

    def restore(self, index):
        """Put a past expression back in the buffer without evaluating it."""
        if index < 0:
            raise IndexError(index)
        entry = self.history[index]
        self.display.show(entry.expression)
        return entry

    def clear_history(self):
        self.history = []
        self.history_store.save(self.history)

    def add_sample_data(self):
        for expression in SAMPLE_EXPRESSIONS:
            result = format_result(evaluate(expression))
            entry = HistoryEntry(expression=expression, result=result, timestamp=self.clock())
            push_entry(self.history, entry, self.history_limit)
        self.history_store.save(self.history)

    def history_rows(self, tz_name="UTC"):
        return history_rows(self.history, tz_name)

    # --- Theme ---

    def toggle_theme(self):
        self.theme = THEME_DARK if self.theme == THEME_LIGHT else THEME_LIGHT
        self.theme_store.save(self.theme)
        return self.theme

    def to_dict(self, tz_name="UTC"):
        return {
            "display": self.display.buffer,
            "state": self.display.state.value,
            "theme": self.theme,
            "history": self.history_rows(tz_name),
        }
