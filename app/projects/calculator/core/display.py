"""
Input state machine for the calculator display.
"""
import enum
import re

from app.projects.calculator.core.constants import OPERATORS, SENTINELS
from app.projects.calculator.core.normalizer import ends_with_operator

_SEGMENT_SPLIT_RE = re.compile(r"[+\-*/%]")


class DisplayState(enum.Enum):
    EMPTY = "empty"
    HAS_DIGITS = "has-digits"
    HAS_TRAILING_OPERATOR = "has-trailing-operator"
    ERROR_SENTINEL = "error-sentinel"


class CalculatorDisplay:
    """
    Holds the expression buffer and applies keystrokes to it.

    The buffer never starts with `+`, `*` or `/` and never gets two operators
    in a row; a new operator replaces a trailing one.
    """

    def __init__(self, buffer: str = ""):
        self.buffer = buffer or ""

    def __repr__(self):
        return f"<CalculatorDisplay {self.buffer!r}>"

    @property
    def state(self) -> DisplayState:
        if self.buffer in SENTINELS:
            return DisplayState.ERROR_SENTINEL
        if not self.buffer:
            return DisplayState.EMPTY
        if ends_with_operator(self.buffer):
            return DisplayState.HAS_TRAILING_OPERATOR
        return DisplayState.HAS_DIGITS

    @property
    def is_empty(self) -> bool:
        return not self.buffer.strip()

    def current_segment(self) -> str:
        """Text since the last operator (or percent sign)."""
        return _SEGMENT_SPLIT_RE.split(self.buffer)[-1]

    def append(self, value: str) -> bool:
        """Apply one keystroke. Returns False if the keystroke was rejected."""
        if self.state == DisplayState.ERROR_SENTINEL:
            self.buffer = ""

        if value in OPERATORS:
            return self._append_operator(value)

        if value == ".":
            segment = self.current_segment()
            if "." in segment:
                return False
            if segment == "":
                self.buffer += "0"

        self.buffer += value
        return True

    def _append_operator(self, op: str) -> bool:
        if not self.buffer and op != "-":
            return False
        if ends_with_operator(self.buffer):
            if len(self.buffer) == 1 and op != "-":
                # only a negative sign so far; "+", "*" or "/" would lead
                return False
            self.buffer = self.buffer[:-1] + op
            return True
        self.buffer += op
        return True

    def delete_last(self) -> None:
        if self.state == DisplayState.ERROR_SENTINEL:
            self.buffer = ""
            return
        self.buffer = self.buffer[:-1]

    def clear(self) -> None:
        self.buffer = ""

    def show(self, text: str) -> None:
        """Replace the buffer with an evaluation result or sentinel."""
        self.buffer = text
