"""
Map browser key names (KeyboardEvent.key) onto calculator actions.
"""
import enum
from typing import NamedTuple, Optional

APPEND_KEYS = set("0123456789+-*/.%() ")


class Action(enum.Enum):
    APPEND = "append"
    EVALUATE = "evaluate"
    DELETE = "delete"
    CLEAR = "clear"


class KeyAction(NamedTuple):
    action: Action
    value: str = ""


_NAMED_KEYS = {
    "Enter": KeyAction(Action.EVALUATE),
    "=": KeyAction(Action.EVALUATE),
    "Backspace": KeyAction(Action.DELETE),
    "Escape": KeyAction(Action.CLEAR),
}


def map_key(key: str) -> Optional[KeyAction]:
    """Return the action for a key, or None if the key is ignored."""
    if not key:
        return None
    if key in _NAMED_KEYS:
        return _NAMED_KEYS[key]
    if len(key) == 1 and key in APPEND_KEYS:
        return KeyAction(Action.APPEND, key)
    return None
