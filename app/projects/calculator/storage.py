"""
SQLAlchemy-backed history and theme stores for the calculator controller.

Both stores read and write the CalculatorProfile row for one client. Reads
never fail: missing or corrupt data loads as the default. Writes are
fire-and-forget: a database error is logged and rolled back, not raised.
"""
import json
import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from app import db
from app.projects.calculator.core.constants import DEFAULT_THEME, HISTORY_LIMIT, THEMES
from app.projects.calculator.core.history import HistoryEntry
from app.projects.calculator.models import CalculatorProfile

logger = logging.getLogger(__name__)


def get_profile(client_id):
    return CalculatorProfile.query.filter_by(client_id=client_id).first()


def get_or_create_profile(client_id):
    profile = get_profile(client_id)
    if profile is None:
        profile = CalculatorProfile(client_id=client_id)
        db.session.add(profile)
    return profile


def _read_profile(client_id):
    """Profile row or None; a database error reads as a missing profile."""
    try:
        return get_profile(client_id)
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.warning(f"Could not read calculator profile for {client_id}: {e}")
        return None


def _write_profile(action, client_id, **fields):
    """Set columns on the client's profile and commit. Returns False on a database error."""
    try:
        profile = get_or_create_profile(client_id)
        for name, value in fields.items():
            setattr(profile, name, value)
        profile.modified_at = datetime.utcnow()
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.warning(f"Could not {action} for calculator client {client_id}: {e}")
        return False
    return True


def parse_history(raw, limit=HISTORY_LIMIT):
    """Decode stored history JSON. Raises ValueError if it is not a list of entries."""
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError("history is not a list")
    try:
        return [HistoryEntry.from_dict(item) for item in data[:limit]]
    except (KeyError, TypeError) as e:
        raise ValueError(f"bad history entry: {e}") from e


def dump_history(entries, limit=HISTORY_LIMIT):
    return json.dumps([entry.to_dict() for entry in list(entries)[:limit]])


class HistoryStore:

    def __init__(self, client_id, limit=HISTORY_LIMIT):
        self.client_id = client_id
        self.limit = limit

    def load(self):
        profile = _read_profile(self.client_id)
        if profile is None or not profile.history_json:
            return []
        try:
            return parse_history(profile.history_json, self.limit)
        except ValueError as e:
            # json.JSONDecodeError is a ValueError too
            logger.warning(f"Discarding corrupt calculator history for {self.client_id}: {e}")
            return []

    def save(self, entries):
        return _write_profile('save history', self.client_id,
                              history_json=dump_history(entries, self.limit))


class ThemeStore:

    def __init__(self, client_id):
        self.client_id = client_id

    def load(self):
        profile = _read_profile(self.client_id)
        if profile is None or profile.theme not in THEMES:
            return DEFAULT_THEME
        return profile.theme

    def save(self, theme):
        if theme not in THEMES:
            raise ValueError(f"Unknown theme: {theme}")
        return _write_profile('save theme', self.client_id, theme=theme)
