"""
History entries and the rows the history panel renders from them.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from zoneinfo import ZoneInfo


@dataclass(frozen=True)
class HistoryEntry:
    expression: str
    result: str
    timestamp: datetime

    def to_dict(self) -> dict:
        return {
            "expr": self.expression,
            "result": self.result,
            "time": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HistoryEntry":
        """Build an entry from its stored form. Raises ValueError/KeyError/TypeError on bad data."""
        timestamp = datetime.fromisoformat(data["time"])
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return cls(
            expression=str(data["expr"]),
            result=str(data["result"]),
            timestamp=timestamp,
        )


def push_entry(entries: list, entry: HistoryEntry, limit: int) -> list:
    """Newest first; anything past the limit is dropped from the old end."""
    entries.insert(0, entry)
    del entries[limit:]
    return entries


def format_timestamp(dt: datetime, tz_name: str = "UTC") -> str:
    """Format as 'Jan 23, 2026 3:45 PM' in the given time zone."""
    if dt is None:
        return ''
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    local_dt = dt.astimezone(ZoneInfo(tz_name or 'UTC'))
    return local_dt.strftime('%b %-d, %Y %-I:%M %p')


def history_rows(entries, tz_name: str = "UTC") -> list[dict]:
    """One row per entry for the history panel; `index` is what restore takes."""
    return [
        {
            "index": index,
            "expression": entry.expression,
            "result": entry.result,
            "time": format_timestamp(entry.timestamp, tz_name),
        }
        for index, entry in enumerate(entries)
    ]
