"""
Record store contract and an in-memory implementation.

The analytics engine never talks to a database. It reads owner-scoped,
read-only sequences through `RecordStore`; anything that implements these
methods (an ORM repository, an HTTP client, a fixture) can back it.
"""

from datetime import datetime
from typing import Dict, List, Optional, Protocol, Sequence

from moodweek.grouping import to_instant
from moodweek.models import Category, DayRecord, EventPeriod, MoodState


class RecordStore(Protocol):
    """Read-only view of one user's journal."""

    def timezone(self) -> Optional[str]: ...

    def mood_states(self) -> List[MoodState]: ...

    def days_with_mood(self) -> List[DayRecord]: ...

    def days_with_media(self) -> List[DayRecord]: ...

    def event_periods(self) -> List[EventPeriod]: ...

    def categories_with_periods(self) -> List[Category]: ...

    def days_with_mood_in_range(self, start: datetime, end: datetime) -> List[DayRecord]: ...


# ---------------------------------------------------------------------------
# Payload parsing
# ---------------------------------------------------------------------------

REQUIRED_KEYS = {"mood_states", "days"}


def _parse_date(value, where: str) -> datetime:
    if value is None:
        raise ValueError(f"{where}: date is required")
    try:
        return to_instant(value).to_pydatetime()
    except (TypeError, ValueError) as e:
        raise ValueError(f"{where}: invalid date {value!r} ({e})")


def _parse_period(entry: Dict, where: str) -> EventPeriod:
    if "start_date" not in entry:
        raise ValueError(f"{where}: missing 'start_date'")
    end = entry.get("end_date")
    return EventPeriod(
        start_date=_parse_date(entry["start_date"], where),
        end_date=None if end is None else _parse_date(end, where),
    )


def _parse_mood_state(entry: Dict, idx: int) -> MoodState:
    where = f"mood_states[{idx}]"
    try:
        return MoodState(
            id=str(entry["id"]),
            score=int(entry["score"]),
            name=entry.get("name"),
            color=entry.get("color"),
        )
    except KeyError as e:
        raise ValueError(f"{where}: missing {e}")
    except (TypeError, ValueError) as e:
        raise ValueError(f"{where}: invalid score ({e})")


def _parse_day(entry: Dict, idx: int) -> DayRecord:
    where = f"days[{idx}]"
    if "date" not in entry:
        raise ValueError(f"{where}: missing 'date'")
    mood_id = entry.get("mood_state_id")
    try:
        media_count = int(entry.get("media_count", 0))
    except (TypeError, ValueError) as e:
        raise ValueError(f"{where}: invalid media_count ({e})")
    if media_count < 0:
        raise ValueError(f"{where}: media_count must be non-negative, got {media_count}")
    return DayRecord(
        date=_parse_date(entry["date"], where),
        mood_state_id=None if mood_id is None else str(mood_id),
        media_count=media_count,
    )


def _parse_category(entry: Dict, idx: int) -> Category:
    where = f"categories[{idx}]"
    try:
        cat_id, name = str(entry["id"]), str(entry["name"])
    except KeyError as e:
        raise ValueError(f"{where}: missing {e}")
    periods = tuple(
        _parse_period(p, f"{where}.periods[{j}]")
        for j, p in enumerate(entry.get("periods", []))
    )
    return Category(id=cat_id, name=name, periods=periods)


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------

class InMemoryRecordStore:
    """A RecordStore over already-parsed records for a single user."""

    def __init__(
        self,
        mood_states: Sequence[MoodState],
        days: Sequence[DayRecord],
        categories: Sequence[Category] = (),
        extra_periods: Sequence[EventPeriod] = (),
        timezone: Optional[str] = None,
    ):
        self._mood_states = tuple(mood_states)
        self._days = tuple(sorted(days, key=lambda d: to_instant(d.date)))
        self._categories = tuple(categories)
        self._extra_periods = tuple(extra_periods)
        self._timezone = timezone

    @classmethod
    def from_payload(cls, payload: Dict) -> "InMemoryRecordStore":
        """Build a store from a decoded journal payload (timezone, mood_states, days, categories, event_periods)."""
        if not isinstance(payload, dict):
            raise ValueError(f"Payload must be an object, got {type(payload).__name__}")

        missing = REQUIRED_KEYS - set(payload)
        if missing:
            raise ValueError(f"Missing required keys: {missing}")

        return cls(
            mood_states=[_parse_mood_state(e, i) for i, e in enumerate(payload["mood_states"])],
            days=[_parse_day(e, i) for i, e in enumerate(payload["days"])],
            categories=[_parse_category(e, i) for i, e in enumerate(payload.get("categories", []))],
            extra_periods=[
                _parse_period(e, f"event_periods[{i}]")
                for i, e in enumerate(payload.get("event_periods", []))
            ],
            timezone=payload.get("timezone"),
        )

    def timezone(self) -> Optional[str]:
        return self._timezone

    def mood_states(self) -> List[MoodState]:
        return list(self._mood_states)

    def days_with_mood(self) -> List[DayRecord]:
        return [d for d in self._days if d.mood_state_id is not None]

    def days_with_media(self) -> List[DayRecord]:
        return list(self._days)

    def event_periods(self) -> List[EventPeriod]:
        periods = [p for c in self._categories for p in c.periods]
        periods.extend(self._extra_periods)
        return periods

    def categories_with_periods(self) -> List[Category]:
        return list(self._categories)

    def days_with_mood_in_range(self, start: datetime, end: datetime) -> List[DayRecord]:
        lo, hi = to_instant(start), to_instant(end)
        return [d for d in self.days_with_mood() if lo <= to_instant(d.date) <= hi]
