"""
Weekday grouping: maps dated records onto local ISO weekdays (0=Monday … 6=Sunday).

Dates are absolute instants. A naive datetime or a plain calendar date is read
as UTC, then converted to the user's timezone before the weekday is taken, so
the same (date, timezone) pair always lands in the same bucket.
"""

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pandas as pd

from moodweek.models import DateLike

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)


# ---------------------------------------------------------------------------
# Timezone handling
# ---------------------------------------------------------------------------

def resolve_timezone(tz: Optional[str], default: str = "UTC") -> str:
    """Return a usable IANA identifier; missing or unknown zones fall back to default."""
    if not tz:
        return default
    try:
        ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, falling back to %s", tz, default)
        return default
    return tz


# ---------------------------------------------------------------------------
# Single-instant helpers
# ---------------------------------------------------------------------------

def to_instant(value: DateLike) -> pd.Timestamp:
    """Normalize a date, datetime or ISO string to a tz-aware UTC timestamp."""
    ts = pd.Timestamp(value)
    if ts.tzinfo is None:
        return ts.tz_localize("UTC")
    return ts.tz_convert("UTC")


def weekday_index(value: DateLike, tz: str) -> int:
    """ISO weekday minus one of the local calendar day: 0=Monday … 6=Sunday."""
    return int(to_instant(value).tz_convert(tz).dayofweek)


def local_date(value: DateLike, tz: str) -> date:
    """Local calendar day of an instant."""
    return to_instant(value).tz_convert(tz).date()


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------

def group_by_weekday(records: Iterable, tz: str) -> Dict[int, List]:
    """Partition records by local weekday. Encounter order is kept within a bucket."""
    groups: Dict[int, List] = {}
    for record in records:
        groups.setdefault(weekday_index(record.date, tz), []).append(record)
    return groups


def weekday_frame(records: Sequence, value_attr: str, tz: str) -> pd.DataFrame:
    """
    Tabulate records for vectorized aggregation.

    Columns:
        date     local tz-aware timestamp
        value    the record attribute named by `value_attr`
        weekday  0=Monday … 6=Sunday
    """
    instants = pd.DatetimeIndex([to_instant(r.date) for r in records], tz="UTC")
    df = pd.DataFrame({
        "date": instants.tz_convert(tz),
        "value": pd.Series([getattr(r, value_attr) for r in records], dtype="float64"),
    })
    df["weekday"] = df["date"].dt.dayofweek
    return df
