"""
Value types: journal records coming in, insights going out.

All types are frozen; nothing in the engine mutates its inputs. Dates are
absolute instants (tz-aware datetimes, or naive/`date` values read as UTC).
Missing results are `None`, never a sentinel score.
"""

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

DateLike = Union[date, datetime, str]


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MoodState:
    """A user-defined mood category with its 0-10 intensity score."""
    id: str
    score: int
    name: Optional[str] = None
    color: Optional[str] = None


@dataclass(frozen=True)
class DayRecord:
    """One journal day as returned by the record store."""
    date: DateLike
    mood_state_id: Optional[str] = None
    media_count: int = 0


@dataclass(frozen=True)
class EventPeriod:
    start_date: DateLike
    end_date: Optional[DateLike] = None


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    periods: Tuple[EventPeriod, ...] = ()


@dataclass(frozen=True)
class DayScore:
    """A day whose mood state resolved to a score in [0, 10]."""
    date: DateLike
    score: int


@dataclass(frozen=True)
class DayActivity:
    """How much happened on a day: media + event periods opened/closed."""
    date: DateLike
    activity_score: int


# ---------------------------------------------------------------------------
# Insights
# ---------------------------------------------------------------------------

class BurnoutPatternType(str, Enum):
    WORK_STRESS = "work_stress_pattern"


@dataclass(frozen=True)
class WeekdayInsight:
    weekday: int
    average_score: float
    sample_size: int


@dataclass(frozen=True)
class ActivityInsight:
    weekday: int
    average_activity_score: float
    sample_size: int


@dataclass(frozen=True)
class VolatilityInsight:
    weekday: int
    standard_deviation: float
    sample_size: int


@dataclass(frozen=True)
class RecoveryInsight:
    weekday: int
    recovery_rate: float
    recovery_events: int
    total_occurrences: int


@dataclass(frozen=True)
class BurnoutInsight:
    detected: bool
    type: Optional[BurnoutPatternType] = None
    confidence: Optional[float] = None

    def to_dict(self) -> Dict:
        if not self.detected:
            return {"detected": False}
        return {
            "detected": True,
            "type": self.type.value,
            "confidence": self.confidence,
        }


def _optional_dict(item) -> Optional[Dict]:
    return None if item is None else asdict(item)


@dataclass(frozen=True)
class WeekdayInsights:
    """Composite of all five weekday generators. Each field may be None."""

    best_mood_day: Optional[WeekdayInsight]
    worst_mood_day: Optional[WeekdayInsight]
    most_active_day: Optional[ActivityInsight]
    least_active_day: Optional[ActivityInsight]
    most_unstable_day: Optional[VolatilityInsight]
    recovery_index: Optional[RecoveryInsight]
    burnout_pattern: BurnoutInsight

    def to_dict(self) -> Dict:
        return {
            "best_mood_day": _optional_dict(self.best_mood_day),
            "worst_mood_day": _optional_dict(self.worst_mood_day),
            "most_active_day": _optional_dict(self.most_active_day),
            "least_active_day": _optional_dict(self.least_active_day),
            "most_unstable_day": _optional_dict(self.most_unstable_day),
            "recovery_index": _optional_dict(self.recovery_index),
            "burnout_pattern": self.burnout_pattern.to_dict(),
        }


# ---------------------------------------------------------------------------
# Overview report
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MoodDistributionItem:
    mood_id: str
    mood_name: Optional[str]
    color: Optional[str]
    count: int
    percentage: int


@dataclass(frozen=True)
class CategoryMoodSummary:
    category_id: str
    name: str
    average_mood_score: float


@dataclass(frozen=True)
class TrendPoint:
    date: str    # local ISO date
    score: int


@dataclass(frozen=True)
class MoodOverview:
    total_days_with_mood: int
    average_mood_score: float
    mood_distribution: List[MoodDistributionItem] = field(default_factory=list)
    best_category: Optional[CategoryMoodSummary] = None
    worst_category: Optional[CategoryMoodSummary] = None
    trend_last_30_days: List[TrendPoint] = field(default_factory=list)
    weekday_insights: Optional[WeekdayInsights] = None

    def to_dict(self) -> Dict:
        return {
            "total_days_with_mood": self.total_days_with_mood,
            "average_mood_score": self.average_mood_score,
            "mood_distribution": [asdict(m) for m in self.mood_distribution],
            "best_category": _optional_dict(self.best_category),
            "worst_category": _optional_dict(self.worst_category),
            "trend_last_30_days": [asdict(t) for t in self.trend_last_30_days],
            "weekday_insights": (
                None if self.weekday_insights is None
                else self.weekday_insights.to_dict()
            ),
        }
