"""
Weekday signals: mood averages, activity averages, volatility, recovery.

Each generator is a pure function over a record series and a timezone.
Buckets are visited in weekday order (0=Monday … 6=Sunday); a bucket that
falls short of its minimum sample size is skipped, and a generator with no
qualifying bucket returns None.
"""

from typing import Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from moodweek.config import MoodweekConfig
from moodweek.grouping import weekday_frame
from moodweek.models import (
    ActivityInsight,
    DayActivity,
    DayScore,
    RecoveryInsight,
    VolatilityInsight,
    WeekdayInsight,
)
from moodweek.scoring import round_half_up


def _weekday_means(frame: pd.DataFrame, min_entries: int) -> pd.DataFrame:
    """Per-weekday mean and count, restricted to buckets with enough entries."""
    stats = frame.groupby("weekday")["value"].agg(["mean", "count"])
    return stats[stats["count"] >= min_entries]


# ---------------------------------------------------------------------------
# Best / worst mood weekday
# ---------------------------------------------------------------------------

def compute_best_worst_mood_day(
    days: Sequence[DayScore],
    tz: str,
    cfg: MoodweekConfig,
) -> Tuple[Optional[WeekdayInsight], Optional[WeekdayInsight]]:
    """
    Highest and lowest average mood weekday.

    With a single qualifying weekday, best and worst are the same insight.
    """
    frame = weekday_frame(days, "score", tz)
    if frame.empty:
        return None, None

    stats = _weekday_means(frame, cfg.thresholds.min_weekday_entries)
    insights = [
        WeekdayInsight(
            weekday=int(weekday),
            average_score=round_half_up(float(row["mean"]), cfg.rounding.mean_decimals),
            sample_size=int(row["count"]),
        )
        for weekday, row in stats.iterrows()
    ]
    if not insights:
        return None, None

    ranked = sorted(insights, key=lambda i: i.average_score, reverse=True)
    return ranked[0], ranked[-1]


# ---------------------------------------------------------------------------
# Most / least active weekday
# ---------------------------------------------------------------------------

def compute_activity_days(
    days: Sequence[DayActivity],
    tz: str,
    cfg: MoodweekConfig,
) -> Tuple[Optional[ActivityInsight], Optional[ActivityInsight]]:
    """Highest and lowest average activity weekday."""
    frame = weekday_frame(days, "activity_score", tz)
    if frame.empty:
        return None, None

    stats = _weekday_means(frame, cfg.thresholds.min_weekday_entries)
    insights = [
        ActivityInsight(
            weekday=int(weekday),
            average_activity_score=round_half_up(float(row["mean"]), cfg.rounding.mean_decimals),
            sample_size=int(row["count"]),
        )
        for weekday, row in stats.iterrows()
    ]
    if not insights:
        return None, None

    ranked = sorted(insights, key=lambda i: i.average_activity_score, reverse=True)
    return ranked[0], ranked[-1]


# ---------------------------------------------------------------------------
# Volatility
# ---------------------------------------------------------------------------

def compute_most_unstable_day(
    days: Sequence[DayScore],
    tz: str,
    cfg: MoodweekConfig,
) -> Optional[VolatilityInsight]:
    """
    Weekday with the highest mood spread.

    Population standard deviation (ddof=0). Ties keep the earliest weekday.
    """
    frame = weekday_frame(days, "score", tz)
    if frame.empty:
        return None

    best: Optional[VolatilityInsight] = None
    best_sd = -1.0

    for weekday, values in frame.groupby("weekday")["value"]:
        if len(values) < cfg.thresholds.min_volatility_entries:
            continue

        sd = float(np.std(values.to_numpy(dtype=np.float64), ddof=0))
        if sd > best_sd:
            best_sd = sd
            best = VolatilityInsight(
                weekday=int(weekday),
                standard_deviation=round_half_up(sd, cfg.rounding.spread_decimals),
                sample_size=len(values),
            )

    return best


# ---------------------------------------------------------------------------
# Recovery index
# ---------------------------------------------------------------------------

def compute_recovery_index(
    days: Sequence[DayScore],
    tz: str,
    cfg: MoodweekConfig,
) -> Optional[RecoveryInsight]:
    """
    Weekday that most often rebounds from the previous day.

    For each pair of consecutive calendar days (gap within tolerance), the
    pair is attributed to the weekday of the LATER day. A rebound is a rise
    of at least `min_rebound` points. Tuesday's rate therefore measures how
    often a Monday was followed by a rebound. Non-consecutive pairs are
    skipped entirely.
    """
    if len(days) < cfg.thresholds.min_recovery_records:
        return None

    rp = cfg.recovery
    frame = weekday_frame(days, "score", tz).sort_values("date", kind="mergesort")

    gap_days = frame["date"].diff().dt.total_seconds() / 86400.0
    rise = frame["value"].diff()

    pairs = frame.assign(
        event=(rise > 0) & (rise >= rp.min_rebound),
    )[gap_days.between(rp.min_gap_days, rp.max_gap_days)]

    if pairs.empty:
        return None

    per_weekday = pairs.groupby("weekday").agg(
        total=("event", "size"),
        events=("event", "sum"),
    )

    best: Optional[RecoveryInsight] = None
    best_rate = -1.0

    for weekday, row in per_weekday.iterrows():
        total = int(row["total"])
        if total < cfg.thresholds.min_weekday_entries:
            continue

        events = int(row["events"])
        rate = events / total
        if rate > best_rate:
            best_rate = rate
            best = RecoveryInsight(
                weekday=int(weekday),
                recovery_rate=round_half_up(rate, cfg.rounding.spread_decimals),
                recovery_events=events,
                total_occurrences=total,
            )

    return best
