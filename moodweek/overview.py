"""
Mood overview assembly: fetch → score → aggregate → weekday insights.

This is the only module that talks to a RecordStore. The six reads are
independent, so they are issued together on a thread pool and joined once
before any computation starts. Store failures propagate to the caller.
"""

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from moodweek.config import MoodweekConfig
from moodweek.grouping import local_date, resolve_timezone, to_instant
from moodweek.insights import compute_weekday_insights
from moodweek.models import (
    Category,
    CategoryMoodSummary,
    DayActivity,
    DayRecord,
    EventPeriod,
    MoodDistributionItem,
    MoodOverview,
    MoodState,
    TrendPoint,
)
from moodweek.scoring import (
    average_score,
    build_score_map,
    resolve_day_scores,
    round_half_up,
)
from moodweek.store import RecordStore

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Distribution
# ---------------------------------------------------------------------------

def compute_mood_distribution(
    days_with_mood: Sequence[DayRecord],
    mood_states: Sequence[MoodState],
) -> List[MoodDistributionItem]:
    """Count days per mood state, most frequent first (ties keep first-seen order)."""
    definitions = {s.id: s for s in mood_states}
    counts: Dict[str, int] = {}
    for day in days_with_mood:
        if day.mood_state_id is None:
            continue
        counts[day.mood_state_id] = counts.get(day.mood_state_id, 0) + 1

    total = len(days_with_mood)
    items = []
    for mood_id, count in sorted(counts.items(), key=lambda kv: kv[1], reverse=True):
        state = definitions.get(mood_id)
        items.append(MoodDistributionItem(
            mood_id=mood_id,
            mood_name=state.name if state else None,
            color=state.color if state else None,
            count=count,
            percentage=int(round_half_up(count / total * 100)) if total > 0 else 0,
        ))
    return items


# ---------------------------------------------------------------------------
# Best / worst category
# ---------------------------------------------------------------------------

def compute_category_extremes(
    categories: Sequence[Category],
    days_with_mood: Sequence[DayRecord],
    score_map: Mapping[str, int],
    tz: str,
    today: date,
    decimals: int = 1,
) -> Tuple[Optional[CategoryMoodSummary], Optional[CategoryMoodSummary]]:
    """
    Rank categories by the average mood of days inside their event periods.

    A day belongs to a category when its local calendar date falls within
    any [start, end] period (inclusive, open periods end today). The worst
    category is None when it would repeat the best one.
    """
    day_dates = [(local_date(d.date, tz), d) for d in days_with_mood]
    summaries: List[CategoryMoodSummary] = []

    for cat in categories:
        ranges = [
            (
                local_date(p.start_date, tz),
                today if p.end_date is None else local_date(p.end_date, tz),
            )
            for p in cat.periods
        ]
        if not ranges:
            continue

        members = [
            day for day_date, day in day_dates
            if any(start <= day_date <= end for start, end in ranges)
        ]
        avg = average_score(members, score_map, decimals)
        if avg is not None:
            summaries.append(CategoryMoodSummary(
                category_id=cat.id, name=cat.name, average_mood_score=avg,
            ))

    if not summaries:
        return None, None

    ranked = sorted(summaries, key=lambda s: s.average_mood_score, reverse=True)
    best, worst = ranked[0], ranked[-1]
    if len(ranked) == 1 or best.category_id == worst.category_id:
        worst = None
    return best, worst


# ---------------------------------------------------------------------------
# 30-day trend
# ---------------------------------------------------------------------------

def local_midnight(day: date, tz) -> pd.Timestamp:
    """Start of a local calendar day; a midnight skipped by DST shifts to the first valid instant."""
    return pd.Timestamp(day).tz_localize(tz, nonexistent="shift_forward", ambiguous=True)


def trend_window(now: pd.Timestamp, days: int) -> Tuple[pd.Timestamp, pd.Timestamp]:
    """[start of day `days` ago, end of today] in the timezone of `now`."""
    today = now.date()
    start = local_midnight(today - timedelta(days=days), now.tz)
    end = local_midnight(today + timedelta(days=1), now.tz) - pd.Timedelta(milliseconds=1)
    return start, end


def compute_trend(
    recent_days: Sequence[DayRecord],
    score_map: Mapping[str, int],
    tz: str,
) -> List[TrendPoint]:
    """Local-date score points; unresolved or non-positive scores are dropped."""
    points = []
    for day in sorted(recent_days, key=lambda d: to_instant(d.date)):
        score = score_map.get(day.mood_state_id, 0) if day.mood_state_id else 0
        if score > 0:
            points.append(TrendPoint(date=local_date(day.date, tz).isoformat(), score=score))
    return points


# ---------------------------------------------------------------------------
# Activity series
# ---------------------------------------------------------------------------

def derive_day_activity(
    days: Sequence[DayRecord],
    periods: Sequence[EventPeriod],
    tz: str,
    today: date,
) -> List[DayActivity]:
    """
    Activity per day = media attached + periods started + periods closed
    on that local date. Days after `today` are left out.
    """
    started = Counter(local_date(p.start_date, tz) for p in periods)
    closed = Counter(local_date(p.end_date, tz) for p in periods if p.end_date is not None)

    activity = []
    for day in days:
        day_date = local_date(day.date, tz)
        if day_date > today:
            continue
        activity.append(DayActivity(
            date=day.date,
            activity_score=day.media_count + started[day_date] + closed[day_date],
        ))
    return activity


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------

def _local_now(now: Optional[datetime], tz: str, today: Optional[date] = None) -> pd.Timestamp:
    if today is not None:
        return pd.Timestamp(datetime.combine(today, time(12))).tz_localize(
            tz, nonexistent="shift_forward", ambiguous=True,
        )
    if now is None:
        return pd.Timestamp.now(tz=tz)
    return to_instant(now).tz_convert(tz)


def build_mood_overview(
    store: RecordStore,
    cfg: Optional[MoodweekConfig] = None,
    now: Optional[datetime] = None,
    today: Optional[date] = None,
) -> MoodOverview:
    """
    Assemble the full mood overview report for one user.

    `today` pins the local calendar date (noon in the user's zone) and wins
    over `now`, which is an instant converted into that zone.
    """
    if cfg is None:
        cfg = MoodweekConfig()
    op = cfg.overview

    tz = resolve_timezone(store.timezone(), op.default_timezone)
    local_now = _local_now(now, tz, today)
    today = local_now.date()
    start, end = trend_window(local_now, op.trend_window_days)

    with ThreadPoolExecutor(max_workers=op.max_workers) as pool:
        futures = {
            "mood_states": pool.submit(store.mood_states),
            "days_with_mood": pool.submit(store.days_with_mood),
            "categories": pool.submit(store.categories_with_periods),
            "days_with_media": pool.submit(store.days_with_media),
            "periods": pool.submit(store.event_periods),
            "recent": pool.submit(
                store.days_with_mood_in_range, start.to_pydatetime(), end.to_pydatetime(),
            ),
        }
        fetched = {name: f.result() for name, f in futures.items()}

    days_with_mood = fetched["days_with_mood"]
    score_map = build_score_map(fetched["mood_states"])
    decimals = cfg.rounding.mean_decimals

    logger.debug(
        "Overview for tz=%s: %d mood states, %d days with mood, %d categories",
        tz, len(score_map), len(days_with_mood), len(fetched["categories"]),
    )

    avg = average_score(days_with_mood, score_map, decimals)
    best_category, worst_category = compute_category_extremes(
        fetched["categories"], days_with_mood, score_map, tz, today, decimals,
    )

    weekday_insights = compute_weekday_insights(
        day_scores=resolve_day_scores(days_with_mood, score_map),
        day_activity=derive_day_activity(
            fetched["days_with_media"], fetched["periods"], tz, today,
        ),
        global_average=avg if avg is not None else 0.0,
        tz=tz,
        cfg=cfg,
    )

    return MoodOverview(
        total_days_with_mood=len(days_with_mood),
        average_mood_score=avg if avg is not None else 0.0,
        mood_distribution=compute_mood_distribution(days_with_mood, fetched["mood_states"]),
        best_category=best_category,
        worst_category=worst_category,
        trend_last_30_days=compute_trend(fetched["recent"], score_map, tz),
        weekday_insights=weekday_insights,
    )
