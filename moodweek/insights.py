"""
Weekday insights orchestration: gate → run generators → assemble.

The composite gate only decides whether the generators run at all; each
field can still come back None under its own generator's threshold.
"""

import logging
from typing import Optional, Sequence

from moodweek.config import MoodweekConfig
from moodweek.detectors import compute_burnout_pattern
from moodweek.models import DayActivity, DayScore, WeekdayInsights
from moodweek.signals import (
    compute_activity_days,
    compute_best_worst_mood_day,
    compute_most_unstable_day,
    compute_recovery_index,
)

logger = logging.getLogger(__name__)


def compute_weekday_insights(
    day_scores: Sequence[DayScore],
    day_activity: Sequence[DayActivity],
    global_average: float,
    tz: str,
    cfg: Optional[MoodweekConfig] = None,
) -> Optional[WeekdayInsights]:
    """Return the composite, or None when there are too few scored days."""
    if cfg is None:
        cfg = MoodweekConfig()

    needed = cfg.thresholds.min_total_days
    if len(day_scores) < needed:
        logger.debug(
            "Weekday insights skipped: %d scored days, need %d",
            len(day_scores), needed,
        )
        return None

    best, worst = compute_best_worst_mood_day(day_scores, tz, cfg)
    most, least = compute_activity_days(day_activity, tz, cfg)
    unstable = compute_most_unstable_day(day_scores, tz, cfg)
    recovery = compute_recovery_index(day_scores, tz, cfg)
    burnout = compute_burnout_pattern(day_scores, tz, global_average, cfg)

    logger.debug(
        "Weekday insights: best=%s worst=%s most=%s least=%s unstable=%s "
        "recovery=%s burnout=%s",
        best and best.weekday, worst and worst.weekday,
        most and most.weekday, least and least.weekday,
        unstable and unstable.weekday, recovery and recovery.weekday,
        burnout.detected,
    )

    return WeekdayInsights(
        best_mood_day=best,
        worst_mood_day=worst,
        most_active_day=most,
        least_active_day=least,
        most_unstable_day=unstable,
        recovery_index=recovery,
        burnout_pattern=burnout,
    )
