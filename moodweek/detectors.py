"""
Pattern detectors over the weekday-grouped mood series.

Each detector is a pure function that returns a structured insight.
No side effects.
"""

from typing import Sequence

import numpy as np

from moodweek.config import MoodweekConfig
from moodweek.grouping import weekday_frame
from moodweek.models import BurnoutInsight, BurnoutPatternType, DayScore
from moodweek.scoring import round_half_up


# ---------------------------------------------------------------------------
# Burnout pattern (work stress)
# ---------------------------------------------------------------------------

def compute_burnout_pattern(
    days: Sequence[DayScore],
    tz: str,
    global_average: float,
    cfg: MoodweekConfig,
) -> BurnoutInsight:
    """
    Detect the Monday-low / Friday-high pattern.

    Fires when the Monday mean sits more than `margin` below the global
    average AND the Friday mean sits more than `margin` above it. Both
    buckets need `min_weekday_entries` samples; otherwise nothing is
    detected.

    Confidence blends sample size (saturating at `sample_saturation` days)
    with how far past the margins the two means are (saturating at
    `gap_saturation` points), clamped to [0, 1].
    """
    bp = cfg.burnout
    min_entries = cfg.thresholds.min_weekday_entries

    frame = weekday_frame(days, "score", tz)
    early = frame.loc[frame["weekday"] == bp.early_weekday, "value"]
    late = frame.loc[frame["weekday"] == bp.late_weekday, "value"]

    if len(early) < min_entries or len(late) < min_entries:
        return BurnoutInsight(detected=False)

    early_mean = float(early.mean())
    late_mean = float(late.mean())

    detected = (
        early_mean < global_average - bp.margin
        and late_mean > global_average + bp.margin
    )
    if not detected:
        return BurnoutInsight(detected=False)

    sample_factor = min(1.0, (len(early) + len(late)) / bp.sample_saturation)
    gap_excess = (
        (global_average - early_mean - bp.margin)
        + (late_mean - global_average - bp.margin)
    )
    gap_magnitude = min(1.0, gap_excess / bp.gap_saturation)

    raw = round_half_up(
        sample_factor * bp.sample_weight + gap_magnitude * bp.gap_weight,
        cfg.rounding.spread_decimals,
    )

    return BurnoutInsight(
        detected=True,
        type=BurnoutPatternType.WORK_STRESS,
        confidence=float(np.clip(raw, 0.0, 1.0)),
    )
