"""
Pipeline entry points: load → assemble overview → report.

This is the only module with file I/O (payload loading, report formatting).
All analytical logic is delegated to overview, insights, signals, detectors.
"""

import json
from datetime import date, datetime
from pathlib import Path
from typing import Dict, Optional, Union

from moodweek.config import MoodweekConfig
from moodweek.grouping import WEEKDAY_NAMES
from moodweek.overview import build_mood_overview
from moodweek.store import InMemoryRecordStore


# ---------------------------------------------------------------------------
# Data loading (CLI mode only)
# ---------------------------------------------------------------------------

def _with_timezone(payload: Dict, timezone: Optional[str]) -> Dict:
    if timezone is None:
        return payload
    return {**payload, "timezone": timezone}


def load_store(
    filepath: Union[str, Path],
    timezone: Optional[str] = None,
) -> InMemoryRecordStore:
    """Load and validate a journal payload from a JSON file."""
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)

    if not payload:
        raise ValueError("Data file is empty")

    return InMemoryRecordStore.from_payload(_with_timezone(payload, timezone))


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def analyze(
    filepath: Union[str, Path],
    cfg: Optional[MoodweekConfig] = None,
    now: Optional[datetime] = None,
    timezone: Optional[str] = None,
    today: Optional[date] = None,
) -> Dict:
    """
    CLI-compatible entry point.
    Reads a JSON file and returns the overview as a plain dict.
    """
    store = load_store(filepath, timezone)
    return build_mood_overview(store, cfg, now, today).to_dict()


def analyze_data(
    payload: Dict,
    cfg: Optional[MoodweekConfig] = None,
    now: Optional[datetime] = None,
    today: Optional[date] = None,
) -> Dict:
    """
    Backend / UI integration entry point.

    Accepts the JSON payload already decoded. No file system usage.
    """
    if not payload:
        raise ValueError("Input data cannot be empty")

    store = InMemoryRecordStore.from_payload(payload)
    return build_mood_overview(store, cfg, now, today).to_dict()


# ---------------------------------------------------------------------------
# Report generation
# ---------------------------------------------------------------------------

def _day(insight: Optional[Dict]) -> str:
    if insight is None:
        return "n/a"
    return WEEKDAY_NAMES[insight["weekday"]]


def _weekday_lines(wi: Optional[Dict]) -> list:
    if wi is None:
        return ["  Weekday Insights    : not enough data yet"]

    lines = ["  Weekday Insights:"]

    best, worst = wi["best_mood_day"], wi["worst_mood_day"]
    if best is not None:
        lines.append(f"    Best Mood Day     : {_day(best)} (avg {best['average_score']}, n={best['sample_size']})")
        lines.append(f"    Worst Mood Day    : {_day(worst)} (avg {worst['average_score']}, n={worst['sample_size']})")
    else:
        lines.append("    Best/Worst Mood   : n/a")

    most, least = wi["most_active_day"], wi["least_active_day"]
    if most is not None:
        lines.append(f"    Most Active Day   : {_day(most)} (avg {most['average_activity_score']})")
        lines.append(f"    Least Active Day  : {_day(least)} (avg {least['average_activity_score']})")
    else:
        lines.append("    Most/Least Active : n/a")

    unstable = wi["most_unstable_day"]
    if unstable is not None:
        lines.append(f"    Most Unstable Day : {_day(unstable)} (sd {unstable['standard_deviation']})")
    else:
        lines.append("    Most Unstable Day : n/a")

    recovery = wi["recovery_index"]
    if recovery is not None:
        lines.append(
            f"    Recovery Day      : {_day(recovery)} "
            f"({recovery['recovery_events']}/{recovery['total_occurrences']}, "
            f"rate {recovery['recovery_rate']})"
        )
    else:
        lines.append("    Recovery Day      : n/a")

    burnout = wi["burnout_pattern"]
    if burnout["detected"]:
        lines.append(f"    Burnout Pattern   : YES ({burnout['type']}, confidence {burnout['confidence']})")
    else:
        lines.append("    Burnout Pattern   : No")

    return lines


def generate_report(result: Dict) -> str:
    """Format the overview result as a human-readable text report."""
    lines = [
        "MOODWEEK OVERVIEW",
        "=" * 58,
        "",
        f"  Days With Mood      : {result['total_days_with_mood']}",
        f"  Average Mood        : {result['average_mood_score']}",
    ]

    best, worst = result["best_category"], result["worst_category"]
    if best is not None:
        lines.append(f"  Best Category       : {best['name']} ({best['average_mood_score']})")
    if worst is not None:
        lines.append(f"  Worst Category      : {worst['name']} ({worst['average_mood_score']})")

    if result["mood_distribution"]:
        lines.append("")
        lines.append("  Mood Distribution:")
        for item in result["mood_distribution"]:
            name = item["mood_name"] or item["mood_id"]
            lines.append(f"    {name:15s} : {item['count']:4d} ({item['percentage']}%)")

    trend = result["trend_last_30_days"]
    lines.append("")
    if trend:
        scores = " ".join(str(p["score"]) for p in trend)
        lines.append(f"  Trend (30d)         : {trend[0]['date']} .. {trend[-1]['date']}")
        lines.append(f"    {scores}")
    else:
        lines.append("  Trend (30d)         : no scored days")

    lines.append("")
    lines.extend(_weekday_lines(result["weekday_insights"]))

    lines.append("")
    lines.append("=" * 58)
    return "\n".join(lines)
