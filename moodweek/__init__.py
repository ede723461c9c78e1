"""
MOODWEEK v1.0 — Weekday Behavioral Pattern Engine

Turns a mood journal (daily mood states with 0-10 scores, media and event
periods) into a mood overview and weekday-grouped insights.

Core engine is fully stateless and safe for backend/API usage.

Architecture:
    config      — All thresholds and tunables (single source of truth)
    models      — Input records and insight value types
    scoring     — Mood-state → score resolution and averages
    grouping    — Timezone-aware ISO weekday bucketing
    signals     — Best/worst mood, activity, volatility, recovery
    detectors   — Burnout (work stress) pattern
    insights    — Weekday insights orchestration behind the 14-day gate
    store       — RecordStore contract + in-memory implementation
    overview    — Mood overview assembly (concurrent reads, single join)
    pipeline    — Entry points and text report

Public API:
    analyze(filepath)                → CLI mode
    analyze_data(payload)            → UI / backend mode
    build_mood_overview(store)       → custom RecordStore
    compute_weekday_insights(...)    → analytics core only
    generate_report(result)          → formatted report
"""

from moodweek.insights import compute_weekday_insights
from moodweek.overview import build_mood_overview
from moodweek.pipeline import analyze, analyze_data, generate_report

__version__ = "1.0.0"

__all__ = [
    "analyze",
    "analyze_data",
    "build_mood_overview",
    "compute_weekday_insights",
    "generate_report",
]
